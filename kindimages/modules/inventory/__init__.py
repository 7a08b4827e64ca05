"""
Inventory Module - Black Box Interface

Purpose: Read current image state from docker and the kind node
Interface: list_docker_images(), list_kind_images(), snapshot()
Hidden: CLI invocations, JSON-lines and JSON document parsing

Can be replaced with a docker API or CRI gRPC client.
"""

from .inventory import (
    InventoryReader,
    InventoryResult,
    InventorySnapshot,
    parse_docker_images,
    parse_kind_images,
)

__all__ = [
    "InventoryReader",
    "InventoryResult",
    "InventorySnapshot",
    "parse_docker_images",
    "parse_kind_images",
]
