"""
View Module - Black Box Interface

Purpose: Render inventory and loading state into display components
Interface: build_overview(snapshot, loading) -> ContentResponse
Hidden: Table layout, row actions, confirmation prompts

Can be replaced with any renderer consuming InventorySnapshot.
"""

from .builder import (
    LOADING_MESSAGE,
    PAGE_TITLE,
    build_docker_table,
    build_kind_table,
    build_overview,
)
from .components import ContentResponse, Table, TableRow, Text

__all__ = [
    "LOADING_MESSAGE",
    "PAGE_TITLE",
    "build_docker_table",
    "build_kind_table",
    "build_overview",
    "ContentResponse",
    "Table",
    "TableRow",
    "Text",
]
