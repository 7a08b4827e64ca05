"""
Actions Module - Black Box Interface

Purpose: Load images into and delete images from the kind node
Interface: handle_action(), load_image(), delete_image(), is_loading()
Hidden: kind/crictl invocations, single-flight load guard

Can be replaced with any loader that honours the LoadingState contract.
"""

from .actions import ActionOrchestrator, LoadingState, payload_string

__all__ = ["ActionOrchestrator", "LoadingState", "payload_string"]
