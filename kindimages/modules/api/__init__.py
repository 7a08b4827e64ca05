"""
API Module - Black Box Interface

Purpose: Shared data models and HTTP request/response shapes
Interface: Pydantic models and action identifiers
Hidden: Field aliasing and normalization of tool output

The API module only describes data - it contains no business logic.
"""

from .models import (
    DELETE_ACTION,
    LOAD_ACTION,
    PLUGIN_DESCRIPTION,
    PLUGIN_NAME,
    ActionRequest,
    ActionResponse,
    ActionStatus,
    DockerImageRecord,
    ErrorResponse,
    HealthResponse,
    KindImageList,
    KindImageRecord,
    Navigation,
    PluginCapabilities,
)

__all__ = [
    "LOAD_ACTION",
    "DELETE_ACTION",
    "PLUGIN_NAME",
    "PLUGIN_DESCRIPTION",
    "ActionRequest",
    "ActionResponse",
    "ActionStatus",
    "DockerImageRecord",
    "ErrorResponse",
    "HealthResponse",
    "KindImageList",
    "KindImageRecord",
    "Navigation",
    "PluginCapabilities",
]
