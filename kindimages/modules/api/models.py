"""
kind-images shared data models.

These models define the structure of all data passed between
components: inventory records read from docker and crictl, and the
request/response bodies of the HTTP interface.
"""

from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Action identifiers

PLUGIN_NAME = "kind-images"
PLUGIN_DESCRIPTION = "kind images plugin"
LOAD_ACTION = "kind-images/load-image"
DELETE_ACTION = "kind-images/delete-image"


class ActionStatus(str, Enum):
    """Outcome of an action request."""

    OK = "ok"
    ERROR = "error"


# Inventory Records


class DockerImageRecord(BaseModel):
    """
    One image from the local docker image store.

    Field names follow the keys of `docker image ls --format={{json .}}`.
    Docker reports every value as a string, sizes included.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    Containers: str = ""
    CreatedAt: str = ""
    CreatedSince: str = ""
    Digest: str = ""
    ID: str = ""
    Repository: str = ""
    SharedSize: str = ""
    Size: str = ""
    Tag: str = ""
    UniqueSize: str = ""
    VirtualSize: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        """Docker may print null for an unset field; it reads as an empty string."""
        return "" if v is None else v

    @property
    def reference(self) -> str:
        """Image reference in repository:tag form, as accepted by kind."""
        return f"{self.Repository}:{self.Tag}"


class KindImageRecord(BaseModel):
    """One image known to the container runtime of the kind node."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: str = ""
    uid: Optional[str] = None
    repo_tags: List[str] = Field(default_factory=list, alias="repoTags")
    repo_digests: List[str] = Field(default_factory=list, alias="repoDigests")
    size: str = ""
    username: str = ""

    @field_validator("uid", mode="before")
    @classmethod
    def flatten_uid(cls, v):
        """CRI encodes the uid as an Int64Value message: {"value": "0"}."""
        if isinstance(v, dict):
            v = v.get("value")
        if v is None:
            return None
        return str(v)

    @field_validator("id", "username", mode="before")
    @classmethod
    def null_to_string(cls, v):
        return "" if v is None else v

    @field_validator("repo_tags", "repo_digests", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        if v is None:
            return []
        if isinstance(v, list):
            return ["" if item is None else item for item in v]
        return v

    @field_validator("size", mode="before")
    @classmethod
    def size_to_string(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return "" if v is None else v


class KindImageList(BaseModel):
    """The document printed by `crictl images --output=json`."""

    model_config = ConfigDict(extra="ignore")

    images: List[KindImageRecord] = Field(default_factory=list)

    @field_validator("images", mode="before")
    @classmethod
    def null_to_empty(cls, v):
        return [] if v is None else v


# Request Models (API Input)


class ActionRequest(BaseModel):
    """Request to perform a plugin action."""

    action_name: str = Field(..., description="Action identifier")
    payload: Any = Field(
        default_factory=dict, description="Action payload, e.g. {'imageID': 'nginx:latest'}"
    )


# Response Models (API Output)


class ActionResponse(BaseModel):
    """Response after an action completed."""

    status: ActionStatus = ActionStatus.OK
    action: str
    image_id: str


class ErrorResponse(BaseModel):
    """Body returned for every failed request."""

    error: str = Field(..., description="Error type, e.g. AlreadyLoading")
    detail: str


class PluginCapabilities(BaseModel):
    """Registration metadata advertised to the host."""

    name: str = PLUGIN_NAME
    description: str = PLUGIN_DESCRIPTION
    action_names: List[str] = Field(default_factory=lambda: [DELETE_ACTION, LOAD_ACTION])
    is_module: bool = True


class Navigation(BaseModel):
    """Navigation entry the host shows for this plugin."""

    title: str = "Local Images"
    path: str = "/images"
    icon_name: str = "storage"


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Health status", pattern="^(healthy|degraded)$")
    loading: bool
    tools: Dict[str, bool] = Field(default_factory=dict, description="Tool found on PATH")
    version: str = "1.0.0"
