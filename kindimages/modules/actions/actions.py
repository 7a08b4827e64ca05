"""
Action orchestrator for mutating the kind node's image store.

Loading an image is slow and kind does not cope with parallel loads
into the same node, so loads are single-flight behind LoadingState.
Deletes take no guard.
"""

import logging
import threading
from typing import Any, Mapping, Optional

from kindimages.config.provider import ToolsConfig
from kindimages.errors import (
    AlreadyLoading,
    CommandError,
    DeleteFailed,
    LoadFailed,
    PayloadError,
    UnhandledAction,
)
from kindimages.modules.api.models import DELETE_ACTION, LOAD_ACTION
from kindimages.modules.runner import CommandRunner

logger = logging.getLogger("kindimages.actions")


class LoadingState:
    """Process-wide "load in progress" flag."""

    def __init__(self):
        self._lock = threading.Lock()
        self._loading = False

    def is_set(self) -> bool:
        with self._lock:
            return self._loading

    def set(self, value: bool) -> None:
        with self._lock:
            self._loading = bool(value)

    def try_claim(self) -> bool:
        """Atomically flip the flag from false to true. Returns False if already set."""
        with self._lock:
            if self._loading:
                return False
            self._loading = True
            return True

    def release(self) -> None:
        self.set(False)


def payload_string(payload: Any, key: str) -> str:
    """
    Read a required string field from an action payload.

    Raises:
        PayloadError: The payload is not an object, or the field is missing,
            not a string or empty
    """
    if payload is not None and not isinstance(payload, Mapping):
        raise PayloadError(
            key, f"is missing, payload must be an object, got {type(payload).__name__}"
        )
    if payload is None or key not in payload:
        raise PayloadError(key, "is missing")
    value = payload[key]
    if not isinstance(value, str):
        raise PayloadError(key, f"must be a string, got {type(value).__name__}")
    if not value:
        raise PayloadError(key, "must not be empty")
    return value


class ActionOrchestrator:
    """Runs load and delete actions against the kind node."""

    def __init__(
        self,
        runner: CommandRunner,
        tools: ToolsConfig,
        loading_state: Optional[LoadingState] = None,
    ):
        """
        Initialize action orchestrator.

        Args:
            runner: Command runner used for every external call
            tools: Tool names, cluster, kind node and timeouts
            loading_state: Shared loading flag, a fresh one if omitted
        """
        self.runner = runner
        self.tools = tools
        self.loading = loading_state or LoadingState()

    def is_loading(self) -> bool:
        return self.loading.is_set()

    def set_loading(self, value: bool) -> None:
        self.loading.set(value)

    def handle_action(self, action_name: str, payload: Any) -> str:
        """
        Dispatch an action request.

        Args:
            action_name: LOAD_ACTION or DELETE_ACTION
            payload: Request payload, a mapping carrying "imageID"

        Returns:
            The image reference or ID the action was applied to

        Raises:
            AlreadyLoading: A load is already in flight (checked before the payload)
            PayloadError: imageID is missing or malformed
            UnhandledAction: Unknown action name
            LoadFailed, DeleteFailed: The external command failed
        """
        if action_name == LOAD_ACTION:
            if not self.loading.try_claim():
                logger.info("Rejecting load request, a load is already in progress")
                raise AlreadyLoading()
            try:
                image_id = payload_string(payload, "imageID")
            except PayloadError:
                self.loading.release()
                raise
            self.load_image(image_id)
            return image_id

        if action_name == DELETE_ACTION:
            image_id = payload_string(payload, "imageID")
            self.delete_image(image_id)
            return image_id

        raise UnhandledAction(action_name)

    def load_image(self, reference: str) -> None:
        """
        Load a docker image into the kind node.

        The loading flag is set for the duration of the call and cleared
        on every exit path.

        Args:
            reference: Image in repository:tag form, passed to kind as-is

        Raises:
            LoadFailed: kind could not be started, failed or timed out
        """
        self.set_loading(True)
        try:
            cmd = [
                self.tools.kind_bin,
                "load",
                "docker-image",
                reference,
                "--name",
                self.tools.cluster_name,
            ]
            logger.info(f"Loading {reference} into kind cluster {self.tools.cluster_name}")
            try:
                self.runner.run(cmd, timeout=self.tools.load_timeout).raise_for_status()
            except CommandError as e:
                logger.error(f"Failed to load {reference}: {e}")
                raise LoadFailed(reference, e) from e
            logger.info(f"Loaded {reference}")
        finally:
            self.set_loading(False)

    def delete_image(self, image_id: str) -> None:
        """
        Remove an image from the kind node by image ID.

        Raises:
            DeleteFailed: crictl could not be started, failed or timed out
        """
        cmd = self.tools.node_exec("rmi", image_id)
        logger.info(f"Deleting {image_id} from {self.tools.node}")
        try:
            self.runner.run(cmd, timeout=self.tools.command_timeout).raise_for_status()
        except CommandError as e:
            logger.error(f"Failed to delete {image_id}: {e}")
            raise DeleteFailed(image_id, e) from e
        logger.info(f"Deleted {image_id}")
