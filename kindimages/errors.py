"""
Error taxonomy for the kind images service.

Every error carries the HTTP status the host adapter answers with, so
handlers can map failures without knowing which module raised them.
"""

from typing import List, Optional


class KindImagesError(Exception):
    """Base class for all service errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# Command execution errors


class CommandError(KindImagesError):
    """An external command could not produce a usable result."""

    status_code = 502

    def __init__(self, message: str, args: Optional[List[str]] = None):
        super().__init__(message)
        self.command = list(args or [])


class SpawnFailed(CommandError):
    """The external command could not be started."""


class NonZeroExit(CommandError):
    """The external command ran but exited with a nonzero status."""

    def __init__(self, args: List[str], returncode: int, stderr: str = ""):
        detail = stderr.strip()
        message = f"{' '.join(args)} exited with status {returncode}"
        if detail:
            message += f": {detail}"
        super().__init__(message, args)
        self.returncode = returncode
        self.stderr = stderr


class TimedOut(CommandError):
    """The external command did not finish within its timeout."""

    status_code = 504

    def __init__(self, args: List[str], timeout: float):
        super().__init__(f"{' '.join(args)} timed out after {timeout}s", args)
        self.timeout = timeout


class ParseFailed(KindImagesError):
    """Command output did not match the expected JSON shape."""

    status_code = 502


# Action errors


class ActionError(KindImagesError):
    """An action request could not be carried out."""

    status_code = 400


class UnhandledAction(ActionError):
    def __init__(self, action_name: str):
        super().__init__(f"unhandled action: {action_name}")
        self.action_name = action_name


class PayloadError(ActionError):
    """Missing or malformed action payload field."""

    status_code = 422

    def __init__(self, key: str, reason: str):
        super().__init__(f"payload field '{key}' {reason}")
        self.key = key


class AlreadyLoading(ActionError):
    status_code = 409

    def __init__(self):
        super().__init__("already loading an image, please wait")


class LoadFailed(ActionError):
    status_code = 502

    def __init__(self, reference: str, cause: Exception):
        super().__init__(f"loadImage {reference}: {cause}")
        self.reference = reference
        self.cause = cause
        if isinstance(cause, TimedOut):
            self.status_code = TimedOut.status_code


class DeleteFailed(ActionError):
    status_code = 502

    def __init__(self, image_id: str, cause: Exception):
        super().__init__(f"deleteImage {image_id}: {cause}")
        self.image_id = image_id
        self.cause = cause
        if isinstance(cause, TimedOut):
            self.status_code = TimedOut.status_code


__all__ = [
    "KindImagesError",
    "CommandError",
    "SpawnFailed",
    "NonZeroExit",
    "TimedOut",
    "ParseFailed",
    "ActionError",
    "UnhandledAction",
    "PayloadError",
    "AlreadyLoading",
    "LoadFailed",
    "DeleteFailed",
]
