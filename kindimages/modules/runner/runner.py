"""
Subprocess-backed command runner.

Each call spawns one child process, waits for it to exit and returns
the captured output. Nonzero exit codes are returned to the caller, not
raised; use CommandResult.raise_for_status() when a failure should abort.
"""

import logging
import subprocess
from dataclasses import dataclass, field
from typing import List, Optional, Protocol

from kindimages.errors import NonZeroExit, SpawnFailed, TimedOut

logger = logging.getLogger("kindimages.runner")


@dataclass
class CommandResult:
    """Outcome of one external command invocation."""

    args: List[str]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def raise_for_status(self) -> "CommandResult":
        """Raise NonZeroExit if the command failed, otherwise return self."""
        if not self.ok:
            raise NonZeroExit(self.args, self.returncode, self.stderr)
        return self


class CommandRunner(Protocol):
    """Protocol for command runners - allows swappable implementations."""

    def run(self, args: List[str], timeout: Optional[float] = None) -> CommandResult:
        """
        Run a command to completion.

        Args:
            args: Program and arguments, no shell interpretation
            timeout: Seconds to wait before giving up, None for the default

        Returns:
            CommandResult with exit status and captured output

        Raises:
            SpawnFailed: The program could not be started
            TimedOut: The program did not exit in time
        """
        ...


@dataclass
class SubprocessRunner:
    """Runs commands as local child processes."""

    default_timeout: Optional[float] = 30
    env: Optional[dict] = field(default=None, repr=False)

    def run(self, args: List[str], timeout: Optional[float] = None) -> CommandResult:
        timeout = timeout if timeout is not None else self.default_timeout
        cmd = [str(a) for a in args]

        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            process = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                timeout=timeout,
                env=self.env,
            )
        except subprocess.TimeoutExpired:
            logger.error(f"Command timed out after {timeout}s: {' '.join(cmd)}")
            raise TimedOut(cmd, timeout)
        except OSError as e:
            logger.error(f"Failed to start {cmd[0]}: {e}")
            raise SpawnFailed(f"failed to start {cmd[0]}: {e}", cmd) from e

        result = CommandResult(
            args=cmd,
            returncode=process.returncode,
            stdout=process.stdout or "",
            stderr=process.stderr or "",
        )

        if not result.ok:
            logger.warning(
                f"Command exited with status {result.returncode}: {' '.join(cmd)}"
            )

        return result
