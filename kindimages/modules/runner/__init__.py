"""
Runner Module - Black Box Interface

Purpose: Execute external command line tools (docker, kind, crictl)
Interface: CommandRunner.run(args, timeout) -> CommandResult
Hidden: Process spawning, output capture, timeout enforcement

Can be replaced with a fake runner in tests or a remote execution backend.
"""

from .runner import CommandResult, CommandRunner, SubprocessRunner

__all__ = ["CommandResult", "CommandRunner", "SubprocessRunner"]
