"""Command runners for external tools."""

from create_sweet.executors.base import (
    CommandError,
    CommandNotFoundError,
    CommandResult,
    CommandRunner,
    CommandTimeoutError,
)
from create_sweet.executors.shell import SubprocessRunner

__all__ = [
    "CommandError",
    "CommandNotFoundError",
    "CommandResult",
    "CommandRunner",
    "CommandTimeoutError",
    "SubprocessRunner",
]
