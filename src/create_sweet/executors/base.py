"""Base command runner class."""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path


class CommandError(Exception):
    """Base exception for external command failures."""


class CommandNotFoundError(CommandError):
    """Raised when a command cannot be spawned (tool absent)."""


class CommandTimeoutError(CommandError):
    """Raised when a command does not finish within its timeout."""


@dataclass(frozen=True)
class CommandResult:
    """Captured outcome of a finished command."""

    args: tuple[str, ...]
    returncode: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def output_tail(self, max_lines: int = 5) -> str:
        """Return the last lines of stderr (or stdout) for error messages."""
        text = self.stderr.strip() or self.stdout.strip()
        lines = text.splitlines()
        return "\n".join(lines[-max_lines:])


class CommandRunner(ABC):
    """Runs external commands on behalf of pipeline stages."""

    @abstractmethod
    def run(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run a command to completion with captured output.

        A non-zero exit is returned, not raised.

        Raises:
            CommandNotFoundError: If the command cannot be spawned.
            CommandTimeoutError: If the command exceeds the timeout.
        """
        ...

    @abstractmethod
    def spawn(self, args: Sequence[str]) -> None:
        """Start a command without waiting for it or capturing its output."""
        ...
