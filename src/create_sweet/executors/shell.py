"""Subprocess-backed command runner."""

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path

from create_sweet.executors.base import (
    CommandNotFoundError,
    CommandResult,
    CommandRunner,
    CommandTimeoutError,
)

logger = logging.getLogger(__name__)


class SubprocessRunner(CommandRunner):
    """Command runner that executes commands in the local shell environment."""

    def run(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        """Run the command and capture its output."""
        cmd = list(args)
        logger.debug("Running %s (cwd=%s, timeout=%s)", cmd, cwd, timeout)
        try:
            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=True,
                text=True,
                timeout=timeout,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(f"Command not found: {cmd[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise CommandTimeoutError(
                f"Command timed out after {timeout}s: {' '.join(cmd)}"
            ) from e
        except OSError as e:
            raise CommandNotFoundError(f"Cannot run {cmd[0]}: {e}") from e

        return CommandResult(
            args=tuple(cmd),
            returncode=result.returncode,
            stdout=result.stdout or "",
            stderr=result.stderr or "",
        )

    def spawn(self, args: Sequence[str]) -> None:
        """Start the command detached from our stdio."""
        cmd = list(args)
        logger.debug("Spawning %s", cmd)
        try:
            subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            raise CommandNotFoundError(f"Cannot run {cmd[0]}: {e}") from e
