"""Dependency installation via the package manager."""

import logging
from pathlib import Path

from create_sweet.executors import CommandError, CommandResult, CommandRunner
from create_sweet.scaffold.base import InstallError

logger = logging.getLogger(__name__)

DEFAULT_PACKAGE_MANAGER = "pnpm"
DEFAULT_INSTALL_TIMEOUT = 600.0


class DependencyInstaller:
    """Runs `<package manager> install` inside the target directory."""

    def __init__(
        self,
        runner: CommandRunner,
        package_manager: str = DEFAULT_PACKAGE_MANAGER,
        timeout: float | None = DEFAULT_INSTALL_TIMEOUT,
    ) -> None:
        self._runner = runner
        self.package_manager = package_manager
        self._timeout = timeout

    @property
    def install_command(self) -> list[str]:
        return [self.package_manager, "install"]

    def install(self, target_directory: Path) -> CommandResult:
        """Install dependencies, capturing the package manager's output.

        Raises:
            InstallError: On spawn failure, timeout, or non-zero exit.
        """
        try:
            result = self._runner.run(
                self.install_command, cwd=target_directory, timeout=self._timeout
            )
        except CommandError as e:
            raise InstallError(str(e)) from e

        if not result.ok:
            detail = result.output_tail()
            message = f"{' '.join(self.install_command)} exited with {result.returncode}"
            if detail:
                message = f"{message}: {detail}"
            raise InstallError(message)

        logger.debug("Dependencies installed in %s", target_directory)
        return result
