"""Git repository initialization for a new scaffold."""

from pathlib import Path

from create_sweet.executors import CommandError, CommandRunner
from create_sweet.scaffold.base import VcsError

DEFAULT_COMMIT_MESSAGE = "feat: initial commit from create-sweet"
DEFAULT_GIT_TIMEOUT = 60.0


class GitInitializer:
    """Creates a repository with one commit holding the whole scaffold."""

    def __init__(
        self,
        runner: CommandRunner,
        commit_message: str = DEFAULT_COMMIT_MESSAGE,
        timeout: float | None = DEFAULT_GIT_TIMEOUT,
    ) -> None:
        self._runner = runner
        self._commit_message = commit_message
        self._timeout = timeout

    def commands(self) -> list[list[str]]:
        """Return the git commands run, in order."""
        return [
            ["git", "init"],
            ["git", "add", "."],
            ["git", "commit", "-m", self._commit_message],
        ]

    def initialize(self, target_directory: Path) -> None:
        """Run init, add, and commit; stop at the first failure.

        Raises:
            VcsError: If any git command cannot run or exits non-zero.
        """
        for cmd in self.commands():
            try:
                result = self._runner.run(cmd, cwd=target_directory, timeout=self._timeout)
            except CommandError as e:
                raise VcsError(str(e)) from e

            if not result.ok:
                detail = result.output_tail(max_lines=2)
                message = f"{' '.join(cmd[:2])} failed"
                if detail:
                    message = f"{message}: {detail}"
                raise VcsError(message)
