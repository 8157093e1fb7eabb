"""Tests for git repository initialization."""

from pathlib import Path

import pytest
from conftest import FakeRunner

from create_sweet.executors import CommandNotFoundError, CommandResult
from create_sweet.git import DEFAULT_COMMIT_MESSAGE, GitInitializer
from create_sweet.scaffold import VcsError


def test_initialize_runs_init_add_commit(tmp_path: Path) -> None:
    runner = FakeRunner()
    GitInitializer(runner, timeout=5.0).initialize(tmp_path)

    assert runner.commands == [
        ("git", "init"),
        ("git", "add", "."),
        ("git", "commit", "-m", DEFAULT_COMMIT_MESSAGE),
    ]
    assert all(cwd == tmp_path and timeout == 5.0 for _, cwd, timeout in runner.calls)


def test_commit_message_is_configurable(tmp_path: Path) -> None:
    runner = FakeRunner()
    GitInitializer(runner, commit_message="chore: scaffold").initialize(tmp_path)
    assert runner.commands[-1] == ("git", "commit", "-m", "chore: scaffold")


def test_first_failure_stops_stage(tmp_path: Path) -> None:
    """A failing add does not run commit and is not retried."""
    runner = FakeRunner(
        {
            ("git", "add"): CommandResult(
                args=("git", "add", "."), returncode=128, stderr="fatal: bad"
            )
        }
    )
    with pytest.raises(VcsError, match="git add failed: fatal: bad") as exc_info:
        GitInitializer(runner).initialize(tmp_path)

    assert runner.commands == [("git", "init"), ("git", "add", ".")]
    assert exc_info.value.fatal is False


def test_commit_without_identity(tmp_path: Path) -> None:
    runner = FakeRunner(
        {
            ("git", "commit"): CommandResult(
                args=("git", "commit"),
                returncode=128,
                stderr="Author identity unknown\n*** Please tell me who you are.",
            )
        }
    )
    with pytest.raises(VcsError, match="git commit failed"):
        GitInitializer(runner).initialize(tmp_path)


def test_git_not_installed(tmp_path: Path) -> None:
    runner = FakeRunner({("git",): CommandNotFoundError("Command not found: git")})
    with pytest.raises(VcsError, match="Command not found: git"):
        GitInitializer(runner).initialize(tmp_path)
    assert runner.commands == [("git", "init")]
