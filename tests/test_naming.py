"""Tests for project name validation."""

from pathlib import Path

import pytest

from create_sweet.scaffold import ValidationError
from create_sweet.scaffold.naming import ensure_valid_project_name, validate_project_name


@pytest.mark.parametrize("name", ["my-app", "App_2", "x", "---", "A1_b-2"])
def test_valid_names(tmp_path: Path, name: str) -> None:
    """Letters, digits, hyphens and underscores are accepted."""
    assert validate_project_name(name, tmp_path) is None


def test_empty_name_is_required(tmp_path: Path) -> None:
    """An empty name is rejected."""
    assert validate_project_name("", tmp_path) == "Project name is required"


@pytest.mark.parametrize(
    "name", ["a/b", "../escape", ".hidden", "has space", "semi;colon", "trail\n"]
)
def test_invalid_characters(tmp_path: Path, name: str) -> None:
    """Disallowed characters are rejected with the value in the message."""
    error = validate_project_name(name, tmp_path)
    assert error is not None
    assert name in error


def test_existing_directory_collides(tmp_path: Path) -> None:
    """A name matching an existing directory is rejected."""
    (tmp_path / "taken").mkdir()
    error = validate_project_name("taken", tmp_path)
    assert error == 'Directory "taken" already exists'


def test_existing_file_collides(tmp_path: Path) -> None:
    """A name matching an existing file is rejected too."""
    (tmp_path / "notes").write_text("x")
    error = validate_project_name("notes", tmp_path)
    assert error is not None
    assert "notes" in error


def test_validation_has_no_side_effects(tmp_path: Path) -> None:
    """Validation never creates the target."""
    validate_project_name("fresh", tmp_path)
    validate_project_name("fresh", tmp_path)
    assert not (tmp_path / "fresh").exists()


def test_ensure_valid_returns_absolute_target(tmp_path: Path) -> None:
    """A valid name resolves to an absolute target path."""
    target = ensure_valid_project_name("my-app", tmp_path)
    assert target == (tmp_path / "my-app").resolve()
    assert target.is_absolute()


def test_ensure_valid_raises(tmp_path: Path) -> None:
    """An invalid name raises ValidationError."""
    with pytest.raises(ValidationError, match="a/b"):
        ensure_valid_project_name("a/b", tmp_path)
