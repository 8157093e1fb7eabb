"""Project name validation."""

import re
from pathlib import Path

from create_sweet.scaffold.base import ValidationError

PROJECT_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


def validate_project_name(name: str, working_directory: Path) -> str | None:
    """Validate a candidate project name.

    Safe to call on every keystroke: it never touches the filesystem beyond
    an existence check.

    Returns:
        None if the name is valid, otherwise a message describing the problem.
    """
    if not name:
        return "Project name is required"
    if not PROJECT_NAME_PATTERN.fullmatch(name):
        return (
            f'Invalid project name "{name}": only letters, numbers, hyphens, '
            "and underscores are allowed"
        )
    target = (working_directory / name).resolve()
    if target.exists():
        return f'Directory "{name}" already exists'
    return None


def ensure_valid_project_name(name: str, working_directory: Path) -> Path:
    """Validate a project name and return its absolute target directory.

    Raises:
        ValidationError: If the name is invalid or the directory exists.
    """
    error = validate_project_name(name, working_directory)
    if error is not None:
        raise ValidationError(error)
    return (working_directory / name).resolve()
