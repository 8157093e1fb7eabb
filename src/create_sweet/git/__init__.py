"""Git operations for create-sweet."""

from create_sweet.git.operations import (
    DEFAULT_COMMIT_MESSAGE,
    GitInitializer,
)

__all__ = [
    "DEFAULT_COMMIT_MESSAGE",
    "GitInitializer",
]
