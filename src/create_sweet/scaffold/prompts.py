"""Interactive decision points consumed by the pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

from create_sweet.templates.base import TemplateDescriptor

NameValidator = Callable[[str], str | None]


class PromptCancelled(Exception):
    """Raised when the user cancels at a prompt. Not an error."""


class Prompter(ABC):
    """Asks the user for the pipeline's interactive decisions.

    Every method raises PromptCancelled when the user cancels.
    """

    @abstractmethod
    def select_template(self, templates: Sequence[TemplateDescriptor]) -> str:
        """Return the id of the chosen template."""
        ...

    @abstractmethod
    def confirm_continue(self, missing: Sequence[str]) -> bool:
        """Ask whether to proceed despite missing requirements."""
        ...

    @abstractmethod
    def ask_project_name(self, validate: NameValidator) -> str:
        """Ask for a project name until `validate` accepts it."""
        ...

    @abstractmethod
    def confirm_open_editor(self) -> bool:
        """Ask whether to open the new project in an editor."""
        ...
