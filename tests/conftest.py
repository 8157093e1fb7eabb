"""Shared test doubles for the scaffold pipeline."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from create_sweet.executors import CommandResult, CommandRunner
from create_sweet.scaffold.prompts import NameValidator, PromptCancelled, Prompter
from create_sweet.scaffold.transport import (
    TemplateAddress,
    TemplateTransport,
    TransportError,
)
from create_sweet.templates.base import TemplateDescriptor


class FakeRunner(CommandRunner):
    """Command runner that returns canned results keyed by argv prefix."""

    def __init__(
        self,
        responses: dict[tuple[str, ...], CommandResult | Exception] | None = None,
    ) -> None:
        self.responses = responses or {}
        self.calls: list[tuple[tuple[str, ...], Path | None, float | None]] = []
        self.spawned: list[tuple[str, ...]] = []

    def run(
        self,
        args: Sequence[str],
        cwd: Path | None = None,
        timeout: float | None = None,
    ) -> CommandResult:
        argv = tuple(args)
        self.calls.append((argv, cwd, timeout))
        for prefix in sorted(self.responses, key=len, reverse=True):
            if argv[: len(prefix)] == prefix:
                response = self.responses[prefix]
                if isinstance(response, Exception):
                    raise response
                return response
        return CommandResult(args=argv, returncode=0)

    def spawn(self, args: Sequence[str]) -> None:
        self.spawned.append(tuple(args))

    @property
    def commands(self) -> list[tuple[str, ...]]:
        return [call[0] for call in self.calls]


class FakeTransport(TemplateTransport):
    """Transport that writes a fixed file tree, optionally under a wrapper."""

    def __init__(
        self,
        files: dict[str, str] | None = None,
        error: str | None = None,
        wrap: bool = False,
    ) -> None:
        self.files = files if files is not None else {"package.json": '{"name": "x"}\n'}
        self.error = error
        self.wrap = wrap
        self.requests: list[tuple[TemplateAddress, Path, bool]] = []

    def download(
        self, address: TemplateAddress, target_dir: Path, force: bool = False
    ) -> None:
        self.requests.append((address, target_dir, force))
        target_dir.mkdir(parents=True, exist_ok=True)
        if self.error is not None:
            (target_dir / "partial.txt").write_text("half")
            raise TransportError(self.error)
        base = target_dir
        if self.wrap:
            base = target_dir / address.subpath.rsplit("/", 1)[-1]
        for relative, content in self.files.items():
            path = base / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content)


class FakePrompter(Prompter):
    """Prompter with scripted answers."""

    def __init__(
        self,
        template_id: str | None = "react-vite",
        project_name: str | None = "my-app",
        continue_anyway: bool | None = True,
        open_editor: bool | None = False,
    ) -> None:
        self.template_id = template_id
        self.project_name = project_name
        self.continue_anyway = continue_anyway
        self.open_editor = open_editor
        self.asked: list[str] = []
        self.name_validator: NameValidator | None = None

    def _answer(self, prompt: str, value):
        self.asked.append(prompt)
        if value is None:
            raise PromptCancelled()
        return value

    def select_template(self, templates: Sequence[TemplateDescriptor]) -> str:
        return self._answer("template", self.template_id)

    def confirm_continue(self, missing: Sequence[str]) -> bool:
        return self._answer("continue", self.continue_anyway)

    def ask_project_name(self, validate: Callable[[str], str | None]) -> str:
        self.name_validator = validate
        return self._answer("name", self.project_name)

    def confirm_open_editor(self) -> bool:
        return self._answer("editor", self.open_editor)


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def prompter() -> FakePrompter:
    return FakePrompter()


@pytest.fixture
def template() -> TemplateDescriptor:
    return TemplateDescriptor(
        id="react-vite",
        label="React + Vite",
        hint="React 19 + Vite",
    )
