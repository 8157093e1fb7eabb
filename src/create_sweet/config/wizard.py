"""Interactive prompts for the scaffold pipeline."""

from __future__ import annotations

from collections.abc import Sequence

import click

from create_sweet.console import console
from create_sweet.scaffold.prompts import NameValidator, PromptCancelled, Prompter
from create_sweet.templates.base import TemplateDescriptor, format_size


class ClickPrompter(Prompter):
    """Prompter backed by click prompts and the rich console.

    Ctrl-C or end of input at any prompt raises PromptCancelled.
    """

    def select_template(self, templates: Sequence[TemplateDescriptor]) -> str:
        """Show a numbered menu and return the chosen template id."""
        console.print("[bold]Pick a starter template:[/bold]")
        for i, template in enumerate(templates, 1):
            hint = template.hint
            if template.estimated_size_bytes:
                hint = f"{hint} · {format_size(template.estimated_size_bytes)}"
            console.print(
                f"  {i}. [cyan]{template.label}[/cyan] [dim]{hint}[/dim]"
            )

        try:
            choice: int = click.prompt(
                "Template",
                default=1,
                type=click.IntRange(1, len(templates)),
            )
        except click.Abort as e:
            raise PromptCancelled() from e
        return templates[choice - 1].id

    def confirm_continue(self, missing: Sequence[str]) -> bool:
        try:
            return click.confirm("Continue anyway?", default=False)
        except click.Abort as e:
            raise PromptCancelled() from e

    def ask_project_name(self, validate: NameValidator) -> str:
        """Prompt until the validator accepts the name."""

        def _check(value: str) -> str:
            value = value.strip()
            error = validate(value)
            if error is not None:
                raise click.UsageError(error)
            return value

        try:
            name: str = click.prompt(
                "What is your project named?",
                # Empty default routes a bare Enter through the validator
                default="",
                show_default=False,
                value_proc=_check,
            )
        except click.Abort as e:
            raise PromptCancelled() from e
        return name

    def confirm_open_editor(self) -> bool:
        try:
            return click.confirm("Open in your editor?", default=True)
        except click.Abort as e:
            raise PromptCancelled() from e


def print_config(data: dict[str, object], sources: list[tuple[str, bool]]) -> None:
    """Display the effective configuration and which files contributed."""
    console.print("\n[bold]Current Effective Configuration:[/bold]")
    for key, value in data.items():
        console.print(f"  {key}: {value}")

    console.print()
    for label, exists in sources:
        if exists:
            console.print(f"  [green]{label}: exists[/green]")
        else:
            console.print(f"  [dim]{label}: not found[/dim]")
