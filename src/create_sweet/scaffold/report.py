"""Final pipeline summary rendering."""

from __future__ import annotations

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from create_sweet.console import console as default_console
from create_sweet.scaffold.base import (
    INSTALL_DEPS,
    PipelineResult,
    PipelineStatus,
    StageOutcome,
)

OUTCOME_STYLES: dict[StageOutcome, str] = {
    StageOutcome.OK: "[green]✓ ok[/green]",
    StageOutcome.WARN: "[yellow]⚠ warn[/yellow]",
    StageOutcome.FATAL: "[red]✗ fatal[/red]",
    StageOutcome.SKIPPED: "[dim]- skipped[/dim]",
}


def build_stage_table(result: PipelineResult) -> Table:
    """Build a table with one row per stage report."""
    table = Table(show_header=True, header_style="bold", box=None, pad_edge=False)
    table.add_column("Stage")
    table.add_column("Result")
    table.add_column("Details", overflow="fold")
    for report in result.stage_reports:
        table.add_row(
            report.stage_name,
            OUTCOME_STYLES[report.outcome],
            report.message or "",
        )
    return table


def next_steps(result: PipelineResult, package_manager: str = "pnpm") -> list[str]:
    """Return the commands a user should run next."""
    if result.context is None:
        return []
    install_ok = not any(
        r.outcome == StageOutcome.WARN for r in result.report_for(INSTALL_DEPS)
    ) and any(r.outcome == StageOutcome.OK for r in result.report_for(INSTALL_DEPS))
    steps = [f"[cyan]cd[/cyan] {result.context.project_name}"]
    if install_ok:
        steps.append(f"[cyan]{package_manager} dev[/cyan]  [dim]# Start development[/dim]")
    else:
        steps.append(
            f"[cyan]{package_manager} install[/cyan]  [dim]# Install dependencies[/dim]"
        )
    return steps


def render_summary(
    result: PipelineResult,
    package_manager: str = "pnpm",
    console: Console | None = None,
) -> None:
    """Print the stage summary, warnings with follow-ups, and next steps.

    Aborted runs print only the proximate cause.
    """
    out = console or default_console

    if result.status == PipelineStatus.CANCELLED:
        out.print("[yellow]Operation cancelled.[/yellow]")
        return

    if result.status == PipelineStatus.ABORTED:
        out.print(f"[red]Error: {result.error}[/red]")
        return

    out.print()
    out.print(build_stage_table(result))

    warnings = [r for r in result.warnings if r.follow_up]
    if warnings:
        out.print("\n[yellow]Some steps need your attention:[/yellow]")
        for report in warnings:
            out.print(f"  [dim]•[/dim] {report.stage_name}: {report.follow_up}")

    steps = next_steps(result, package_manager)
    steps.extend(["", "[dim]Your project is ready![/dim]"])
    out.print()
    out.print(Panel("\n".join(steps), title="Next steps", expand=False))
