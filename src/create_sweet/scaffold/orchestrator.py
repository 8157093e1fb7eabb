"""Scaffold pipeline orchestrator - sequential stage execution."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass
from pathlib import Path

from create_sweet.config.preflight import EnvironmentValidator, print_environment_check
from create_sweet.console import console
from create_sweet.git import GitInitializer
from create_sweet.scaffold.base import (
    FETCH,
    INIT_VCS,
    INSTALL_DEPS,
    NAME_PROJECT,
    NORMALIZE,
    REWRITE_METADATA,
    SELECT_TEMPLATE,
    VALIDATE_ENVIRONMENT,
    InstallError,
    PipelineContext,
    PipelineResult,
    PipelineStatus,
    ScaffoldError,
    StageOutcome,
    StageReport,
    VcsError,
)
from create_sweet.scaffold.fetcher import TemplateFetcher
from create_sweet.scaffold.installer import DependencyInstaller
from create_sweet.scaffold.metadata import rewrite_metadata
from create_sweet.scaffold.naming import ensure_valid_project_name, validate_project_name
from create_sweet.scaffold.normalizer import normalize_directory
from create_sweet.scaffold.prompts import PromptCancelled, Prompter
from create_sweet.templates import TemplateCatalog, TemplateDescriptor, format_size
from create_sweet.templates.catalog import TemplateNotFoundError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineOptions:
    """Toggles for the optional stages."""

    check_environment: bool = True
    rewrite_metadata: bool = True
    install: bool = True
    git: bool = True
    cleanup_on_failure: bool = True


class _Abort(Exception):
    """Internal signal: a fatal stage failed and its report is recorded."""


class PipelineOrchestrator:
    """Runs the scaffold stages in order and applies the fatal/warning policy.

    SelectTemplate, NameProject, Fetch and Normalize failures abort the run.
    Every later stage can only warn, so once the tree is on disk the run
    always completes.
    """

    def __init__(
        self,
        catalog: TemplateCatalog,
        prompter: Prompter,
        environment: EnvironmentValidator,
        fetcher: TemplateFetcher,
        installer: DependencyInstaller,
        git: GitInitializer,
        options: PipelineOptions | None = None,
    ) -> None:
        self._catalog = catalog
        self._prompter = prompter
        self._environment = environment
        self._fetcher = fetcher
        self._installer = installer
        self._git = git
        self._options = options or PipelineOptions()

    def run(
        self,
        working_directory: Path,
        template_id: str | None = None,
        project_name: str | None = None,
    ) -> PipelineResult:
        """Run the pipeline once.

        Args:
            working_directory: Directory the project is created in.
            template_id: Preselected template; prompted for when None.
            project_name: Preselected name; prompted for when None.
        """
        reports: list[StageReport] = []
        context: PipelineContext | None = None
        try:
            template = self._select_template(template_id, reports)
            self._validate_environment(template, reports)
            name, target = self._name_project(project_name, working_directory, reports)

            context = PipelineContext(
                project_name=name,
                target_directory=target,
                template=template,
                stage_reports=reports,
            )
            self._fetch(context)
            self._normalize(context)
        except PromptCancelled:
            logger.debug("Cancelled by user")
            return PipelineResult(PipelineStatus.CANCELLED, reports, context)
        except _Abort:
            failed = reports[-1]
            if context is not None and failed.stage_name in (FETCH, NORMALIZE):
                self._cleanup(context.target_directory)
            return PipelineResult(
                PipelineStatus.ABORTED, reports, context, error=failed.message
            )

        self._rewrite_metadata(context)
        self._install(context)
        self._init_vcs(context)
        return PipelineResult(PipelineStatus.COMPLETED, reports, context)

    def _fatal(
        self, reports: list[StageReport], stage_name: str, error: Exception
    ) -> _Abort:
        reports.append(StageReport(stage_name, StageOutcome.FATAL, str(error)))
        logger.error("%s failed: %s", stage_name, error)
        return _Abort(stage_name)

    def _select_template(
        self, template_id: str | None, reports: list[StageReport]
    ) -> TemplateDescriptor:
        if template_id is None:
            template_id = self._prompter.select_template(self._catalog.list())
        try:
            template = self._catalog.find(template_id)
        except TemplateNotFoundError as e:
            raise self._fatal(reports, SELECT_TEMPLATE, e) from e
        reports.append(StageReport.ok(SELECT_TEMPLATE, template.label))
        return template

    def _validate_environment(
        self, template: TemplateDescriptor, reports: list[StageReport]
    ) -> None:
        if not self._options.check_environment:
            reports.append(StageReport.skipped(VALIDATE_ENVIRONMENT, "disabled"))
            return

        check = self._environment.check(template)
        if check.satisfied:
            reports.append(StageReport.ok(VALIDATE_ENVIRONMENT))
            return

        for requirement in check.missing:
            logger.warning("Missing requirement: %s", requirement)
        reports.append(
            StageReport(
                VALIDATE_ENVIRONMENT,
                StageOutcome.WARN,
                "Missing: " + "; ".join(check.missing),
                follow_up="Install the missing requirements before running the project",
            )
        )
        print_environment_check(check)
        if not self._prompter.confirm_continue(check.missing):
            raise PromptCancelled()

    def _name_project(
        self,
        project_name: str | None,
        working_directory: Path,
        reports: list[StageReport],
    ) -> tuple[str, Path]:
        if project_name is None:
            project_name = self._prompter.ask_project_name(
                lambda value: validate_project_name(value, working_directory)
            )
        try:
            target = ensure_valid_project_name(project_name, working_directory)
        except ScaffoldError as e:
            raise self._fatal(reports, NAME_PROJECT, e) from e
        reports.append(StageReport.ok(NAME_PROJECT, project_name))
        return project_name, target

    def _fetch(self, context: PipelineContext) -> None:
        template = context.template
        size = ""
        if template.estimated_size_bytes:
            size = f" ({format_size(template.estimated_size_bytes)})"
        try:
            with console.status(f"Downloading {template.label}{size}..."):
                outcome = self._fetcher.fetch(template, context.target_directory)
        except ScaffoldError as e:
            console.print("[red]✗[/red] Failed to download template")
            raise self._fatal(context.stage_reports, FETCH, e) from e

        message = f"Downloaded {format_size(outcome.size_bytes)}"
        console.print(f"[green]✓[/green] {message}")
        context.record(StageReport.ok(FETCH, message))

    def _normalize(self, context: PipelineContext) -> None:
        try:
            outcome = normalize_directory(context.target_directory, context.template)
        except ScaffoldError as e:
            raise self._fatal(context.stage_reports, NORMALIZE, e) from e

        if outcome.overwritten:
            context.record(
                StageReport(
                    NORMALIZE,
                    StageOutcome.WARN,
                    "Overwrote existing entries: " + ", ".join(outcome.overwritten),
                    follow_up="Check the overwritten files in the project root",
                )
            )
        elif outcome.changed:
            context.record(
                StageReport.ok(NORMALIZE, f"Flattened {len(outcome.moved)} entries")
            )
        else:
            context.record(StageReport.ok(NORMALIZE))

    def _rewrite_metadata(self, context: PipelineContext) -> None:
        if not self._options.rewrite_metadata:
            context.record(StageReport.skipped(REWRITE_METADATA, "disabled"))
            return

        reports = rewrite_metadata(context.target_directory, context.project_name)
        if not reports:
            context.record(
                StageReport.skipped(REWRITE_METADATA, "no metadata files found")
            )
        for report in reports:
            context.record(report)

    def _install(self, context: PipelineContext) -> None:
        if not self._options.install:
            context.record(StageReport.skipped(INSTALL_DEPS, "disabled"))
            return

        command = " ".join(self._installer.install_command)
        try:
            with console.status(f"Installing dependencies with {command}..."):
                self._installer.install(context.target_directory)
        except InstallError as e:
            console.print("[red]✗[/red] Failed to install dependencies")
            logger.warning("Dependency install failed: %s", e)
            context.record(
                StageReport(
                    INSTALL_DEPS,
                    StageOutcome.WARN,
                    str(e),
                    follow_up=f"cd {context.project_name} && {command}",
                )
            )
            return

        console.print("[green]✓[/green] Dependencies installed")
        context.record(StageReport.ok(INSTALL_DEPS))

    def _init_vcs(self, context: PipelineContext) -> None:
        if not self._options.git:
            context.record(StageReport.skipped(INIT_VCS, "disabled"))
            return

        try:
            with console.status("Initializing Git repository..."):
                self._git.initialize(context.target_directory)
        except VcsError as e:
            console.print("[yellow]⚠[/yellow] Git initialization skipped")
            logger.warning("Git initialization skipped: %s", e)
            context.record(
                StageReport(
                    INIT_VCS,
                    StageOutcome.WARN,
                    str(e),
                    follow_up=(
                        f"cd {context.project_name} && git init && git add . "
                        "&& git commit"
                    ),
                )
            )
            return

        console.print("[green]✓[/green] Git repository initialized")
        context.record(StageReport.ok(INIT_VCS))

    def _cleanup(self, target_directory: Path) -> None:
        """Remove a partially written target after a fatal fetch/normalize."""
        if not self._options.cleanup_on_failure or not target_directory.exists():
            return
        try:
            shutil.rmtree(target_directory)
            logger.debug("Removed partial directory %s", target_directory)
        except OSError as e:
            logger.warning("Could not remove %s: %s", target_directory, e)
