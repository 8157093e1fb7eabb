"""Pipeline state, stage reports, and the scaffold error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from create_sweet.templates.base import TemplateDescriptor

# Stage names, in pipeline order
SELECT_TEMPLATE = "SelectTemplate"
VALIDATE_ENVIRONMENT = "ValidateEnvironment"
NAME_PROJECT = "NameProject"
FETCH = "Fetch"
NORMALIZE = "Normalize"
REWRITE_METADATA = "RewriteMetadata"
INSTALL_DEPS = "InstallDeps"
INIT_VCS = "InitVcs"

STAGE_ORDER: tuple[str, ...] = (
    SELECT_TEMPLATE,
    VALIDATE_ENVIRONMENT,
    NAME_PROJECT,
    FETCH,
    NORMALIZE,
    REWRITE_METADATA,
    INSTALL_DEPS,
    INIT_VCS,
)


class StageOutcome(Enum):
    """Outcome of a single stage."""

    OK = "ok"
    WARN = "warn"
    FATAL = "fatal"
    SKIPPED = "skipped"


class PipelineStatus(Enum):
    """Terminal state of a pipeline run."""

    COMPLETED = "completed"
    ABORTED = "aborted"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class StageReport:
    """Audit record appended by a stage on completion."""

    stage_name: str
    outcome: StageOutcome
    message: str | None = None
    follow_up: str | None = None  # actionable instruction shown for warnings

    @classmethod
    def ok(cls, stage_name: str, message: str | None = None) -> StageReport:
        return cls(stage_name, StageOutcome.OK, message)

    @classmethod
    def skipped(cls, stage_name: str, message: str | None = None) -> StageReport:
        return cls(stage_name, StageOutcome.SKIPPED, message)


@dataclass
class PipelineContext:
    """Mutable state threaded through the stages of one run."""

    project_name: str
    target_directory: Path
    template: TemplateDescriptor
    stage_reports: list[StageReport] = field(default_factory=list)

    def record(self, report: StageReport) -> StageReport:
        """Append a report and return it."""
        self.stage_reports.append(report)
        return report


@dataclass
class PipelineResult:
    """What a pipeline run hands back to its caller."""

    status: PipelineStatus
    stage_reports: list[StageReport]
    context: PipelineContext | None = None
    error: str | None = None  # proximate cause for aborts

    @property
    def exit_code(self) -> int:
        """0 on completion or cancellation, 1 on a fatal failure."""
        return 1 if self.status == PipelineStatus.ABORTED else 0

    @property
    def warnings(self) -> list[StageReport]:
        return [r for r in self.stage_reports if r.outcome == StageOutcome.WARN]

    def report_for(self, stage_name: str) -> list[StageReport]:
        """Return all reports recorded under a stage name."""
        return [r for r in self.stage_reports if r.stage_name == stage_name]


class ScaffoldError(Exception):
    """Base exception for pipeline stage failures."""

    fatal: bool = True


class ValidationError(ScaffoldError):
    """Raised for an invalid project name or a directory collision."""


class FetchError(ScaffoldError):
    """Raised when the template cannot be materialized on disk."""


class NormalizeError(ScaffoldError):
    """Raised when the fetched tree cannot be flattened."""


class MetadataEditError(ScaffoldError):
    """Raised when a generated file cannot be updated."""

    fatal = False


class InstallError(ScaffoldError):
    """Raised when dependency installation fails."""

    fatal = False


class VcsError(ScaffoldError):
    """Raised when the initial repository commit cannot be created."""

    fatal = False
