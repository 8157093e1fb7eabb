"""Scaffold pipeline: stages, orchestrator, and reporting."""

from create_sweet.scaffold.base import (
    STAGE_ORDER,
    FetchError,
    InstallError,
    MetadataEditError,
    NormalizeError,
    PipelineContext,
    PipelineResult,
    PipelineStatus,
    ScaffoldError,
    StageOutcome,
    StageReport,
    ValidationError,
    VcsError,
)
from create_sweet.scaffold.fetcher import TemplateFetcher, TemplateSource
from create_sweet.scaffold.installer import DependencyInstaller
from create_sweet.scaffold.metadata import rewrite_metadata
from create_sweet.scaffold.naming import ensure_valid_project_name, validate_project_name
from create_sweet.scaffold.normalizer import normalize_directory
from create_sweet.scaffold.orchestrator import PipelineOptions, PipelineOrchestrator
from create_sweet.scaffold.prompts import PromptCancelled, Prompter
from create_sweet.scaffold.report import render_summary
from create_sweet.scaffold.transport import (
    HttpArchiveTransport,
    TemplateAddress,
    TemplateTransport,
    TransportError,
)

__all__ = [
    "STAGE_ORDER",
    "DependencyInstaller",
    "FetchError",
    "HttpArchiveTransport",
    "InstallError",
    "MetadataEditError",
    "NormalizeError",
    "PipelineContext",
    "PipelineOptions",
    "PipelineOrchestrator",
    "PipelineResult",
    "PipelineStatus",
    "PromptCancelled",
    "Prompter",
    "ScaffoldError",
    "StageOutcome",
    "StageReport",
    "TemplateAddress",
    "TemplateFetcher",
    "TemplateSource",
    "TemplateTransport",
    "TransportError",
    "ValidationError",
    "VcsError",
    "ensure_valid_project_name",
    "normalize_directory",
    "render_summary",
    "rewrite_metadata",
    "validate_project_name",
]
