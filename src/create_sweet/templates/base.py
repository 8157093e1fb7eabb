"""Base template definitions."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class EnvironmentRequirement:
    """A host tool a template needs, detected by running a version query."""

    name: str  # e.g. "Node.js", "pnpm"
    probe: tuple[str, ...]  # e.g. ("node", "--version")
    min_version: int | None = None  # minimum major version
    install_hint: str | None = None

    def describe(self) -> str:
        """Return the human-readable form, e.g. "Node.js >= 20"."""
        if self.min_version is None:
            return self.name
        return f"{self.name} >= {self.min_version}"


@dataclass(frozen=True)
class TemplateDescriptor:
    """Definition of a remote starter template."""

    id: str  # stable key, also the subdirectory under templates/
    label: str
    hint: str
    estimated_size_bytes: int | None = None
    requirements: tuple[EnvironmentRequirement, ...] = ()


def format_size(size_bytes: int) -> str:
    """Format a byte count for display, e.g. "~2.5 MB"."""
    mb = size_bytes / 1024 / 1024
    if mb >= 1:
        return f"~{mb:.1f} MB"
    kb = size_bytes / 1024
    if kb >= 100:
        return f"~{kb:.0f} KB"
    return "<0.1 MB"
