"""Configuration schema for create-sweet."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any

BOOL_FIELDS = (
    "check_environment",
    "rewrite_metadata",
    "install",
    "git",
    "open_editor",
    "cleanup_on_failure",
)
TIMEOUT_FIELDS = ("fetch_timeout", "probe_timeout", "install_timeout", "git_timeout")
STR_FIELDS = (
    "provider",
    "repository",
    "ref",
    "package_manager",
    "editor",
    "commit_message",
)


@dataclass
class SweetConfig:
    """create-sweet configuration schema.

    None values indicate "not set" and will use defaults or be inherited.
    """

    # Template source
    provider: str | None = None
    repository: str | None = None  # owner/repo
    ref: str | None = None

    # Tools
    package_manager: str | None = None
    editor: str | None = None
    commit_message: str | None = None

    # Optional stages
    check_environment: bool | None = None
    rewrite_metadata: bool | None = None
    install: bool | None = None
    git: bool | None = None
    open_editor: bool | None = None  # None means ask
    cleanup_on_failure: bool | None = None

    # Timeouts in seconds
    fetch_timeout: float | None = None
    probe_timeout: float | None = None
    install_timeout: float | None = None
    git_timeout: float | None = None

    def merge(self, other: SweetConfig) -> SweetConfig:
        """Merge another config into this one.

        Values from `other` take precedence when they are not None.
        Returns a new SweetConfig instance.
        """
        values = {}
        for f in fields(self):
            theirs = getattr(other, f.name)
            values[f.name] = theirs if theirs is not None else getattr(self, f.name)
        return SweetConfig(**values)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary, excluding None values."""
        result: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is not None:
                result[f.name] = value
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> SweetConfig:
        """Create a SweetConfig from a dictionary.

        Unknown keys and values of the wrong type are ignored.
        """
        values: dict[str, Any] = {}
        for name in STR_FIELDS:
            raw = data.get(name)
            if raw is not None and not isinstance(raw, (dict, list)):
                values[name] = str(raw)
        for name in BOOL_FIELDS:
            raw = data.get(name)
            if raw is not None:
                values[name] = bool(raw)
        for name in TIMEOUT_FIELDS:
            raw = data.get(name)
            if raw is None or isinstance(raw, bool):
                continue
            try:
                values[name] = float(raw)
            except (TypeError, ValueError):
                continue
        return cls(**values)


# Default configuration values (used when not specified anywhere)
DEFAULT_CONFIG = SweetConfig(
    provider="github",
    repository="SweetRetry/sweet-starter",
    ref="main",
    package_manager="pnpm",
    editor="code",
    commit_message="feat: initial commit from create-sweet",
    check_environment=True,
    rewrite_metadata=True,
    install=True,
    git=True,
    cleanup_on_failure=True,
    fetch_timeout=60.0,
    probe_timeout=10.0,
    install_timeout=600.0,
    git_timeout=60.0,
)
