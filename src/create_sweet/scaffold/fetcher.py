"""Template fetching into the target directory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from create_sweet.scaffold.base import FetchError
from create_sweet.scaffold.transport import (
    DEFAULT_REF,
    TemplateAddress,
    TemplateTransport,
    TransportError,
)
from create_sweet.templates.base import TemplateDescriptor

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER = "github"
DEFAULT_REPOSITORY = "SweetRetry/sweet-starter"
TEMPLATES_SUBDIR = "templates"


@dataclass(frozen=True)
class TemplateSource:
    """Where templates live: one repository, one subdirectory per template."""

    provider: str = DEFAULT_PROVIDER
    repository: str = DEFAULT_REPOSITORY  # owner/repo
    ref: str = DEFAULT_REF

    def address_for(self, template: TemplateDescriptor) -> TemplateAddress:
        """Resolve a template to its transport address."""
        owner, _, repo = self.repository.partition("/")
        return TemplateAddress(
            provider=self.provider,
            owner=owner,
            repo=repo,
            subpath=f"{TEMPLATES_SUBDIR}/{template.id}",
            ref=self.ref,
        )


@dataclass(frozen=True)
class FetchOutcome:
    """Result of a successful fetch."""

    address: TemplateAddress
    size_bytes: int


def directory_size(path: Path) -> int:
    """Total size of regular files below `path`, skipping node_modules."""
    size = 0
    for entry in path.iterdir():
        if entry.is_symlink():
            continue
        if entry.is_dir():
            if entry.name != "node_modules":
                size += directory_size(entry)
        elif entry.is_file():
            size += entry.stat().st_size
    return size


class TemplateFetcher:
    """Materializes a template's file tree via the transport."""

    def __init__(
        self,
        transport: TemplateTransport,
        source: TemplateSource | None = None,
        force: bool = False,
    ) -> None:
        self._transport = transport
        self._source = source or TemplateSource()
        self._force = force

    def fetch(self, template: TemplateDescriptor, target_directory: Path) -> FetchOutcome:
        """Fetch the template into `target_directory`.

        Raises:
            FetchError: On any transport failure. Always fatal.
        """
        if not self._source.repository or "/" not in self._source.repository:
            raise FetchError(
                f"Invalid template repository: {self._source.repository!r}"
            )
        address = self._source.address_for(template)
        logger.info("Fetching %s into %s", address, target_directory)
        try:
            self._transport.download(address, target_directory, force=self._force)
        except TransportError as e:
            raise FetchError(str(e)) from e
        except OSError as e:
            raise FetchError(f"Cannot write {target_directory}: {e}") from e

        try:
            size = directory_size(target_directory)
        except OSError as e:
            raise FetchError(f"Cannot read fetched template: {e}") from e
        return FetchOutcome(address=address, size_bytes=size)
