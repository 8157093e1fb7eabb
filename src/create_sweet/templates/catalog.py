"""Template catalog and the built-in Sweet Starter templates."""

from __future__ import annotations

from collections.abc import Iterable

from create_sweet.templates.base import EnvironmentRequirement, TemplateDescriptor

NODE = EnvironmentRequirement(
    name="Node.js",
    probe=("node", "--version"),
    min_version=20,
    install_hint="https://nodejs.org",
)

PNPM = EnvironmentRequirement(
    name="pnpm",
    probe=("pnpm", "--version"),
    min_version=10,
    install_hint="npm install -g pnpm",
)

RUST = EnvironmentRequirement(
    name="Rust",
    probe=("rustc", "--version"),
    install_hint="https://rustup.rs",
)

BUN = EnvironmentRequirement(
    name="Bun",
    probe=("bun", "--version"),
    install_hint="curl -fsSL https://bun.sh/install | bash",
)

NEXTJS_MONOREPO = TemplateDescriptor(
    id="nextjs-monorepo",
    label="Next.js Monorepo",
    hint="Turborepo + Next.js + shadcn/ui + Biome + Knip",
    estimated_size_bytes=2_600_000,
    requirements=(NODE, PNPM),
)

REACT_VITE = TemplateDescriptor(
    id="react-vite",
    label="React + Vite",
    hint="React 19 + Vite + Tailwind CSS v4 + shadcn/ui",
    estimated_size_bytes=1_260_000,
    requirements=(NODE, PNPM),
)

TAURI_DESKTOP = TemplateDescriptor(
    id="tauri-desktop",
    label="Tauri Desktop",
    hint="Tauri 2 + Next.js + Elysia + Turborepo",
    estimated_size_bytes=819_200,
    requirements=(NODE, PNPM, RUST, BUN),
)

DEFAULT_TEMPLATES: tuple[TemplateDescriptor, ...] = (
    NEXTJS_MONOREPO,
    REACT_VITE,
    TAURI_DESKTOP,
)


class TemplateNotFoundError(LookupError):
    """Raised when a template id is not in the catalog."""

    fatal: bool = True

    def __init__(self, template_id: str) -> None:
        self.template_id = template_id
        super().__init__(f"Unknown template: {template_id}")


class TemplateCatalog:
    """Immutable, ordered registry of templates."""

    def __init__(self, templates: Iterable[TemplateDescriptor]) -> None:
        self._templates = tuple(templates)
        ids = [t.id for t in self._templates]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate template ids: {ids}")

    def list(self) -> tuple[TemplateDescriptor, ...]:
        """Return templates in menu order."""
        return self._templates

    def ids(self) -> list[str]:
        return [t.id for t in self._templates]

    def find(self, template_id: str) -> TemplateDescriptor:
        """Return the template with the given id.

        Raises:
            TemplateNotFoundError: If no template has that id.
        """
        for template in self._templates:
            if template.id == template_id:
                return template
        raise TemplateNotFoundError(template_id)

    def __len__(self) -> int:
        return len(self._templates)


def default_catalog() -> TemplateCatalog:
    """Build the catalog of built-in templates."""
    return TemplateCatalog(DEFAULT_TEMPLATES)
