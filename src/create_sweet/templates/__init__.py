"""Starter template definitions and catalog."""

from create_sweet.templates.base import (
    EnvironmentRequirement,
    TemplateDescriptor,
    format_size,
)
from create_sweet.templates.catalog import (
    DEFAULT_TEMPLATES,
    TemplateCatalog,
    TemplateNotFoundError,
    default_catalog,
)

__all__ = [
    "DEFAULT_TEMPLATES",
    "EnvironmentRequirement",
    "TemplateCatalog",
    "TemplateDescriptor",
    "TemplateNotFoundError",
    "default_catalog",
    "format_size",
]
