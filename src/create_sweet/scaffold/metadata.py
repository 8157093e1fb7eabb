"""Project metadata rewriting in generated files."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from pathlib import Path

from create_sweet.scaffold.base import (
    REWRITE_METADATA,
    MetadataEditError,
    StageOutcome,
    StageReport,
)

logger = logging.getLogger(__name__)

PACKAGE_JSON = "package.json"
INDEX_HTML = "index.html"
README_MD = "README.md"

TITLE_PATTERN = re.compile(r"<title>.*?</title>", re.DOTALL)


def escape_html(text: str) -> str:
    """Escape &, <, > and " (ampersands first)."""
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def rewrite_package_json(path: Path, project_name: str) -> str:
    """Set the "name" field of package.json."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise MetadataEditError(f"Failed to update {PACKAGE_JSON}: {e}") from e
    if not isinstance(data, dict):
        raise MetadataEditError(
            f"Failed to update {PACKAGE_JSON}: top-level value is not an object"
        )

    data["name"] = project_name
    try:
        path.write_text(
            json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8"
        )
    except OSError as e:
        raise MetadataEditError(f"Failed to update {PACKAGE_JSON}: {e}") from e
    return f"{PACKAGE_JSON} name set to {project_name}"


def rewrite_index_html(path: Path, project_name: str) -> str:
    """Replace the content of the first <title> element."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataEditError(f"Failed to update {INDEX_HTML}: {e}") from e

    if TITLE_PATTERN.search(content) is None:
        return f"{INDEX_HTML} has no <title>, left unchanged"

    title = f"<title>{escape_html(project_name)}</title>"
    updated = TITLE_PATTERN.sub(lambda _: title, content, count=1)
    try:
        path.write_text(updated, encoding="utf-8")
    except OSError as e:
        raise MetadataEditError(f"Failed to update {INDEX_HTML}: {e}") from e
    return f"{INDEX_HTML} title set"


def rewrite_readme(path: Path, project_name: str) -> str:
    """Replace a leading "# " heading line with the project name."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise MetadataEditError(f"Failed to update {README_MD}: {e}") from e

    lines = content.split("\n")
    if not lines[0].startswith("# "):
        return f"{README_MD} has no leading heading, left unchanged"

    lines[0] = f"# {project_name}"
    try:
        path.write_text("\n".join(lines), encoding="utf-8")
    except OSError as e:
        raise MetadataEditError(f"Failed to update {README_MD}: {e}") from e
    return f"{README_MD} heading set"


EDITS: tuple[tuple[str, Callable[[Path, str], str]], ...] = (
    (PACKAGE_JSON, rewrite_package_json),
    (INDEX_HTML, rewrite_index_html),
    (README_MD, rewrite_readme),
)


def rewrite_metadata(target_directory: Path, project_name: str) -> list[StageReport]:
    """Apply each metadata edit whose file exists.

    Every edit is independent and best-effort; failures become warnings.

    Returns:
        One report per attempted edit, in edit order.
    """
    reports: list[StageReport] = []
    for filename, edit in EDITS:
        path = target_directory / filename
        if not path.is_file():
            continue
        try:
            message = edit(path, project_name)
        except MetadataEditError as e:
            logger.warning("%s", e)
            reports.append(
                StageReport(
                    REWRITE_METADATA,
                    StageOutcome.WARN,
                    str(e),
                    follow_up=f"Update the project name in {filename} manually",
                )
            )
            continue
        reports.append(StageReport.ok(REWRITE_METADATA, message))
    return reports
