"""Flattening of the wrapper directory some transports leave behind."""

from __future__ import annotations

import logging
import shutil
from dataclasses import dataclass, field
from pathlib import Path

from create_sweet.scaffold.base import NormalizeError
from create_sweet.templates.base import TemplateDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NormalizeOutcome:
    """What normalization did to the target directory."""

    moved: tuple[str, ...] = ()
    overwritten: tuple[str, ...] = field(default=())

    @property
    def changed(self) -> bool:
        return bool(self.moved)


def _remove(path: Path) -> None:
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    else:
        path.unlink()


def normalize_directory(
    target_directory: Path, template: TemplateDescriptor
) -> NormalizeOutcome:
    """Move `target/<template.id>/*` up into `target` and drop the wrapper.

    An entry that already exists directly under the target is overwritten by
    the moved entry; each overwrite is logged and returned.

    Raises:
        NormalizeError: On any filesystem error.
    """
    wrapper = target_directory / template.id
    if not wrapper.is_dir():
        return NormalizeOutcome()

    moved: list[str] = []
    overwritten: list[str] = []
    try:
        for entry in sorted(wrapper.iterdir()):
            dest = target_directory / entry.name
            # the wrapper itself may contain an entry named after the template
            if dest == wrapper:
                continue
            if dest.exists() or dest.is_symlink():
                logger.warning("Overwriting %s with template content", dest)
                _remove(dest)
                overwritten.append(entry.name)
            shutil.move(str(entry), str(dest))
            moved.append(entry.name)

        nested = wrapper / template.id
        if nested.exists():
            # move the same-named child out under a temporary name first
            temp = target_directory / f".{template.id}.normalize"
            shutil.move(str(nested), str(temp))
            shutil.rmtree(wrapper)
            temp.rename(target_directory / template.id)
            moved.append(template.id)
        else:
            shutil.rmtree(wrapper)
    except OSError as e:
        raise NormalizeError(f"Failed to flatten {wrapper}: {e}") from e

    logger.debug("Moved %d entries out of %s", len(moved), wrapper)
    return NormalizeOutcome(moved=tuple(moved), overwritten=tuple(overwritten))
