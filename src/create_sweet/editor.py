"""Editor launching for a freshly created project."""

import logging
import shlex
from pathlib import Path

from create_sweet.executors import CommandError, CommandRunner

logger = logging.getLogger(__name__)

DEFAULT_EDITOR = "code"


def open_editor(
    runner: CommandRunner, target_directory: Path, editor: str = DEFAULT_EDITOR
) -> bool:
    """Launch the editor on the project without waiting for it.

    A missing editor is not an error. Returns True if the launch started.
    """
    if not editor.strip():
        return False
    cmd = [*shlex.split(editor), str(target_directory)]
    try:
        runner.spawn(cmd)
    except CommandError as e:
        logger.debug("Editor launch failed: %s", e)
        return False
    return True
