"""
Platform-specific tools and utilities.
"""

import os
import shlex
import subprocess
from pathlib import Path
from typing import List

from lean.config.logger import get_logger
from lean.config.settings import EDITOR_ENV
from lean.errors import EditorFailed, SetupError
from lean.util.format_utils import fmt_path

log = get_logger(__name__)


def editor_command() -> List[str]:
    """
    The user's editor command from the environment, split into words so settings
    like `code --wait` work. Raises `SetupError` if it's not set.
    """
    editor = os.environ.get(EDITOR_ENV, "").strip()
    if not editor:
        raise SetupError(f"Set the `{EDITOR_ENV}` environment variable to the editor to use.")
    return shlex.split(editor)


def edit_files(*filenames: str | Path):
    """
    Edit files using the user's preferred editor, waiting as long as it takes for the
    editor to exit. Raises `EditorFailed` if it can't be started or exits with an error.
    """
    command = editor_command() + [str(f) for f in filenames]
    log.info("Running editor: %s", shlex.join(command))
    try:
        result = subprocess.run(command)
    except OSError as e:
        raise EditorFailed(f"Could not run editor `{command[0]}`: {e}") from e

    if result.returncode != 0:
        raise EditorFailed(
            f"Editor `{command[0]}` exited with status {result.returncode} while editing "
            + ", ".join(fmt_path(f) for f in filenames)
        )
