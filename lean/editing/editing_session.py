"""
Interactive authoring of a new task in the user's editor.

The session is a small state machine:

    EDITING -> VALIDATING -> PUBLISHING -> PUBLISHED
                          -> AWAITING_USER_DECISION -> EDITING
                                                    -> ABORTED

The draft lives in a hidden temporary file in the destination directory, so
publishing is a single rename. Declining to fix an invalid draft removes it and
ends the session without an error.
"""

import os
import tempfile
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Callable, Generator, Optional

from lean.config.logger import get_logger
from lean.config.settings import global_settings
from lean.errors import FileFormatError, InvalidTask
from lean.file_storage.task_file_format import read_task, task_to_yaml_string
from lean.form_input.prompt_input import prompt_line, prompt_yes_no
from lean.model.tasks_model import Task
from lean.shell.shell_output import print_error, print_status
from lean.shell_tools.native_tools import edit_files
from lean.util.format_utils import fmt_path
from lean.workspaces.workspaces import Workspace

log = get_logger(__name__)

DRAFT_PREFIX = ".draft_"

FIX_QUESTION = "Do you want to fix the error?"


class SessionState(Enum):
    editing = "editing"
    validating = "validating"
    awaiting_user_decision = "awaiting_user_decision"
    publishing = "publishing"
    published = "published"
    aborted = "aborted"

    @property
    def is_terminal(self) -> bool:
        return self in (SessionState.published, SessionState.aborted)


def _default_file_mode() -> int:
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


@contextmanager
def draft_file(dir: Path, file_ext: str) -> Generator[Path, None, None]:
    """
    A uniquely named hidden file in the given directory, removed on exit unless it
    has been moved away.
    """
    fd, name = tempfile.mkstemp(prefix=DRAFT_PREFIX, suffix=f".{file_ext}", dir=dir)
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        if path.exists():
            path.unlink()
            log.info("Removed draft: %s", path)


class EditingSession:
    """
    Create one task by round trips through an editor. The editor and the way
    questions are asked can be swapped out, which is how the tests drive it.
    """

    def __init__(
        self,
        workspace: Workspace,
        subdir: Optional[str | Path] = None,
        editor: Callable[[Path], None] = edit_files,
        ask: Callable[[str], str] = prompt_line,
        require_description: Optional[bool] = None,
    ):
        self.workspace = workspace
        self.subdir = subdir
        self.editor = editor
        self.ask = ask
        if require_description is None:
            require_description = global_settings().require_description
        self.require_description = require_description

        # Checked up front so nothing is created if the destination is missing.
        self.dest_dir = workspace.task_dir(subdir)

        self.state = SessionState.editing
        self.draft_path: Optional[Path] = None
        self.seeded = False
        self.task: Optional[Task] = None
        self.error: Optional[str] = None
        self.published_path: Optional[Path] = None

    def run(self) -> Optional[Path]:
        """
        Run the session to the end. Returns the path of the new task, or None if
        the user gave up on it.
        """
        with draft_file(self.dest_dir, global_settings().task_file_ext) as draft_path:
            self.draft_path = draft_path
            while not self.state.is_terminal:
                self.state = self.step()

        return self.published_path

    def step(self) -> SessionState:
        """
        Perform the work of the current state and return the next state.
        """
        if self.state == SessionState.editing:
            return self._edit()
        elif self.state == SessionState.validating:
            return self._validate()
        elif self.state == SessionState.awaiting_user_decision:
            return self._decide()
        elif self.state == SessionState.publishing:
            return self._publish()
        else:
            raise ValueError(f"Session already ended: {self.state}")

    def _edit(self) -> SessionState:
        assert self.draft_path
        if not self.seeded:
            self.draft_path.write_text(task_to_yaml_string(Task.new_draft()), encoding="utf-8")
            self.seeded = True

        self.editor(self.draft_path)
        return SessionState.validating

    def _validate(self) -> SessionState:
        assert self.draft_path
        try:
            task = read_task(self.draft_path)
            errors = task.validation_errors(self.require_description)
            if errors:
                raise InvalidTask(" ".join(errors))
        except (FileFormatError, InvalidTask) as e:
            self.error = str(e)
            log.info("Draft is not a valid task: %s", e)
            return SessionState.awaiting_user_decision

        self.task = task
        self.error = None
        return SessionState.publishing

    def _decide(self) -> SessionState:
        assert self.draft_path
        print_error("Invalid task: %s", self.error or "unknown error")

        def on_invalid(answer: str):
            print_status("Please answer y or n.")

        if prompt_yes_no(FIX_QUESTION, default=True, ask=self.ask, on_invalid=on_invalid):
            return SessionState.editing

        self.draft_path.unlink()
        log.info("Discarded draft: %s", self.draft_path)
        return SessionState.aborted

    def _publish(self) -> SessionState:
        assert self.draft_path and self.task
        dest = self.workspace.task_path(self.task, self.subdir)
        # Drafts are created owner-only; saved tasks follow the umask like other files.
        os.chmod(self.draft_path, _default_file_mode())
        # No check for an existing file: a task with the same name is replaced.
        os.replace(self.draft_path, dest)
        self.published_path = dest
        log.info("Published task: %s", fmt_path(dest))
        return SessionState.published
