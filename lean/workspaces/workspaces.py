"""
Finding and creating workspaces.

A workspace is a directory holding the marker file. Workspaces never nest: a
new one can't be created inside an existing one, and no existing directory
holding one can become a workspace itself.
"""

from pathlib import Path
from typing import Optional

from lean.config.logger import get_logger
from lean.config.settings import MARKER_FILE
from lean.errors import (
    AlreadyWorkspace,
    ContainsWorkspace,
    DirectoryMissing,
    InvalidInput,
    NotEmpty,
    WorkspaceNotFound,
    WouldNestWorkspace,
)
from lean.file_storage.task_filenames import task_path
from lean.model.tasks_model import Task
from lean.util.format_utils import fmt_path
from lean.workspaces.workspace_dirs import WorkspaceDirs

log = get_logger(__name__)


def is_workspace_dir(path: Path) -> bool:
    return WorkspaceDirs(path).is_initialized()


def enclosing_workspace_dir(path: Path) -> Optional[Path]:
    """
    Get the workspace directory enclosing the given absolute path (itself or a parent),
    or None. The path is used as given, so it should already be resolved.
    """
    if not path.is_absolute():
        raise InvalidInput(f"Expected an absolute path to find a workspace from: {path}")

    for dir in (path, *path.parents):
        if is_workspace_dir(dir):
            return dir

    return None


def locate_workspace(path: Path) -> Path:
    """
    Like `enclosing_workspace_dir` but raises `WorkspaceNotFound` if there is none.
    """
    base_dir = enclosing_workspace_dir(path)
    if not base_dir:
        raise WorkspaceNotFound(
            f"No workspace found in {fmt_path(path)} or any parent directory.\n"
            "Create one with `lean init`."
        )
    return base_dir


def _deepest_existing_ancestor(path: Path) -> Path:
    # Terminates since `/` (or `.` for relative paths) always exists.
    while not path.exists():
        path = path.parent
    return path.resolve()


class Workspace:
    """
    A workspace directory and where things go within it.
    """

    def __init__(self, base_dir: Path):
        self.base_dir = base_dir.resolve()
        self.dirs = WorkspaceDirs(self.base_dir)

    def __str__(self):
        return f"Workspace({fmt_path(self.base_dir)})"

    @property
    def tasks_dir(self) -> Path:
        return self.dirs.tasks_path()

    def task_dir(self, subdir: Optional[str | Path] = None) -> Path:
        """
        Existing directory for tasks, optionally a subdirectory of `tasks/`.
        Raises `DirectoryMissing` if it does not exist.
        """
        folder = self.dirs.tasks_path(subdir)
        if not folder.is_dir():
            raise DirectoryMissing(f"Task directory does not exist: {fmt_path(folder)}")
        return folder

    def task_path(self, task: Task, subdir: Optional[str | Path] = None) -> Path:
        return task_path(self.base_dir, subdir, task)


def init_workspace(target: Path) -> Workspace:
    """
    Create a new workspace at the target path, creating the directory if needed.

    Refuses to create a workspace inside another or around another, and refuses
    existing directories that aren't empty. Filesystem errors are not caught, and a
    failure part way through leaves whatever was created so far.
    """
    ancestor = _deepest_existing_ancestor(target)
    enclosing = enclosing_workspace_dir(ancestor)
    if enclosing:
        if target.exists():
            raise AlreadyWorkspace(
                f"Already inside a workspace: {fmt_path(target)} is in {fmt_path(enclosing)}"
            )
        else:
            raise WouldNestWorkspace(
                f"Can't create a workspace inside another workspace: {fmt_path(enclosing)}"
            )

    target.mkdir(parents=True, exist_ok=True)

    # Check again now the directory exists, in case something else created it first.
    base_dir = target.resolve()
    if any(base_dir.iterdir()):
        inner = next(base_dir.rglob(MARKER_FILE), None)
        if inner:
            raise ContainsWorkspace(
                f"Directory already contains a workspace: {fmt_path(inner.parent)}"
            )
        raise NotEmpty(f"Directory for a new workspace must be empty: {fmt_path(base_dir)}")

    WorkspaceDirs(base_dir).initialize()

    return Workspace(base_dir)


def current_workspace(start_dir: Optional[str | Path] = None) -> Workspace:
    """
    The workspace enclosing the given directory (by default the working directory).
    """
    path = Path(start_dir or ".").resolve()
    if not path.is_dir():
        raise DirectoryMissing(f"Directory does not exist: {fmt_path(path)}")
    return Workspace(locate_workspace(path))
