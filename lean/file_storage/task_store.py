"""
Read access to the tasks saved in a workspace.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Generator, List, Optional

from lean.config.logger import get_logger
from lean.config.settings import global_settings
from lean.errors import FileFormatError, FileNotFound, InvalidFilename, InvalidInput
from lean.file_storage.task_file_format import read_task
from lean.file_storage.task_filenames import parse_task_filename
from lean.model.tasks_model import Task
from lean.util.format_utils import fmt_lines, fmt_path
from lean.util.slugs import normalize, slug
from lean.workspaces.workspaces import Workspace

log = get_logger(__name__)


def skippable_file(filename: str) -> bool:
    """
    Hidden files and directories, such as drafts being edited, aren't tasks.
    """
    return filename.startswith(".") or filename.startswith("__")


@dataclass(frozen=True)
class StoredTask:
    task_id: Path
    """Path relative to the tasks directory, which identifies the task."""

    path: Path
    task: Task


class TaskStore:
    def __init__(self, workspace: Workspace):
        self.workspace = workspace
        self.tasks_dir = workspace.tasks_dir

    def walk_task_files(self, subdir: Optional[str | Path] = None) -> Generator[Path, None, None]:
        """
        Task files under the tasks directory (or a subdirectory of it), as paths relative to
        the tasks directory, in sorted order within each directory.
        """
        ext = f".{global_settings().task_file_ext}"
        start = self.workspace.task_dir(subdir)
        for root, dirnames, filenames in os.walk(start):
            dirnames[:] = sorted(d for d in dirnames if not skippable_file(d))
            for filename in sorted(filenames):
                if not skippable_file(filename) and filename.endswith(ext):
                    yield Path(root, filename).relative_to(self.tasks_dir)

    def load(self, task_id: str | Path) -> StoredTask:
        path = self.tasks_dir / task_id
        return StoredTask(Path(task_id), path, read_task(path))

    def list_tasks(
        self, subdir: Optional[str | Path] = None, limit: Optional[int] = None
    ) -> List[StoredTask]:
        """
        Load tasks, skipping (with a warning) any files that can't be read as tasks.
        """
        tasks: List[StoredTask] = []
        for task_id in self.walk_task_files(subdir):
            if limit is not None and len(tasks) >= limit:
                break
            try:
                tasks.append(self.load(task_id))
            except FileFormatError as e:
                log.warning("Could not read task, skipping: %s: %s", fmt_path(task_id), e)
        return tasks

    def find(self, task_id: str) -> StoredTask:
        """
        Find a task given its path relative to the tasks directory, its file name, its
        file name without extension, or (if unambiguous) its title or slug.
        """
        id_path = Path(task_id)
        if id_path.is_absolute() or ".." in id_path.parts:
            raise InvalidInput(f"Task must be given relative to the tasks directory: {task_id}")

        ext = f".{global_settings().task_file_ext}"
        for candidate in (task_id, f"{task_id}{ext}"):
            if (self.tasks_dir / candidate).is_file():
                return self.load(candidate)

        wanted_slug = slug(normalize(task_id))
        matches = []
        for path in self.walk_task_files():
            if path.name in (task_id, f"{task_id}{ext}"):
                matches.append(path)
                continue
            try:
                parsed = parse_task_filename(path)
            except InvalidFilename:
                continue
            if wanted_slug and parsed.slug == wanted_slug:
                matches.append(path)

        if not matches:
            raise FileNotFound(f"No task found matching: {task_id!r}")
        if len(matches) > 1:
            raise InvalidInput(
                f"More than one task matches {task_id!r}:\n{fmt_lines(matches)}\n"
                "Use the path to pick one."
            )
        return self.load(matches[0])
