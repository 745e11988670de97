"""
Layout of the marker file and fixed directories of a workspace.
"""

from pathlib import Path
from typing import List, Optional

from pydantic.dataclasses import dataclass

from lean.config.logger import get_logger
from lean.config.settings import MARKER_FILE
from lean.errors import InvalidInput
from lean.util.format_utils import fmt_path

log = get_logger(__name__)


@dataclass(frozen=True)
class WorkspaceDirs:
    base_dir: Path

    marker_file: Path = Path(MARKER_FILE)

    people_dir: Path = Path("people")
    tasks_dir: Path = Path("tasks")
    load_dir: Path = Path("load")
    record_dir: Path = Path("record")

    month_view_dir: Path = Path("views/month")
    quarter_view_dir: Path = Path("views/quarter")
    half_year_view_dir: Path = Path("views/half_year")
    year_view_dir: Path = Path("views/year")

    def skeleton_dirs(self) -> List[Path]:
        """
        All fixed subdirectories, relative to the base directory.
        """
        return [
            getattr(self, field)
            for field in self.__dataclass_fields__
            if field.endswith("_dir") and field != "base_dir"
        ]

    @property
    def marker_path(self) -> Path:
        return self.base_dir / self.marker_file

    def is_initialized(self) -> bool:
        return self.marker_path.is_file()

    def tasks_path(self, subdir: Optional[str | Path] = None) -> Path:
        """
        Directory holding tasks, optionally a subdirectory of it. The subdirectory must
        be relative and stay within the tasks directory.
        """
        tasks = self.base_dir / self.tasks_dir
        if not subdir:
            return tasks

        subdir = Path(subdir)
        if subdir.is_absolute() or ".." in subdir.parts:
            raise InvalidInput(f"Task subdirectory must be a relative path within tasks: {subdir}")
        return tasks / subdir

    def initialize(self):
        """
        Write the empty marker file, then create all fixed subdirectories.
        Creating directories is idempotent.
        """
        log.info("Initializing new workspace: %s", fmt_path(self.base_dir))
        self.marker_path.touch()

        for dir_path in self.skeleton_dirs():
            (self.base_dir / dir_path).mkdir(parents=True, exist_ok=True)


## Tests


def test_skeleton_dirs():
    dirs = WorkspaceDirs(Path("/tmp/ws"))
    assert [str(p) for p in dirs.skeleton_dirs()] == [
        "people",
        "tasks",
        "load",
        "record",
        "views/month",
        "views/quarter",
        "views/half_year",
        "views/year",
    ]
    assert dirs.marker_path == Path("/tmp/ws/.lean.yaml")


def test_tasks_path():
    import pytest

    dirs = WorkspaceDirs(Path("/tmp/ws"))
    assert dirs.tasks_path() == Path("/tmp/ws/tasks")
    assert dirs.tasks_path("work/q3") == Path("/tmp/ws/tasks/work/q3")
    with pytest.raises(InvalidInput):
        dirs.tasks_path("../people")
    with pytest.raises(InvalidInput):
        dirs.tasks_path("/etc")
