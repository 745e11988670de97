"""
File naming conventions for tasks.

A task's file name encodes its lifecycle state and its title, so that a plain
directory listing sorts tasks by state:

    X2019-10-09T13:00:00+02:00_write_report.yaml   finished
    040S_write_report.yaml                          paused, 40% done
    040P_write_report.yaml                          in progress, 40% done
    000U_write_report.yaml                          not started
"""

import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import regex

from lean.config.settings import global_settings
from lean.errors import InvalidFilename, InvalidTask
from lean.model.tasks_model import Task, TaskStatus
from lean.util.time_utils import iso_format
from lean.workspaces.workspace_dirs import WorkspaceDirs

_task_filename_re = regex.compile(
    r"^(?:X(?P<finished>[^_]+)|(?P<percent>\d{3})(?P<status>[SPU]))_(?P<slug>[a-z0-9_-]+)\.(?P<ext>\w+)$"
)


def percent_done(task: Task) -> str:
    """
    Whole percent done, rounded down and zero-padded to three digits.
    """
    return f"{math.floor(task.done * 100):03d}"


def status_prefix(task: Task) -> str:
    status = task.status()
    if status == TaskStatus.finished:
        assert task.finished_at
        return f"{status.value}{iso_format(task.finished_at)}"
    else:
        return f"{percent_done(task)}{status.value}"


def task_filename(task: Task) -> str:
    """
    The canonical file name of a task. Raises `InvalidTask` if the title has no
    usable characters.
    """
    title_slug = task.title_slug()
    if not title_slug:
        raise InvalidTask(f"Task title has no usable characters for a file name: {task.title!r}")
    return f"{status_prefix(task)}_{title_slug}.{global_settings().task_file_ext}"


def task_path(base_dir: Path, subdir: Optional[str | Path], task: Task) -> Path:
    """
    Full path of a task within a workspace: `base_dir/tasks/[subdir/]<file name>`.
    """
    folder = WorkspaceDirs(base_dir).tasks_path(subdir)
    return folder / task_filename(task)


@dataclass(frozen=True)
class ParsedTaskFilename:
    status: TaskStatus
    slug: str
    percent: Optional[int] = None
    finished: Optional[str] = None


def parse_task_filename(filename: str | Path) -> ParsedTaskFilename:
    """
    Parse a task file name back into its status and slug. Raises `InvalidFilename`
    if it doesn't follow the task naming convention.
    """
    name = Path(filename).name
    match = _task_filename_re.match(name)
    if not match:
        raise InvalidFilename(f"Not a task file name: {name}")

    slug = match.group("slug")
    if match.group("finished"):
        return ParsedTaskFilename(TaskStatus.finished, slug, finished=match.group("finished"))
    else:
        return ParsedTaskFilename(
            TaskStatus(match.group("status")), slug, percent=int(match.group("percent"))
        )


## Tests


def _task(**kwargs) -> Task:
    from datetime import datetime, timedelta, timezone

    fields = dict(
        title="Write the report",
        description="",
        occurrence={"type": "OneTime"},
        effort=[],
        created_at=datetime(2019, 10, 9, 13, 0, tzinfo=timezone(timedelta(hours=2))),
    )
    fields.update(kwargs)
    return Task.model_validate(fields)


def test_task_filename_prefixes():
    ts = "2019-10-09T13:00:00+02:00"

    assert task_filename(_task()) == "000U_write_the_report.yaml"
    assert task_filename(_task(done=0.4, started_at=ts)) == "040P_write_the_report.yaml"
    assert task_filename(_task(done=0.999, paused_at=[ts])) == "099S_write_the_report.yaml"
    assert task_filename(_task(done=1.0, started_at=ts, paused_at=[ts])) == (
        "100S_write_the_report.yaml"
    )
    assert task_filename(_task(done=0.5, started_at=ts, paused_at=[ts], finished_at=ts)) == (
        "X2019-10-09T13:00:00+02:00_write_the_report.yaml"
    )


def test_exactly_one_prefix():
    ts = "2019-10-09T13:00:00+02:00"
    lifecycles = [
        {},
        {"started_at": ts},
        {"paused_at": [ts]},
        {"started_at": ts, "paused_at": [ts], "resumed_at": [ts]},
        {"finished_at": ts},
        {"started_at": ts, "finished_at": ts},
    ]
    prefix_re = regex.compile(r"^(X.+|\d{3}[SPU])$")
    for lifecycle in lifecycles:
        for done in [0.0, 0.07, 0.5, 1.0]:
            prefix = status_prefix(_task(done=done, **lifecycle))
            assert prefix_re.match(prefix)
            assert sum(prefix.endswith(letter) for letter in "SPU") + prefix.startswith("X") == 1


def test_task_filename_empty_slug():
    import pytest

    with pytest.raises(InvalidTask):
        task_filename(_task(title="!!!"))


def test_parse_task_filename():
    parsed = parse_task_filename("tasks/work/040P_write_the_report.yaml")
    assert parsed == ParsedTaskFilename(TaskStatus.in_progress, "write_the_report", percent=40)

    parsed = parse_task_filename("X2019-10-09T13:00:00+02:00_write.yaml")
    assert parsed.status == TaskStatus.finished
    assert parsed.finished == "2019-10-09T13:00:00+02:00"
    assert parsed.slug == "write"

    import pytest

    for name in (".lean.yaml", "notes.txt", "000U_.yaml", "12U_x.yaml"):
        with pytest.raises(InvalidFilename):
            parse_task_filename(name)
