from typing import List, Optional

from humanize import naturaltime
from rich.text import Text

from lean.config.logger import get_logger
from lean.config.text_styles import (
    COLOR_HINT,
    COLOR_PATH,
    COLOR_TASK_FINISHED,
    COLOR_TASK_IN_PROGRESS,
    COLOR_TASK_PAUSED,
    COLOR_TASK_UNSTARTED,
)
from lean.editing.editing_session import EditingSession
from lean.errors import InvalidInput, MissingInput
from lean.file_storage.task_store import StoredTask, TaskStore
from lean.model.tasks_model import DAILY, MonthlyRecurrence, Periodic, Task, TaskStatus
from lean.shell.shell_output import (
    cprint,
    format_name_and_value,
    print_heading,
    print_status,
    print_success,
)
from lean.shell_tools.native_tools import editor_command
from lean.util.format_utils import abbreviate_on_words, fmt_path, fmt_percent
from lean.util.time_utils import as_local, iso_format, now_rounded
from lean.workspaces.workspaces import current_workspace

log = get_logger(__name__)


_status_labels = {
    TaskStatus.finished: ("done", COLOR_TASK_FINISHED),
    TaskStatus.paused: ("paused", COLOR_TASK_PAUSED),
    TaskStatus.in_progress: ("doing", COLOR_TASK_IN_PROGRESS),
    TaskStatus.unstarted: ("todo", COLOR_TASK_UNSTARTED),
}


def add(dir: Optional[str] = None, subdir: Optional[str] = None) -> None:
    """
    Write a new task in your editor and save it to the workspace.

    :param dir: A directory within the workspace (default is the current directory).
    :param subdir: Subdirectory of `tasks/` to save the task in. Must already exist.
    """
    # Check the editor before anything else so a missing setting fails fast.
    editor_command()

    ws = current_workspace(dir)
    session = EditingSession(ws, subdir=subdir)
    path = session.run()

    if path:
        print_success("Saved task: %s", fmt_path(path))
    else:
        print_status("No task saved.")


def _fmt_occurrence(task: Task) -> str:
    occurrence = task.occurrence
    if not isinstance(occurrence, Periodic):
        return "one time"

    recurrence = occurrence.recurrence
    if recurrence == DAILY:
        return "daily"
    elif isinstance(recurrence, MonthlyRecurrence):
        return f"monthly, week {recurrence.monthly.week} on {recurrence.monthly.day.value}"
    else:
        return f"weekly on {recurrence.weekly.value}"


def _format_list_line(stored: StoredTask) -> Text:
    task = stored.task
    label, color = _status_labels[task.status()]
    return Text.assemble(
        (f"{label:<7}", color),
        (f"{fmt_percent(task.done):>5}  ", COLOR_HINT),
        abbreviate_on_words(task.title, 50),
        "  ",
        (str(stored.task_id), COLOR_PATH),
    )


def list_tasks(dir: Optional[str] = None, limit: Optional[int] = None) -> List[StoredTask]:
    """
    List tasks in the workspace, grouped by state.

    :param dir: A directory within the workspace (default is the current directory).
    :param limit: Show at most this many tasks.
    """
    if limit is not None and limit < 0:
        raise InvalidInput(f"Limit must not be negative: {limit}")

    ws = current_workspace(dir)
    tasks = TaskStore(ws).list_tasks(limit=limit)
    if not tasks:
        print_status("No tasks yet. Add one with `lean tasks add`.")
    for stored in tasks:
        cprint(_format_list_line(stored))
    return tasks


def _print_task(stored: StoredTask):
    task = stored.task
    label, color = _status_labels[task.status()]

    print_heading(task.title)
    cprint(format_name_and_value("id", str(stored.task_id), COLOR_PATH))
    cprint(format_name_and_value("status", f"{label}, {fmt_percent(task.done)} done", color))
    cprint(format_name_and_value("occurs", _fmt_occurrence(task)))
    if task.effort:
        cprint(format_name_and_value("effort", ", ".join(f"{e:g}" for e in task.effort)))
    age = naturaltime(now_rounded() - as_local(task.created_at))
    cprint(format_name_and_value("created", f"{iso_format(task.created_at)} ({age})"))

    for name in ("due_at", "started_at", "finished_at", "cancelled_at"):
        value = getattr(task, name)
        if value:
            cprint(format_name_and_value(name.removesuffix("_at"), iso_format(value)))
    for name in ("paused_at", "resumed_at"):
        values = getattr(task, name)
        if values:
            cprint(
                format_name_and_value(
                    name.removesuffix("_at"), ", ".join(iso_format(v) for v in values)
                )
            )

    if task.people:
        cprint(format_name_and_value("people", ", ".join(p.name for p in task.people)))
    for name in ("relates_to", "depends_on"):
        related = getattr(task, name)
        if related:
            cprint(
                format_name_and_value(name.replace("_", " "), "; ".join(t.title for t in related))
            )

    if task.description.strip():
        cprint()
        cprint(task.description.rstrip())


def show(task_ids: List[str], dir: Optional[str] = None) -> List[StoredTask]:
    """
    Show the full details of one or more tasks.

    :param task_ids: Task paths within `tasks/`, file names, or titles.
    :param dir: A directory within the workspace (default is the current directory).
    """
    if not task_ids:
        raise MissingInput("Give at least one task to show.")

    ws = current_workspace(dir)
    store = TaskStore(ws)
    found = [store.find(task_id) for task_id in task_ids]
    for stored in found:
        _print_task(stored)
    return found
