import pytest

from lean.errors import FileNotFound, InvalidInput
from lean.file_storage.task_file_format import write_task
from lean.file_storage.task_store import TaskStore
from lean.model.tasks_model import OneTime, Task
from lean.workspaces.workspaces import Workspace


def _save(workspace: Workspace, title: str, subdir=None, **kwargs) -> Task:
    task = Task(
        title=title,
        description="",
        occurrence=OneTime(),
        effort=[],
        created_at="2024-05-01T10:00:00+02:00",
        **kwargs,
    )
    path = workspace.task_path(task, subdir)
    path.parent.mkdir(parents=True, exist_ok=True)
    write_task(task, path)
    return task


def test_list_tasks(workspace: Workspace):
    _save(workspace, "Water plants")
    _save(workspace, "Write report", started_at="2024-05-02T09:00:00+02:00", done=0.25)
    _save(workspace, "Old chore", subdir="home", finished_at="2024-05-03T18:00:00+02:00")

    # Drafts, other files and unreadable tasks are not listed.
    (workspace.tasks_dir / ".draft_abc.yaml").write_text("title: draft\n")
    (workspace.tasks_dir / "notes.txt").write_text("not a task")
    (workspace.tasks_dir / "000U_broken.yaml").write_text("title: [oops")

    store = TaskStore(workspace)
    ids = [str(t.task_id) for t in store.list_tasks()]
    assert ids == [
        "000U_water_plants.yaml",
        "025P_write_report.yaml",
        "home/X2024-05-03T18:00:00+02:00_old_chore.yaml",
    ]

    assert len(store.list_tasks(limit=1)) == 1
    assert store.list_tasks(limit=0) == []
    assert [t.task.title for t in store.list_tasks(subdir="home")] == ["Old chore"]


def test_find(workspace: Workspace):
    _save(workspace, "Water plants")
    _save(workspace, "Call Bob", subdir="home")

    store = TaskStore(workspace)
    assert store.find("000U_water_plants.yaml").task.title == "Water plants"
    assert store.find("000U_water_plants").task.title == "Water plants"
    assert store.find("home/000U_call_bob.yaml").task.title == "Call Bob"
    assert store.find("000U_call_bob.yaml").task.title == "Call Bob"
    assert store.find("Call  Bob").task_id.name == "000U_call_bob.yaml"

    with pytest.raises(FileNotFound):
        store.find("nothing like this")


def test_find_ambiguous(workspace: Workspace):
    _save(workspace, "Call Bob")
    _save(workspace, "Call Bob", subdir="work")

    with pytest.raises(InvalidInput):
        TaskStore(workspace).find("call bob")


def test_find_stays_in_tasks_dir(workspace: Workspace):
    _save(workspace, "Water plants")
    (workspace.base_dir / "people" / "000U_secret.yaml").write_text("title: x\n")

    store = TaskStore(workspace)
    outside = ["../people/000U_secret.yaml", str(workspace.tasks_dir / "000U_water_plants.yaml")]
    for task_id in outside:
        with pytest.raises(InvalidInput, match="relative to the tasks directory"):
            store.find(task_id)
