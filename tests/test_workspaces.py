from pathlib import Path

import pytest

from lean.config.settings import MARKER_FILE
from lean.errors import (
    AlreadyWorkspace,
    ContainsWorkspace,
    DirectoryMissing,
    InvalidInput,
    NotEmpty,
    WorkspaceError,
    WorkspaceNotFound,
    WouldNestWorkspace,
)
from lean.workspaces.workspaces import (
    current_workspace,
    enclosing_workspace_dir,
    init_workspace,
    locate_workspace,
)

SKELETON = [
    "load",
    "people",
    "record",
    "tasks",
    "views",
    "views/half_year",
    "views/month",
    "views/quarter",
    "views/year",
]


def _tree(path: Path):
    return sorted(str(p.relative_to(path)) for p in path.rglob("*"))


@pytest.mark.parametrize("depth", [0, 1, 2, 5])
def test_locate_from_descendant(tmp_path: Path, depth: int):
    base = tmp_path / "ws"
    base.mkdir()
    (base / MARKER_FILE).touch()

    path = base
    for i in range(depth):
        path = path / f"level{i}"
    path.mkdir(parents=True, exist_ok=True)

    assert locate_workspace(path) == base
    assert enclosing_workspace_dir(path) == base


def test_locate_requires_absolute_path():
    with pytest.raises(InvalidInput):
        locate_workspace(Path("relative/path"))


def test_locate_not_found(tmp_path: Path):
    with pytest.raises(WorkspaceNotFound):
        locate_workspace(tmp_path)
    assert enclosing_workspace_dir(tmp_path) is None


def test_marker_must_be_a_file(tmp_path: Path):
    (tmp_path / MARKER_FILE).mkdir()
    assert enclosing_workspace_dir(tmp_path) is None


def test_init_fresh_location(tmp_path: Path):
    target = tmp_path / "new" / "workspace"
    ws = init_workspace(target)

    assert ws.base_dir == target.resolve()
    assert (target / MARKER_FILE).is_file()
    assert (target / MARKER_FILE).read_text() == ""
    assert _tree(target) == sorted([MARKER_FILE] + SKELETON)


def test_init_existing_empty_dir(tmp_path: Path):
    target = tmp_path / "empty"
    target.mkdir()
    ws = init_workspace(target)
    assert ws.dirs.is_initialized()


def test_init_relative_path(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    ws = init_workspace(Path("rel/ws"))
    assert ws.base_dir == (tmp_path / "rel" / "ws").resolve()
    assert ws.base_dir.is_absolute()


def test_init_inside_existing_workspace(tmp_path: Path):
    ws = init_workspace(tmp_path / "ws")

    with pytest.raises(AlreadyWorkspace):
        init_workspace(ws.base_dir)
    with pytest.raises(AlreadyWorkspace):
        init_workspace(ws.base_dir / "tasks")
    with pytest.raises(WouldNestWorkspace):
        init_workspace(ws.base_dir / "tasks" / "new" / "deeper")

    # Nothing was created by the failed attempts.
    assert not (ws.base_dir / "tasks" / "new").exists()


def test_init_ancestor_of_existing_workspace(tmp_path: Path):
    init_workspace(tmp_path / "outer" / "inner")

    with pytest.raises(ContainsWorkspace):
        init_workspace(tmp_path / "outer")
    assert not (tmp_path / "outer" / MARKER_FILE).exists()


def test_init_not_empty(tmp_path: Path):
    target = tmp_path / "full"
    target.mkdir()
    (target / "notes.txt").write_text("hello")

    with pytest.raises(NotEmpty):
        init_workspace(target)
    assert not (target / MARKER_FILE).exists()


def test_topology_errors_share_a_base():
    for error in (AlreadyWorkspace, WouldNestWorkspace, ContainsWorkspace, NotEmpty):
        assert issubclass(error, WorkspaceError)


def test_init_onto_a_file_fails(tmp_path: Path):
    target = tmp_path / "file"
    target.write_text("x")
    with pytest.raises(OSError):
        init_workspace(target)


def test_current_workspace(tmp_path: Path, monkeypatch):
    ws = init_workspace(tmp_path / "ws")

    assert current_workspace(ws.base_dir / "views" / "year").base_dir == ws.base_dir

    monkeypatch.chdir(ws.base_dir / "tasks")
    assert current_workspace().base_dir == ws.base_dir

    with pytest.raises(DirectoryMissing):
        current_workspace(tmp_path / "missing")


def test_task_dir(workspace):
    assert workspace.task_dir() == workspace.base_dir / "tasks"
    with pytest.raises(DirectoryMissing):
        workspace.task_dir("nope")
