import os
from pathlib import Path

from conftest import tree
import pytest

from lean.config.settings import EDITOR_ENV, MARKER_FILE
from lean.main import run
from lean.workspaces.workspaces import init_workspace

EDITOR_SCRIPT = """#!/bin/sh
cat > "$1" <<'EOF'
title: Renew passport
description: Book an appointment first.
occurrence:
  type: OneTime
effort: [1.5]
created_at: 2024-06-01T08:30:00+02:00
EOF
"""


@pytest.fixture
def fake_editor(tmp_path: Path, monkeypatch) -> Path:
    script = tmp_path / "fake_editor.sh"
    script.write_text(EDITOR_SCRIPT)
    script.chmod(0o755)
    monkeypatch.setenv(EDITOR_ENV, str(script))
    return script


def test_help(capsys):
    assert run([]) == 0
    assert run(["help"]) == 0
    assert run(["--help"]) == 0
    assert "tasks add" in capsys.readouterr().out


def test_bad_arguments(capsys):
    assert run(["frobnicate"]) == 2
    assert run(["tasks", "list", "not-a-number"]) == 2
    assert run(["tasks", "show"]) == 2
    assert run(["tasks"]) == 2
    assert "usage:" in capsys.readouterr().err


def test_init(tmp_path: Path, monkeypatch):
    assert run(["init", str(tmp_path / "ws")]) == 0
    assert (tmp_path / "ws" / MARKER_FILE).is_file()

    monkeypatch.chdir(tmp_path / "ws" / "tasks")
    assert run(["init"]) == 1
    assert run(["init", "inner"]) == 1
    assert not (tmp_path / "ws" / "tasks" / "inner").exists()


def test_init_current_dir(tmp_path: Path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    assert run(["init"]) == 0
    assert (tmp_path / MARKER_FILE).is_file()


def test_no_workspace(tmp_path: Path, monkeypatch, fake_editor):
    empty = tmp_path / "empty"
    empty.mkdir()
    monkeypatch.chdir(empty)
    assert run(["tasks", "list"]) == 1
    assert run(["tasks", "add"]) == 1
    assert run(["tasks", "list", "-d", str(tmp_path / "missing")]) == 1


def test_add_needs_editor(tmp_path: Path, no_editor):
    ws = init_workspace(tmp_path / "ws")
    assert run(["tasks", "add", "-d", str(ws.base_dir)]) == 1
    assert tree(ws.tasks_dir) == []


def test_add_list_show(tmp_path: Path, monkeypatch, fake_editor, capsys):
    ws = init_workspace(tmp_path / "ws")
    monkeypatch.chdir(ws.base_dir / "views")

    assert run(["tasks", "add"]) == 0
    assert tree(ws.tasks_dir) == ["000U_renew_passport.yaml"]
    assert not [name for name in os.listdir(ws.tasks_dir) if name.startswith(".")]

    capsys.readouterr()
    assert run(["tasks", "list"]) == 0
    assert "Renew passport" in capsys.readouterr().out

    assert run(["tasks", "show", "renew passport"]) == 0
    out = capsys.readouterr().out
    assert "Book an appointment first." in out
    assert "2024-06-01T08:30:00+02:00" in out

    assert run(["tasks", "show", "no such task"]) == 1
    assert run(["tasks", "list", "-1"]) == 1


def test_add_to_missing_subdir(tmp_path: Path, fake_editor):
    ws = init_workspace(tmp_path / "ws")
    assert run(["tasks", "add", "-d", str(ws.base_dir), "-s", "work"]) == 1
    assert tree(ws.tasks_dir) == []


def test_add_editor_fails(tmp_path: Path, monkeypatch):
    ws = init_workspace(tmp_path / "ws")
    monkeypatch.setenv(EDITOR_ENV, "false")
    assert run(["tasks", "add", "-d", str(ws.base_dir)]) == 1
    assert tree(ws.tasks_dir) == []


def test_version(capsys):
    assert run(["--version"]) == 0
    assert capsys.readouterr().out.startswith("lean ")


def test_show_needs_task_ids(workspace):
    from lean.commands.task_commands import show
    from lean.errors import MissingInput

    with pytest.raises(MissingInput):
        show([], str(workspace.base_dir))
