import tempfile
from pathlib import Path
from typing import Callable, List

import pytest

from lean.config.settings import EDITOR_ENV, MARKER_FILE
from lean.file_formats.yaml_util import read_yaml_file, to_yaml_string
from lean.workspaces.workspaces import init_workspace, Workspace


@pytest.fixture(autouse=True)
def no_stray_marker_in_temp_dir():
    """
    A marker left in the system temp directory by an earlier run would make every
    test workspace look nested, so remove it.
    """
    stray = Path(tempfile.gettempdir()) / MARKER_FILE
    if stray.is_file():
        stray.unlink()
    yield


@pytest.fixture
def workspace(tmp_path: Path) -> Workspace:
    return init_workspace(tmp_path / "ws")


@pytest.fixture
def no_editor(monkeypatch):
    monkeypatch.delenv(EDITOR_ENV, raising=False)


def update_fields(**fields) -> Callable[[Path], None]:
    """
    A stand-in editor that sets the given fields in the draft.
    """

    def editor(path: Path):
        data = read_yaml_file(path)
        data.update(fields)
        path.write_text(to_yaml_string(data), encoding="utf-8")

    return editor


def write_text(text: str) -> Callable[[Path], None]:
    def editor(path: Path):
        path.write_text(text, encoding="utf-8")

    return editor


class EditorScript:
    """
    Stand-in editor that runs a different edit each time it is opened and records
    what the file held when it was opened.
    """

    def __init__(self, *edits: Callable[[Path], None]):
        self.edits = list(edits)
        self.opened: List[str] = []
        self.paths: List[Path] = []

    def __call__(self, path: Path):
        self.opened.append(path.read_text(encoding="utf-8", errors="replace"))
        self.paths.append(path)
        self.edits.pop(0)(path)


class Answers:
    """
    Stand-in for the user typing answers to questions.
    """

    def __init__(self, *answers: str):
        self.answers = list(answers)
        self.questions: List[str] = []

    def __call__(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0)


def tree(path: Path) -> List[str]:
    return sorted(str(p.relative_to(path)) for p in path.rglob("*"))
