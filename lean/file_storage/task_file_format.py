"""
Reading and writing task records as YAML files.
"""

from pathlib import Path

from pydantic import ValidationError
from ruamel.yaml.error import YAMLError

from lean.config.logger import get_logger
from lean.errors import FileFormatError
from lean.file_formats.yaml_util import read_yaml_file, to_yaml_string, write_yaml_file
from lean.model.tasks_model import Task

log = get_logger(__name__)


def _summarize_validation_error(e: ValidationError) -> str:
    lines = []
    for error in e.errors():
        loc = ".".join(str(part) for part in error["loc"]) or "(record)"
        lines.append(f"{loc}: {error['msg']}")
    return "; ".join(lines)


def read_task(path: str | Path) -> Task:
    """
    Parse a task file. Raises `FileFormatError` if it isn't valid YAML or doesn't
    have the fields of a task. Does not check the title; see `Task.validation_errors`.
    """
    try:
        data = read_yaml_file(path)
    except UnicodeDecodeError as e:
        raise FileFormatError(f"Not UTF-8 text (save the file as UTF-8): {e}") from e
    except YAMLError as e:
        raise FileFormatError(f"Not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise FileFormatError(
            f"Expected a YAML mapping of task fields but found: {type(data).__name__}"
        )

    try:
        return Task.from_dict(data)
    except ValidationError as e:
        raise FileFormatError(f"Not a valid task: {_summarize_validation_error(e)}") from e


def write_task(task: Task, path: str | Path):
    write_yaml_file(task.to_dict(), path)
    log.info("Wrote task: %s", path)


def task_to_yaml_string(task: Task) -> str:
    return to_yaml_string(task.to_dict())
