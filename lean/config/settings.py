import os
import threading
from contextlib import contextmanager
from enum import Enum
from logging import DEBUG, ERROR, INFO, WARNING

from pydantic.dataclasses import dataclass


APP_NAME = "lean"

MARKER_FILE = ".lean.yaml"
"""Empty file that marks the root directory of a workspace."""

EDITOR_ENV = "EDITOR"
"""Environment variable naming the editor used to author tasks."""

LOG_LEVEL_ENV = "LEAN_LOG_LEVEL"

LOG_DIR = "~/.local/state/lean/logs"

TASK_FILE_EXT = "yaml"


class LogLevel(Enum):
    debug = DEBUG
    info = INFO
    warning = WARNING
    message = WARNING  # Same as warning, just for important console messages.
    error = ERROR

    @classmethod
    def parse(cls, level_str: str):
        canon_name = level_str.strip().lower()
        if canon_name == "warn":
            canon_name = "warning"
        try:
            return cls[canon_name]
        except KeyError:
            raise ValueError(
                f"Invalid log level: `{level_str}`. Valid options are: {', '.join(f'`{name}`' for name in cls.__members__)}"
            )

    def __str__(self):
        return self.name


@dataclass
class Settings:
    console_log_level: LogLevel
    """The log level for console-based logging."""

    file_log_level: LogLevel
    """The log level for file-based logging."""

    require_description: bool
    """If true, a task with an empty description is invalid (the older, stricter rule)."""

    task_file_ext: str
    """File extension of task records and of the temporary file handed to the editor."""


def _console_log_level() -> LogLevel:
    level_str = os.environ.get(LOG_LEVEL_ENV)
    return LogLevel.parse(level_str) if level_str else LogLevel.warning


# Initial default settings.
_settings = Settings(
    console_log_level=_console_log_level(),
    file_log_level=LogLevel.info,
    require_description=False,
    task_file_ext=TASK_FILE_EXT,
)


def global_settings() -> Settings:
    """
    Read access to global settings.
    """
    return _settings


_settings_lock = threading.RLock()


@contextmanager
def update_global_settings():
    """
    Context manager for thread-safe updates to global settings.
    """
    with _settings_lock:
        yield _settings


## Tests


def test_log_level_parse():
    import pytest

    assert LogLevel.parse(" WARN ") == LogLevel.warning
    assert LogLevel.parse("debug") == LogLevel.debug
    with pytest.raises(ValueError):
        LogLevel.parse("loud")
