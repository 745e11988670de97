import logging
import os
import threading
from functools import cache
from logging import Formatter
from pathlib import Path
from typing import Optional

import rich
from rich.console import Console
from rich.logging import RichHandler

from lean.config.settings import global_settings, LOG_DIR
from lean.config.text_styles import EMOJI_ERROR, EMOJI_WARN

LOG_FILE_NAME = "lean.log"

_log_root = Path(LOG_DIR).expanduser()

_log_lock = threading.RLock()

_file_handler: Optional[logging.FileHandler] = None
_console_handler: Optional[RichHandler] = None


def log_dir() -> Path:
    return _log_root


def log_file_path() -> Path:
    return log_dir() / LOG_FILE_NAME


@cache
def get_console() -> Console:
    """
    Return the Rich global console.
    """
    return rich.get_console()


def logging_setup(file_logging: bool = True):
    """
    Set up or reset logging setup. Call once at startup, and again if the log directory
    changes. Replaces all previous handlers on the root logger.
    """
    global _file_handler, _console_handler

    with _log_lock:
        handlers: list[logging.Handler] = []

        # Verbose logging to file, important logging to console.
        if file_logging:
            os.makedirs(log_dir(), exist_ok=True)
            _file_handler = logging.FileHandler(log_file_path())
            _file_handler.setLevel(global_settings().file_log_level.value)
            _file_handler.setFormatter(
                Formatter("%(asctime)s %(levelname).1s %(name)s - %(message)s")
            )
            handlers.append(_file_handler)

        _console_handler = RichHandler(
            console=get_console(),
            level=global_settings().console_log_level.value,
            show_time=False,
            show_path=False,
            show_level=False,
            markup=True,
        )
        _console_handler.setLevel(global_settings().console_log_level.value)
        _console_handler.setFormatter(Formatter("%(message)s"))
        handlers.append(_console_handler)

        root = logging.getLogger()
        root.setLevel(min(h.level for h in handlers))
        # Remove any existing handlers.
        for handler in root.handlers[:]:
            root.removeHandler(handler)
        for handler in handlers:
            root.addHandler(handler)


def prefix(line, emoji: str = "", warn_emoji: str = ""):
    emojis = f"{warn_emoji}{emoji}".strip()
    return " ".join(filter(None, [emojis, line]))


def prefix_args(args, emoji: str = "", warn_emoji: str = ""):
    if len(args) > 0:
        args = (prefix(args[0], emoji, warn_emoji),) + args[1:]
    return args


class CustomLogger:
    """
    Custom logger to be clearer about user messages.
    """

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    def debug(self, *args, **kwargs):
        self.logger.debug(*prefix_args(args), **kwargs)

    def info(self, *args, **kwargs):
        self.logger.info(*prefix_args(args), **kwargs)

    def message(self, *args, **kwargs):
        self.logger.warning(*prefix_args(args), **kwargs)

    def warning(self, *args, **kwargs):
        self.logger.warning(*prefix_args(args, warn_emoji=EMOJI_WARN), **kwargs)

    def error(self, *args, **kwargs):
        self.logger.error(*prefix_args(args, warn_emoji=EMOJI_ERROR), **kwargs)

    # Fallback for other attributes/methods.
    def __getattr__(self, attr):
        return getattr(self.logger, attr)


def get_logger(name: str):
    return CustomLogger(name)
