"""
Output to the shell UI. These are for user interaction, not logging.
"""

from typing import Optional

import rich.style
from rich.console import RenderableType
from rich.text import Text

from lean.config.logger import get_console
from lean.config.text_styles import (
    COLOR_ERROR,
    COLOR_HEADING,
    COLOR_HINT,
    COLOR_KEY,
    COLOR_STATUS,
    COLOR_SUCCESS,
    emoji_bool,
)

null_style = rich.style.Style.null()


def rich_print(*args: RenderableType, **kwargs):
    """
    Print to the Rich console.
    """
    get_console().print(*args, **kwargs)


def cprint(message: RenderableType = "", *args, color=None, end="\n"):
    """
    Main way to print to the shell. Plain strings are %-formatted with any args.
    """
    if isinstance(message, str):
        text = message % args if args else message
        rich_print(Text(text, color or null_style), end=end)
    else:
        rich_print(message, end=end)


def print_status(message: str, *args):
    cprint(message, *args, color=COLOR_STATUS)


def print_error(message: str, *args):
    cprint(message, *args, color=COLOR_ERROR)


def print_success(message: str, *args):
    cprint(
        Text.assemble((emoji_bool(True), COLOR_SUCCESS), " ", message % args if args else message)
    )


def print_heading(message: str):
    cprint()
    cprint(message, color=COLOR_HEADING)


def format_name_and_value(name: str, value: str, color: Optional[str] = None) -> Text:
    return Text.assemble((name, COLOR_KEY), (": ", COLOR_HINT), (value, color or null_style))
