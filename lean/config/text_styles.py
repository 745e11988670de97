"""
Settings that define the visual appearance of text outputs.
"""

## Colors

COLOR_HEADING = "bold bright_green"

COLOR_STATUS = "yellow"

COLOR_KEY = "bright_blue"

COLOR_PATH = "cyan"

COLOR_HINT = "bright_black"

COLOR_SUCCESS = "green"

COLOR_ERROR = "bright_red"

# Task states, as shown in listings.
COLOR_TASK_FINISHED = "green"

COLOR_TASK_PAUSED = "yellow"

COLOR_TASK_IN_PROGRESS = "bright_blue"

COLOR_TASK_UNSTARTED = "default"


## Symbols and emojis

PROMPT_FORM = "❯❯"

EMOJI_WARN = "△"

EMOJI_ERROR = EMOJI_WARN + EMOJI_WARN

EMOJI_TRUE = "✓"

EMOJI_FALSE = "✗"


def emoji_bool(value: bool) -> str:
    return EMOJI_TRUE if value else EMOJI_FALSE
