import shlex
from pathlib import Path
from textwrap import indent
from typing import Any, Iterable

import regex
from strif import abbrev_str


def fmt_lines(values: Iterable[Any], prefix: str = "    ", line_break: str = "\n") -> str:
    """
    Simple indented or prefixed formatting of values one per line.
    """
    return indent(line_break.join(str(value) for value in values), prefix).rstrip()


def _trim_trailing_punctuation(text: str) -> str:
    return regex.sub(r"[.,;:!?]+$", "", text)


def abbreviate_on_words(text: str, max_len: int, indicator: str = "…") -> str:
    """
    Abbreviate text to a maximum length, breaking on whole words (unless the first word
    is too long). For aesthetics, removes trailing punctuation from the last word.
    """
    if len(text) <= max_len:
        return text
    words = text.split()

    if words and max_len and len(words[0]) > max_len:
        return abbrev_str(words[0], max_len, indicator)

    while words and len(_trim_trailing_punctuation(" ".join(words))) + len(indicator) > max_len:
        words.pop()

    return _trim_trailing_punctuation(" ".join(words)) + indicator


def fmt_path(path: str | Path, resolve: bool = True) -> str:
    """
    Format a path or filename for display. This quotes it if it contains whitespace.

    :param resolve: If true paths are resolved. If they are within the current working
    directory, they are formatted as relative. Otherwise, they are formatted as absolute.
    """
    if resolve:
        path = Path(path).resolve()
        cwd = Path.cwd().resolve()
        if path.is_relative_to(cwd):
            path = path.relative_to(cwd)
    else:
        path = Path(path)

    return shlex.quote(str(path))


def fmt_percent(fraction: float) -> str:
    return f"{int(fraction * 100)}%"


## Tests


def test_abbreviate_on_words():
    assert abbreviate_on_words("Hello, World!", 6) == "Hello…"
    assert abbreviate_on_words("Hello, World!", 13) == "Hello, World!"
    assert abbreviate_on_words("Hello, World!", 12) == "Hello…"
    assert abbreviate_on_words("", 5) == ""


def test_fmt_path():
    assert fmt_path("/tmp/some dir/x.yaml", resolve=False) == "'/tmp/some dir/x.yaml'"
    assert fmt_path("tasks/000U_x.yaml", resolve=False) == "tasks/000U_x.yaml"


def test_fmt_lines():
    assert fmt_lines(["a", "b"]) == "    a\n    b"
