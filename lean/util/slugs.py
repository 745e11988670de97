"""
Text transforms for turning free-text task titles into filesystem-safe names.

All functions here are pure and locale independent, so the same title always
yields the same file name.
"""

import regex

_whitespace_re = regex.compile(r"\s+")

_non_slug_chars_re = regex.compile(r"[^a-z0-9_\s-]")

_underscores_re = regex.compile(r"_{2,}")

# Only the German diacritics are transliterated. Anything else outside ASCII is dropped.
_TRANSLITERATIONS = {
    "Ä": "Ae",
    "Ö": "Oe",
    "Ü": "Ue",
    "ä": "ae",
    "ö": "oe",
    "ü": "ue",
    "ß": "ss",
}

_transliteration_table = str.maketrans(_TRANSLITERATIONS)


def normalize(text: str) -> str:
    """
    Trim the ends and collapse every run of whitespace (including tabs and
    newlines) to a single space.
    """
    return _whitespace_re.sub(" ", text).strip()


def transliterate(text: str) -> str:
    """
    Replace German diacritics with their ASCII spellings, keeping case:
    `Ä -> Ae`, `ö -> oe`, `ß -> ss` and so on.
    """
    return text.translate(_transliteration_table)


def slug(text: str) -> str:
    """
    Lowercase ASCII identifier for a title, made of `[a-z0-9_-]` only.

    Unsupported characters are dropped, runs of underscores become one, and each
    whitespace run between kept characters becomes a single `_`. So `"new _TASK"`
    gives `"new__task"`: the space and the literal underscore each contribute one.
    Whitespace left at the ends after dropping characters is trimmed, so a title of
    only punctuation gives an empty slug.
    """
    text = transliterate(text).lower()
    text = _non_slug_chars_re.sub("", text)
    text = _underscores_re.sub("_", text)
    return _whitespace_re.sub("_", text.strip())


def is_slug(text: str) -> bool:
    return regex.fullmatch(r"[a-z0-9_-]*", text) is not None


## Tests


def test_normalize():
    assert normalize("  a \t b\n\nc  ") == "a b c"
    assert normalize("") == ""
    assert normalize(" \n\t ") == ""
    for text in ["x", "  x  y ", "\tx\n\ny\r\nz", "Ääß  Öö"]:
        assert normalize(normalize(text)) == normalize(text)


def test_slug_literal():
    title = normalize(" ".join([" Ääß Öö Üü MY fancy ", "new   _TASK ", " - "]))
    assert title == "Ääß Öö Üü MY fancy new _TASK -"
    assert slug(title) == "aeaess_oeoe_ueue_my_fancy_new__task_-"


def test_slug_charset():
    samples = [
        "Hello, World!",
        "  tabs\tand\nnewlines  ",
        "ÄÖÜ äöü ß",
        "café crème",
        "a___b",
        "a ! b",
        "über-Größe 2024",
        "!!!",
        "",
    ]
    for sample in samples:
        result = slug(sample)
        assert is_slug(result)
        assert result == result.lower()
        assert "___" not in result

    assert slug("a___b") == "a_b"
    assert slug("a ! b") == "a_b"
    assert slug("café crème") == "caf_crme"
    assert slug("über-Größe 2024") == "ueber-groesse_2024"
    assert slug("!!!") == ""
    assert slug("   ") == ""
    assert slug("!!! ???") == ""
    assert slug("? plan trip !") == "plan_trip"
    assert slug(" - ") == "-"


def test_transliterate_is_case_sensitive():
    assert transliterate("ÄäÖöÜüß") == "AeaeOeoeUeuess"
