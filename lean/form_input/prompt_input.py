from typing import Callable, Optional

from InquirerPy.prompts.input import InputPrompt
from InquirerPy.utils import InquirerPyStyle

from lean.config.text_styles import PROMPT_FORM

custom_style = InquirerPyStyle(
    {
        "questionmark": "#a0d8a0",
        "answermark": "#808080",
        "answer": "#e0e0e0",
        "input": "#e0e0e0",
        "question": "#a0d8a0 bold",
        "answered_question": "#808080",
        "instruction": "#808080",
        "long_instruction": "#808080",
        "validator": "",
    }
)


def _prompt_message(prompt_text: str, prompt_symbol: str) -> str:
    prompt_text = prompt_text.strip()
    sep = "\n" if len(prompt_text) > 40 else " "
    return f"{prompt_text}{sep}{prompt_symbol}"


def prompt_line(prompt_text: str = "", prompt_symbol: str = f"{PROMPT_FORM}") -> str:
    """
    Read one line from the user. Raises `EOFError` if input is closed.
    """
    prompt_message = _prompt_message(prompt_text, prompt_symbol)
    return InputPrompt(message=prompt_message, style=custom_style).execute()


def parse_yes_no(answer: str, default: bool) -> Optional[bool]:
    """
    Interpret an answer to a yes/no question. Blank means the default; anything
    unrecognized is None.
    """
    answer = answer.strip().lower()
    if not answer:
        return default
    if answer == "y":
        return True
    if answer == "n":
        return False
    return None


def prompt_yes_no(
    question: str,
    default: bool = True,
    ask: Callable[[str], str] = prompt_line,
    on_invalid: Optional[Callable[[str], None]] = None,
) -> bool:
    """
    Ask a yes/no question until it gets a usable answer. If input is closed there
    is no one to say yes, so the answer is no.
    """
    hint = "[Y/n]" if default else "[y/N]"
    while True:
        try:
            answer = ask(f"{question} {hint}")
        except EOFError:
            return False

        decision = parse_yes_no(answer, default)
        if decision is not None:
            return decision
        if on_invalid:
            on_invalid(answer)


## Tests


def test_parse_yes_no():
    assert parse_yes_no("", default=True) is True
    assert parse_yes_no("  ", default=False) is False
    assert parse_yes_no("Y", default=False) is True
    assert parse_yes_no("n", default=True) is False
    assert parse_yes_no("yes", default=True) is None
    assert parse_yes_no("N ", default=True) is False
    assert parse_yes_no("maybe", default=True) is None


def test_prompt_yes_no_reprompts():
    answers = iter(["what", "?", "n"])
    asked = []
    invalid = []

    def ask(question: str) -> str:
        asked.append(question)
        return next(answers)

    assert prompt_yes_no("Fix it?", ask=ask, on_invalid=invalid.append) is False
    assert asked == ["Fix it? [Y/n]"] * 3
    assert invalid == ["what", "?"]


def test_prompt_yes_no_eof():
    def ask(question: str) -> str:
        raise EOFError()

    assert prompt_yes_no("Fix it?", ask=ask) is False
