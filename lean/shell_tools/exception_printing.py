from typing import Callable

from lean.config.logger import get_logger
from lean.errors import is_fatal
from lean.shell.shell_output import print_error

log = get_logger(__name__)


def summarize_exception(exception: Exception) -> str:
    """
    One-paragraph description of an error for the user. Self-explanatory errors are
    shown as is; anything else is prefixed with its type.
    """
    message = str(exception).strip()
    if is_fatal(exception) or not message:
        exc_type = type(exception).__name__
        return f"{exc_type}: {message}" if message else exc_type
    return message


def report_exception(exception: Exception, print_usage: Callable[[], None]) -> int:
    """
    Report an error from a command and return the exit status to use.
    """
    print_error("Error: %s", summarize_exception(exception))
    if is_fatal(exception):
        log.error("Unexpected error", exc_info=exception)
    else:
        log.info("Command error details: %s", exception, exc_info=exception)
    print_usage()
    return 1


## Tests


def test_summarize_exception():
    from lean.errors import NotEmpty

    assert summarize_exception(NotEmpty("Directory is not empty")) == "Directory is not empty"
    assert summarize_exception(FileNotFoundError(2, "No such file")) == "[Errno 2] No such file"
    assert summarize_exception(KeyError("x")) == "KeyError: 'x'"
    assert summarize_exception(RuntimeError()) == "RuntimeError"
