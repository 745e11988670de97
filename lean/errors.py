"""
Unified hierarchy of error types. These inherit from standard errors like
ValueError and FileNotFoundError but are more fine-grained.
"""

from typing import Tuple, Type


class LeanRuntimeError(ValueError):
    """Base class for lean runtime errors."""

    pass


class SelfExplanatoryError(LeanRuntimeError):
    """Common errors that arise from 'normal' problems that are largely self-explanatory,
    i.e., no stack trace should be necessary when reporting to the user."""

    pass


class InvalidInput(SelfExplanatoryError):
    """Raised when the wrong kind of input is given to a command."""

    pass


class MissingInput(InvalidInput):
    """Raised when an expected input is missing."""

    pass


class FileNotFound(InvalidInput, FileNotFoundError):
    """Raised when a file is not found."""

    pass


class InvalidFilename(InvalidInput):
    """Raised when a filename is invalid."""

    pass


class InvalidState(SelfExplanatoryError):
    """Raised when the workspace or other system state is not valid for an operation."""

    pass


class DirectoryMissing(InvalidState, FileNotFoundError):
    """Raised when a directory an operation writes into does not exist."""

    pass


class WorkspaceError(InvalidState):
    """Base class for errors about where workspaces are (or are not) on disk."""

    pass


class WorkspaceNotFound(WorkspaceError):
    """Raised when no workspace encloses a path."""

    pass


class AlreadyWorkspace(WorkspaceError):
    """Raised when an existing directory already is, or is inside, a workspace."""

    pass


class WouldNestWorkspace(WorkspaceError):
    """Raised when a new directory would be created inside an existing workspace."""

    pass


class ContainsWorkspace(WorkspaceError):
    """Raised when an existing directory already holds a workspace further down."""

    pass


class NotEmpty(WorkspaceError):
    """Raised when a directory that should be empty is not."""

    pass


class SetupError(SelfExplanatoryError):
    """Raised when something in the environment isn't set up right."""

    pass


class EditorFailed(SetupError):
    """Raised when the external editor can't be run or exits with an error."""

    pass


class ContentError(SelfExplanatoryError):
    """Raised when content is not appropriate for an operation."""

    pass


class FileFormatError(ContentError):
    """Raised when a file's content format is invalid."""

    pass


class InvalidTask(ContentError):
    """Raised when a task record parses but isn't a valid task."""

    pass


NONFATAL_EXCEPTIONS: Tuple[Type[Exception], ...] = (
    SelfExplanatoryError,
    FileNotFoundError,
    IOError,
)
"""Exceptions that are not fatal and usually don't merit a full stack trace."""


def is_fatal(exception: Exception) -> bool:
    for e in NONFATAL_EXCEPTIONS:
        if isinstance(exception, e):
            return False
    return True
