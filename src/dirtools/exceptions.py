"""Error taxonomy shared by the walker, the size tools and the filesystem helpers.

Each error also derives from the closest builtin ``OSError`` subclass, so callers that
already catch ``FileNotFoundError`` or ``PermissionError`` keep working.
"""

import errno
from typing import Optional

from dirtools.types import PathType


class DirToolsError(Exception):
    """
    Base class for all errors reported by dirtools.

    Attributes:
        message (str): Human-readable description of the failure.
        path (Optional[str]): The path the failure relates to, if any.

    Example:
        >>> error = DirToolsError("Something went wrong", "/tmp/x")
        >>> str(error)
        'Something went wrong'
        >>> error.path
        '/tmp/x'
    """

    def __init__(self, message: str, path: Optional[PathType] = None) -> None:
        self.message = message
        self.path = str(path) if path is not None else None
        super().__init__(message)


class NotFoundError(DirToolsError, FileNotFoundError):
    """
    Raised when a path does not exist, or is not a directory where one is required.

    Example:
        >>> error = NotFoundError("Path does not exist: /missing", "/missing")
        >>> isinstance(error, FileNotFoundError)
        True
    """


class PermissionDeniedError(DirToolsError, PermissionError):
    """
    Raised when the process lacks the rights to read or modify a path.

    Example:
        >>> error = PermissionDeniedError("Access denied to /root", "/root")
        >>> isinstance(error, PermissionError)
        True
    """


class AlreadyExistsError(DirToolsError, FileExistsError):
    """Raised when a destination path is already taken."""


class InvalidArgumentError(DirToolsError, ValueError):
    """
    Raised for malformed count, extension or name arguments.

    Example:
        >>> error = InvalidArgumentError("Count must be a positive integer, got 0")
        >>> str(error)
        'Count must be a positive integer, got 0'
    """


class OperationFailedError(DirToolsError):
    """Raised for any other filesystem failure that aborts an operation."""


def error_from_os(error: OSError, path: Optional[PathType] = None) -> DirToolsError:
    """Translate an ``OSError`` into the matching dirtools error.

    Args:
        error: The error raised by the operating system call.
        path: Fallback path to report when the error carries no filename.

    Returns:
        A DirToolsError subclass instance describing the same failure. Errors that are
        already DirToolsError instances are returned unchanged.

    Example:
        >>> mapped = error_from_os(FileNotFoundError(2, "No such file or directory", "/nope"))
        >>> type(mapped).__name__, mapped.path
        ('NotFoundError', '/nope')
    """
    if isinstance(error, DirToolsError):
        return error

    filename = error.filename if error.filename is not None else path
    reason = error.strerror or str(error)
    message = f"{reason}: {filename}" if filename is not None else reason

    if isinstance(error, FileNotFoundError) or error.errno == errno.ENOENT:
        return NotFoundError(message, filename)
    if isinstance(error, PermissionError) or error.errno in (errno.EACCES, errno.EPERM):
        return PermissionDeniedError(message, filename)
    if isinstance(error, FileExistsError) or error.errno == errno.EEXIST:
        return AlreadyExistsError(message, filename)
    return OperationFailedError(message, filename)
