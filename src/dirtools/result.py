"""Explicit success/failure values returned by the filesystem helpers."""

import functools
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from dirtools.exceptions import DirToolsError, error_from_os

T = TypeVar("T")


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Outcome of a filesystem operation.

    Exactly one of ``value`` and ``error`` is meaningful: a successful result carries the
    operation's value (which may itself be None), a failed one carries the error that
    stopped it. Callers inspect ``ok`` or call ``unwrap()`` to turn a failure back into
    an exception.

    Example:
        >>> OperationResult.success(42).unwrap()
        42
        >>> failed = OperationResult.failure(DirToolsError("boom"))
        >>> failed.ok
        False
        >>> str(failed.error)
        'boom'
    """

    value: Optional[T] = None
    error: Optional[DirToolsError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error if the operation failed."""
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]

    @classmethod
    def success(cls, value: T) -> "OperationResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: DirToolsError) -> "OperationResult[T]":
        return cls(error=error)


def returns_result(func: Callable[..., T]) -> Callable[..., OperationResult[T]]:
    """Wrap a function so that filesystem failures become failed results.

    DirToolsError instances are stored as-is and OSErrors are translated with
    ``error_from_os``. Anything else propagates unchanged.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> OperationResult[T]:
        try:
            return OperationResult.success(func(*args, **kwargs))
        except DirToolsError as e:
            return OperationResult.failure(e)
        except OSError as e:
            return OperationResult.failure(error_from_os(e))

    return wrapper
