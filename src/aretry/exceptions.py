r"""Exceptions raised by the retry engine and helpers to inspect them.

The engine raises three kinds of terminal errors:

- the operation's own exception, when it is not retryable,
- ``RetryLimitExceededError``, when the attempt limit is reached,
- a ``CancellationError`` subclass, when the cancellation signal fired.

Errors can be chained (``__cause__``) to the last retryable error, so the
``is_error`` and ``find_error`` helpers walk the exception chain instead of
looking only at the outermost exception.
"""

from __future__ import annotations

__all__ = [
    "CancellationError",
    "CancelledError",
    "DeadlineExceededError",
    "RetryError",
    "RetryLimitExceededError",
    "find_error",
    "is_cancellation_error",
    "is_error",
    "iter_error_chain",
]

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T", bound=BaseException)


class RetryError(Exception):
    """Base class for all exceptions defined by aretry."""


class RetryLimitExceededError(RetryError):
    """Raised when the operation failed on its last allowed attempt.

    The final error is the ``__cause__`` of this exception, so
    ``is_error(exc, original)`` finds it.

    Args:
        attempts: The number of attempts that were made.
        error: The error raised by the last attempt.
        last_error: The last retryable error seen before ``error``, if any.

    Example:
        ```pycon
        >>> from aretry.exceptions import RetryLimitExceededError
        >>> exc = RetryLimitExceededError(3, ValueError("boom"))
        >>> exc.attempts
        3
        >>> str(exc)
        'retry limit exceeded after 3 attempts: boom'

        ```
    """

    def __init__(
        self,
        attempts: int,
        error: Exception,
        last_error: Exception | None = None,
    ) -> None:
        super().__init__(f"retry limit exceeded after {attempts} attempts: {error}")
        self.attempts = attempts
        self.error = error
        self.last_error = last_error


class CancellationError(RetryError):
    """Base class for errors produced by a cancellation signal."""


class CancelledError(CancellationError):
    """The cancellation signal was explicitly cancelled."""

    def __init__(self, message: str = "operation cancelled") -> None:
        super().__init__(message)


class DeadlineExceededError(CancellationError, TimeoutError):
    """The deadline of the cancellation signal has passed."""

    def __init__(self, message: str = "deadline exceeded") -> None:
        super().__init__(message)


def iter_error_chain(exc: BaseException | None) -> Iterator[BaseException]:
    """Iterate over an exception and the exceptions it was chained to.

    The explicit ``__cause__`` and everything chained to it comes first,
    then the implicit ``__context__`` when it is not suppressed. After
    ``raise ... from ...`` the context is suppressed, so the walk is a
    single chain in the common case. Exceptions already seen are skipped.

    Args:
        exc: The exception to start from.

    Returns:
        An iterator over ``exc`` and its chained exceptions.
    """
    seen: set[int] = set()
    stack: list[BaseException] = [] if exc is None else [exc]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        if current.__context__ is not None and not current.__suppress_context__:
            stack.append(current.__context__)
        if current.__cause__ is not None:
            stack.append(current.__cause__)


def is_error(exc: BaseException | None, target: BaseException | type[BaseException]) -> bool:
    """Return whether ``target`` appears in the chain of ``exc``.

    Args:
        exc: The exception to inspect.
        target: An exception instance, matched by identity, or an
            exception type, matched with ``isinstance``.

    Returns:
        ``True`` if any exception of the chain matches ``target``.

    Example:
        ```pycon
        >>> from aretry.exceptions import is_error
        >>> cause = KeyError("missing")
        >>> try:
        ...     try:
        ...         raise cause
        ...     except KeyError as exc:
        ...         raise RuntimeError("wrapped") from exc
        ... except RuntimeError as exc:
        ...     error = exc
        ...
        >>> is_error(error, cause)
        True
        >>> is_error(error, KeyError)
        True
        >>> is_error(error, ValueError)
        False

        ```
    """
    if isinstance(target, type):
        return find_error(exc, target) is not None
    return any(e is target for e in iter_error_chain(exc))


def find_error(exc: BaseException | None, error_type: type[T]) -> T | None:
    """Return the first exception of type ``error_type`` in the chain of
    ``exc``, or ``None``."""
    for e in iter_error_chain(exc):
        if isinstance(e, error_type):
            return e
    return None


def is_cancellation_error(exc: BaseException | None) -> bool:
    """Return whether the chain of ``exc`` holds a cancellation error."""
    return find_error(exc, CancellationError) is not None
