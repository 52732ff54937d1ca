r"""Error matchers used to classify errors as retryable or not.

An error matcher is a predicate ``(error) -> bool``. Matchers inspect the
whole exception chain, so an error wrapped with ``raise ... from ...``
still matches.
"""

from __future__ import annotations

__all__ = ["any_match", "err_as", "err_is"]

from typing import TYPE_CHECKING

from aretry.exceptions import find_error, is_error

if TYPE_CHECKING:
    from aretry.core.config import ErrorMatcher


def err_is(*targets: BaseException | type[BaseException]) -> ErrorMatcher:
    """Return a matcher selecting errors whose chain contains one of the
    targets.

    Args:
        *targets: Exception instances, matched by identity, or exception
            types, matched with ``isinstance``.

    Returns:
        The error matcher.

    Raises:
        TypeError: If no target is given.

    Example:
        ```pycon
        >>> from aretry.matchers import err_is
        >>> sentinel = ConnectionError("reset")
        >>> matcher = err_is(sentinel, TimeoutError)
        >>> matcher(sentinel)
        True
        >>> matcher(TimeoutError())
        True
        >>> matcher(ConnectionError("reset"))  # Another instance
        False

        ```
    """
    if not targets:
        msg = "err_is() requires at least one target"
        raise TypeError(msg)

    def matcher(error: Exception) -> bool:
        return any(is_error(error, target) for target in targets)

    return matcher


def err_as(*error_types: type[BaseException]) -> ErrorMatcher:
    """Return a matcher selecting errors whose chain contains an instance of
    one of the given types."""
    if not error_types:
        msg = "err_as() requires at least one error type"
        raise TypeError(msg)
    for error_type in error_types:
        if not (isinstance(error_type, type) and issubclass(error_type, BaseException)):
            msg = f"err_as() expects exception types, got {error_type!r}"
            raise TypeError(msg)

    def matcher(error: Exception) -> bool:
        return find_error(error, error_types) is not None  # type: ignore[arg-type]

    return matcher


def any_match(*matchers: ErrorMatcher) -> ErrorMatcher:
    """Combine matchers into one that matches if any of them matches.

    A single matcher is returned unchanged.

    Raises:
        TypeError: If no matcher is given.
    """
    if not matchers:
        msg = "any_match() requires at least one matcher"
        raise TypeError(msg)
    if len(matchers) == 1:
        return matchers[0]

    def matcher(error: Exception) -> bool:
        return any(m(error) for m in matchers)

    return matcher
