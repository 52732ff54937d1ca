r"""Run an operation with automatic retries.

``do`` runs an operation for its side effects, ``get`` returns the value
of the first successful attempt. Each comes in two flavours: with option
functions applied on top of the defaults, or with a prebuilt
``RetryOptions``. All of them accept a ``cancellation`` token.
"""

from __future__ import annotations

__all__ = ["do", "do_with_options", "get", "get_with_options"]

from typing import TYPE_CHECKING, TypeVar

from aretry.options import new_options
from aretry.retry.executor import RetryExecutor

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.cancellation import CancellationToken
    from aretry.core.config import RetryOptions
    from aretry.options import RetryOption

T = TypeVar("T")


def do(
    operation: Callable[[], object],
    *options: RetryOption,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run ``operation``, retrying it when it raises.

    Args:
        operation: Zero-argument callable. Its return value is ignored.
        *options: Option functions from ``aretry.options``, applied on top
            of the defaults in order.
        cancellation: Optional cancellation token, polled before every
            attempt. Overrides ``with_cancellation``.

    Raises:
        CancellationError: If the cancellation token fired.
        RetryLimitExceededError: If every allowed attempt failed.
        Exception: The error of the operation if it is not retryable.

    Example:
        ```pycon
        >>> from aretry import do
        >>> from aretry.options import with_max_attempts, with_no_backoff
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 2:
        ...         raise ConnectionError("reset")
        ...
        >>> do(flaky, with_max_attempts(3), with_no_backoff())
        >>> len(calls)
        2

        ```
    """
    do_with_options(operation, new_options(*options), cancellation=cancellation)


def do_with_options(
    operation: Callable[[], object],
    options: RetryOptions,
    *,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run ``operation`` with a prebuilt ``RetryOptions``.

    See ``do``.
    """
    RetryExecutor(options, cancellation).execute(operation)


def get(
    operation: Callable[[], T],
    *options: RetryOption,
    cancellation: CancellationToken | None = None,
) -> T:
    """Run ``operation`` and return the value of the first successful
    attempt.

    Example:
        ```pycon
        >>> from aretry import get
        >>> from aretry.options import with_no_backoff
        >>> get(lambda: 42, with_no_backoff())
        42

        ```
    """
    return get_with_options(operation, new_options(*options), cancellation=cancellation)


def get_with_options(
    operation: Callable[[], T],
    options: RetryOptions,
    *,
    cancellation: CancellationToken | None = None,
) -> T:
    """Run ``operation`` with a prebuilt ``RetryOptions`` and return its
    value.

    See ``get``.
    """
    return RetryExecutor(options, cancellation).execute(operation)
