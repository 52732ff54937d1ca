r"""Synchronous retry executor.

This module provides the RetryExecutor class that runs an operation in a
retry loop driven by a ``RetryOptions``.
"""

from __future__ import annotations

__all__ = ["RetryExecutor"]

from typing import TYPE_CHECKING, TypeVar

from aretry.callbacks import invoke_on_retry
from aretry.exceptions import is_cancellation_error
from aretry.retry.decider import RetryDecider
from aretry.retry.executor_core import (
    check_cancellation,
    combine_errors,
    create_limit_exceeded_error,
    log_attempt,
)
from aretry.utils.sleep import calculate_sleep_time, sleep

if TYPE_CHECKING:
    from collections.abc import Callable

    from aretry.cancellation import CancellationToken
    from aretry.core.config import RetryOptions

T = TypeVar("T")


class RetryExecutor:
    """Executes an operation with automatic retry logic.

    Each iteration of the loop:

    1. raises the cancellation error if the token has fired,
    2. calls the operation and returns its value on success,
    3. raises the error as-is if it is not retryable,
    4. raises ``RetryLimitExceededError`` if the attempt limit is reached,
    5. waits for the backoff delay,
    6. calls the ``on_retry`` handler,
    7. remembers the error as the last retryable error.

    The executor holds no per-run state, so one instance can run any
    number of operations, including concurrently from several threads.

    Args:
        options: The retry options.
        cancellation: Optional cancellation token. Overrides
            ``options.cancellation`` when given.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryOptions
        >>> from aretry.retry import RetryExecutor
        >>> calls = []
        >>> def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 3:
        ...         raise ConnectionError("reset")
        ...     return "ok"
        ...
        >>> executor = RetryExecutor(RetryOptions(backoff=None))
        >>> executor.execute(flaky)
        'ok'
        >>> len(calls)
        3

        ```
    """

    def __init__(
        self,
        options: RetryOptions,
        cancellation: CancellationToken | None = None,
    ) -> None:
        self.options = options
        self.cancellation = cancellation if cancellation is not None else options.cancellation
        self.decider: RetryDecider = RetryDecider(options)

    def execute(self, operation: Callable[[], T]) -> T:
        """Run ``operation`` until it succeeds or a terminal condition is
        reached.

        Args:
            operation: Zero-argument callable. Raising an ``Exception``
                marks the attempt as failed.

        Returns:
            The value returned by the first successful attempt.

        Raises:
            CancellationError: If the cancellation token fired.
            RetryLimitExceededError: If the last allowed attempt failed
                with a retryable error.
            Exception: The error of the operation if it is not retryable.
        """
        options = self.options
        attempts = 0
        last_error: Exception | None = None

        while True:
            check_cancellation(self.cancellation, last_error, options)

            attempts += 1
            try:
                return operation()
            except Exception as exc:
                should_retry, reason = self.decider.should_retry(exc)
                if not should_retry:
                    log_attempt(exc, attempts, options, f"not retryable ({reason})")
                    raise combine_errors(exc, last_error, options.join_cancel_error)
                if self.decider.limit_reached(attempts):
                    log_attempt(exc, attempts, options, "attempt limit reached")
                    raise create_limit_exceeded_error(attempts, exc, last_error, options)
                log_attempt(exc, attempts, options, f"will retry ({reason})")
                error = exc

            cancelled = False
            if options.backoff is not None:
                delay = calculate_sleep_time(options.backoff, error, attempts)
                cancelled = sleep(delay, self.cancellation)

            if not is_cancellation_error(error):
                last_error = error
            if not cancelled:
                invoke_on_retry(options.on_retry, error, attempts)
