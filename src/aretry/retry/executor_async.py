r"""Asynchronous retry executor.

This module provides the AsyncRetryExecutor class that runs an async
operation in a retry loop driven by a ``RetryOptions``.
"""

from __future__ import annotations

__all__ = ["AsyncRetryExecutor"]

import inspect
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
from aretry.utils.sleep import calculate_sleep_time, sleep_async

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.cancellation import CancellationToken
    from aretry.core.config import RetryOptions

T = TypeVar("T")


class AsyncRetryExecutor:
    """Executes an async operation with automatic retry logic.

    The loop is the same as ``RetryExecutor``'s. The backoff wait uses
    ``asyncio.sleep``, so other tasks run while a retry is pending, and it
    ends early when the cancellation token fires. The ``on_retry``
    handler is a plain function called synchronously.

    ``asyncio.CancelledError`` is a ``BaseException`` and is never
    caught: cancelling the task running the loop stops it immediately.

    Args:
        options: The retry options.
        cancellation: Optional cancellation token. Overrides
            ``options.cancellation`` when given.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry.core.config import RetryOptions
        >>> from aretry.retry import AsyncRetryExecutor
        >>> calls = []
        >>> async def flaky():
        ...     calls.append(1)
        ...     if len(calls) < 2:
        ...         raise ConnectionError("reset")
        ...     return "ok"
        ...
        >>> asyncio.run(AsyncRetryExecutor(RetryOptions(backoff=None)).execute(flaky))
        'ok'

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

    async def execute(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds or a terminal condition is
        reached.

        Args:
            operation: Zero-argument callable returning an awaitable.

        Returns:
            The value of the first successful attempt.

        Raises:
            CancellationError: If the cancellation token fired.
            RetryLimitExceededError: If the last allowed attempt failed
                with a retryable error.
            Exception: The error of the operation if it is not retryable.
            TypeError: If ``operation`` returns something that is not
                awaitable. This is never retried.
        """
        options = self.options
        attempts = 0
        last_error: Exception | None = None

        while True:
            check_cancellation(self.cancellation, last_error, options)

            attempts += 1
            try:
                result = operation()
                if inspect.isawaitable(result):
                    return await result
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
            else:
                msg = (
                    "operation must return an awaitable, "
                    f"got {type(result).__name__}; use do or get for sync callables"
                )
                raise TypeError(msg)

            cancelled = False
            if options.backoff is not None:
                delay = calculate_sleep_time(options.backoff, error, attempts)
                cancelled = await sleep_async(delay, self.cancellation)

            if not is_cancellation_error(error):
                last_error = error
            if not cancelled:
                invoke_on_retry(options.on_retry, error, attempts)
