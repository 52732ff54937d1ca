r"""aretry - Retry any fallible operation.

This package runs an operation repeatedly until it succeeds, raises a
non-retryable error, runs out of attempts, or an external cancellation
signal fires. It removes the need to hand-roll retry loops, backoff and
error classification around flaky network calls or I/O.

Key Features:
    - Attempt limit, or unlimited attempts
    - Error classification with retry and no-retry matchers
    - Fixed, random, exponential and incremental backoff, with jitter
    - Cancellation tokens with explicit cancel and deadlines
    - Retry notification handlers, with a ready-made logging handler
    - Sync and async variants sharing the same configuration

Example:
    ```pycon
    >>> from aretry import RetryLimitExceededError, do, get
    >>> from aretry.options import with_max_attempts, with_no_backoff, with_retry_for
    >>> attempts = []
    >>> def fetch():
    ...     attempts.append(1)
    ...     if len(attempts) < 3:
    ...         raise ConnectionError("reset by peer")
    ...     return {"status": "ok"}
    ...
    >>> get(fetch, with_no_backoff())
    {'status': 'ok'}
    >>> def always_fails():
    ...     raise ConnectionError("reset by peer")
    ...
    >>> try:
    ...     do(always_fails, with_max_attempts(2), with_no_backoff())
    ... except RetryLimitExceededError as exc:
    ...     exc.attempts
    ...
    2

    ```
"""

from __future__ import annotations

__all__ = [
    "AsyncRetryExecutor",
    "CancellationError",
    "CancellationToken",
    "CancelledError",
    "DeadlineExceededError",
    "RetryError",
    "RetryExecutor",
    "RetryLimitExceededError",
    "RetryOptions",
    "__version__",
    "do",
    "do_async",
    "do_async_with_options",
    "do_with_options",
    "find_error",
    "get",
    "get_async",
    "get_async_with_options",
    "get_with_options",
    "is_cancellation_error",
    "is_error",
    "new_options",
]

from importlib.metadata import PackageNotFoundError, version

from aretry.cancellation import CancellationToken
from aretry.core.config import RetryOptions
from aretry.exceptions import (
    CancellationError,
    CancelledError,
    DeadlineExceededError,
    RetryError,
    RetryLimitExceededError,
    find_error,
    is_cancellation_error,
    is_error,
)
from aretry.execute import do, do_with_options, get, get_with_options
from aretry.execute_async import (
    do_async,
    do_async_with_options,
    get_async,
    get_async_with_options,
)
from aretry.options import new_options
from aretry.retry import AsyncRetryExecutor, RetryExecutor

try:
    __version__ = version(__name__)
except PackageNotFoundError:  # pragma: no cover
    # Package is not installed, fallback if needed
    __version__ = "0.0.0"
