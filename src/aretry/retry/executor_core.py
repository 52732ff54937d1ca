r"""Shared core logic for retry executors.

This module provides helper functions used by both the synchronous and
the asynchronous retry executors: cancellation checks and construction of
the terminal errors.
"""

from __future__ import annotations

__all__ = [
    "check_cancellation",
    "combine_errors",
    "copy_error",
    "create_limit_exceeded_error",
    "log_attempt",
]

import logging
from typing import TYPE_CHECKING

from aretry.exceptions import RetryLimitExceededError, is_cancellation_error
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.cancellation import CancellationToken
    from aretry.core.config import RetryOptions

logger: logging.Logger = logging.getLogger("aretry.retry.executor")


def copy_error(error: Exception) -> Exception:
    """Return a shallow copy of ``error``.

    The copy has the same type, ``args``, attributes and traceback. Its
    ``__init__`` is not called, so exceptions with a custom signature can
    be copied too. Chaining attributes are not copied.
    """
    copied = type(error).__new__(type(error), *error.args)
    copied.__dict__.update(vars(error))
    copied.__traceback__ = error.__traceback__
    return copied


def combine_errors(
    error: Exception,
    last_error: Exception | None,
    join_cancel_error: bool,
) -> Exception:
    """Chain a cancellation error to the last retryable error.

    When ``join_cancel_error`` is set and ``error`` is a cancellation
    error, a copy of ``error`` is returned whose ``__cause__`` is
    ``last_error`` and whose ``__context__`` is ``error`` itself, so both
    the last error and the whole chain of ``error`` stay reachable. The
    caller's exception object is never modified. Any other error is
    returned untouched.

    Args:
        error: The terminal error.
        last_error: The last retryable, non-cancellation error, if any.
        join_cancel_error: Whether cancellation errors are joined.

    Returns:
        ``error``, or its joined copy.

    Example:
        ```pycon
        >>> from aretry.exceptions import CancelledError, is_error
        >>> from aretry.retry.executor_core import combine_errors
        >>> stop = CancelledError("stop")
        >>> last = ConnectionError("reset")
        >>> joined = combine_errors(stop, last, join_cancel_error=True)
        >>> joined is stop, is_error(joined, last), is_error(joined, stop)
        (False, True, True)
        >>> stop.__cause__ is None
        True

        ```
    """
    if (
        not join_cancel_error
        or last_error is None
        or last_error is error
        or not is_cancellation_error(error)
    ):
        return error
    joined = copy_error(error)
    joined.__cause__ = last_error
    joined.__context__ = error
    # Setting __cause__ suppresses the context, which holds the original chain
    joined.__suppress_context__ = False
    return joined



def check_cancellation(
    cancellation: CancellationToken | None,
    last_error: Exception | None,
    options: RetryOptions,
) -> None:
    """Raise the cancellation error if the token has fired.

    Args:
        cancellation: The cancellation token, if any.
        last_error: The last retryable error of the run, if any.
        options: The retry options.

    Raises:
        CancellationError: If the token was cancelled or its deadline
            has passed.
    """
    if cancellation is None:
        return
    error = cancellation.error()
    if error is not None:
        logger.debug(f"Retry loop stopped by cancellation: {error}")
        raise combine_errors(error, last_error, options.join_cancel_error)


def create_limit_exceeded_error(
    attempts: int,
    error: Exception,
    last_error: Exception | None,
    options: RetryOptions,
) -> RetryLimitExceededError:
    """Create the error raised when the attempt limit is reached.

    The final error, combined with the last retryable error, is set as
    the ``__cause__`` of the returned exception.
    """
    combined = combine_errors(error, last_error, options.join_cancel_error)
    exc = RetryLimitExceededError(attempts, combined, last_error)
    exc.__cause__ = combined
    return exc


def log_attempt(
    error: Exception,
    attempts: int,
    options: RetryOptions,
    outcome: str,
) -> None:
    """Log a failed attempt at DEBUG level with structured fields."""
    limit = options.max_attempts or "unlimited"
    log_structured(
        logger,
        logging.DEBUG,
        f"Attempt {attempts}/{limit} failed with {type(error).__name__}: {outcome}",
        attempt=attempts,
        max_attempts=options.max_attempts,
        error_type=type(error).__name__,
    )
