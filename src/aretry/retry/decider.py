r"""Retry decision logic for determining whether to retry an error.

This module provides the RetryDecider class that encapsulates the error
classification rules of a ``RetryOptions``.
"""

from __future__ import annotations

__all__ = ["RetryDecider"]

from typing import TYPE_CHECKING

from aretry.exceptions import is_cancellation_error

if TYPE_CHECKING:
    from aretry.core.config import RetryOptions


class RetryDecider:
    """Decides whether an error should be retried.

    An error is retryable when all of the following hold:

    - ``no_retry_if`` is not set or does not match the error,
    - the error is not a cancellation error, unless
      ``retry_on_cancel_error`` is set,
    - ``retry_if`` is not set or matches the error.

    The attempt limit is checked separately by ``limit_reached``.

    Args:
        options: The retry options.
    """

    def __init__(self, options: RetryOptions) -> None:
        self.options = options

    def should_retry(self, error: Exception) -> tuple[bool, str]:
        """Determine if an error is retryable.

        Args:
            error: The error raised by the operation.

        Returns:
            Tuple of (should_retry, reason).

        Example:
            ```pycon
            >>> from aretry.core.config import RetryOptions
            >>> from aretry.matchers import err_as
            >>> from aretry.retry.decider import RetryDecider
            >>> decider = RetryDecider(RetryOptions(no_retry_if=err_as(KeyError)))
            >>> decider.should_retry(ValueError())
            (True, 'ValueError')
            >>> decider.should_retry(KeyError())
            (False, 'no_retry_if matched')

            ```
        """
        options = self.options
        if options.no_retry_if is not None and options.no_retry_if(error):
            return (False, "no_retry_if matched")
        if not options.retry_on_cancel_error and is_cancellation_error(error):
            return (False, "cancellation error")
        if options.retry_if is None:
            return (True, type(error).__name__)
        if options.retry_if(error):
            return (True, "retry_if matched")
        return (False, "retry_if did not match")

    def limit_reached(self, attempts: int) -> bool:
        """Return whether ``attempts`` attempts exhaust the limit."""
        return self.options.max_attempts > 0 and attempts >= self.options.max_attempts
