r"""Retry notification handlers.

A retry handler is called with ``(error, attempt)`` before each retry,
after the backoff wait. ``attempt`` is the 1-indexed number of the attempt
that failed. It is never called after the final attempt.

Example:
    ```pycon
    >>> import logging
    >>> from aretry import do
    >>> from aretry.callbacks import on_retry_logging
    >>> from aretry.options import with_no_backoff, with_on_retry
    >>> calls = []
    >>> def flaky():
    ...     calls.append(1)
    ...     if len(calls) < 3:
    ...         raise ConnectionError("reset")
    ...
    >>> do(flaky, with_no_backoff(), with_on_retry(on_retry_logging(logging.INFO, "flaky failed")))
    >>> len(calls)
    3

    ```
"""

from __future__ import annotations

__all__ = ["compose_handlers", "invoke_on_retry", "on_retry_logging"]

import logging
from typing import TYPE_CHECKING

from aretry.core.config import DEFAULT_MAX_ATTEMPTS
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.core.config import OnRetryHandler

logger: logging.Logger = logging.getLogger(__name__)


def compose_handlers(*handlers: OnRetryHandler) -> OnRetryHandler:
    """Combine handlers into one that calls each of them in order.

    A single handler is returned unchanged.

    Raises:
        TypeError: If no handler is given.
    """
    if not handlers:
        msg = "compose_handlers() requires at least one handler"
        raise TypeError(msg)
    if len(handlers) == 1:
        return handlers[0]

    def handler(error: Exception, attempt: int) -> None:
        for h in handlers:
            h(error, attempt)

    return handler


def on_retry_logging(
    level: int,
    message: str,
    log: logging.Logger | None = None,
) -> OnRetryHandler:
    """Return a handler logging a message on every retry.

    The record is logged at ``logging.ERROR`` instead of ``level`` once
    the attempt number reaches ``DEFAULT_MAX_ATTEMPTS``.

    Args:
        level: The logging level, e.g. ``logging.WARNING``.
        message: The message prefix.
        log: The logger to use. Defaults to this module's logger.

    Returns:
        The retry handler.
    """
    target = log if log is not None else logger

    def handler(error: Exception, attempt: int) -> None:
        record_level = logging.ERROR if attempt >= DEFAULT_MAX_ATTEMPTS else level
        log_structured(
            target,
            record_level,
            f"{message} - retries #{attempt} {error}",
            attempt=attempt,
            error_type=type(error).__name__,
        )

    return handler


def invoke_on_retry(on_retry: OnRetryHandler | None, error: Exception, attempt: int) -> None:
    """Invoke on_retry handler if provided.

    Exceptions raised by the handler are not caught: they end the retry
    loop and propagate to the caller.

    Args:
        on_retry: Optional handler to invoke before a retry.
        error: The error that triggered the retry.
        attempt: The 1-indexed number of the attempt that failed.
    """
    if on_retry is not None:
        on_retry(error, attempt)
