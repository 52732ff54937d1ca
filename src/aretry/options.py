r"""Composable option functions building a ``RetryOptions``.

An option is a function ``RetryOptions -> RetryOptions``. Options are
applied in order on top of the defaults, so later options override
earlier ones. Options never mutate their input.

Example:
    ```pycon
    >>> from aretry.options import new_options, with_max_attempts, with_no_backoff
    >>> options = new_options(with_max_attempts(3), with_no_backoff())
    >>> options.max_attempts
    3
    >>> options.backoff is None
    True

    ```
"""

from __future__ import annotations

__all__ = [
    "RetryOption",
    "new_options",
    "with_backoff",
    "with_cancellation",
    "with_exponential_backoff",
    "with_exponential_random_backoff",
    "with_fixed_backoff",
    "with_join_cancel_error",
    "with_max_attempts",
    "with_no_backoff",
    "with_no_retry_for",
    "with_no_retry_if",
    "with_on_retry",
    "with_on_retry_logging",
    "with_options",
    "with_random_backoff",
    "with_retry_for",
    "with_retry_if",
    "with_retry_on_cancel_error",
    "with_unlimited_attempts",
]

from dataclasses import replace
from typing import TYPE_CHECKING, Callable

from aretry.backoff import (
    ExponentialBackoff,
    ExponentialRandomBackoff,
    FixedBackoff,
    RandomBackoff,
)
from aretry.callbacks import compose_handlers, on_retry_logging
from aretry.core.config import DEFAULT_MULTIPLIER, RetryOptions
from aretry.matchers import any_match, err_is

if TYPE_CHECKING:
    import logging

    from aretry.backoff.base import BackoffStrategy
    from aretry.cancellation import CancellationToken
    from aretry.core.config import ErrorMatcher, OnRetryHandler

RetryOption = Callable[[RetryOptions], RetryOptions]


def new_options(*options: RetryOption) -> RetryOptions:
    """Build a ``RetryOptions`` by applying ``options`` on top of the
    defaults.

    Defaults: 5 attempts, 200 ms fixed backoff with up to 100 ms of
    jitter, every error but cancellation errors retried, no handler.
    """
    result = RetryOptions()
    for option in options:
        result = option(result)
    return result


def with_options(options: RetryOptions) -> RetryOption:
    """Start from a copy of ``options``.

    Useful to customize a shared configuration for one call: options
    given after this one still override it, and ``options`` itself is
    left unchanged.
    """
    return lambda _: options


def with_max_attempts(attempts: int) -> RetryOption:
    """Set the maximum number of attempts. 0 means unlimited, 1 means no
    retry."""
    return lambda options: replace(options, max_attempts=attempts)


def with_unlimited_attempts() -> RetryOption:
    """Retry until success, a non-retryable error, or cancellation."""
    return with_max_attempts(0)


def with_retry_if(*matchers: ErrorMatcher) -> RetryOption:
    """Retry only the errors matched by any of ``matchers``.

    If not specified, all errors are retried except cancellation errors.
    """
    matcher = any_match(*matchers)
    return lambda options: replace(options, retry_if=matcher)


def with_retry_for(*errors: BaseException | type[BaseException]) -> RetryOption:
    """Retry only the given errors, matched by identity or type anywhere
    in the exception chain."""
    matcher = err_is(*errors)
    return lambda options: replace(options, retry_if=matcher)


def with_no_retry_if(*matchers: ErrorMatcher) -> RetryOption:
    """Never retry the errors matched by any of ``matchers``.

    Takes precedence over ``with_retry_if`` and ``with_retry_for``.
    """
    matcher = any_match(*matchers)
    return lambda options: replace(options, no_retry_if=matcher)


def with_no_retry_for(*errors: BaseException | type[BaseException]) -> RetryOption:
    """Never retry the given errors, matched by identity or type anywhere
    in the exception chain."""
    matcher = err_is(*errors)
    return lambda options: replace(options, no_retry_if=matcher)


def with_backoff(strategy: BackoffStrategy) -> RetryOption:
    """Use a backoff strategy. See ``aretry.backoff``."""
    return lambda options: replace(options, backoff=strategy)


def with_no_backoff() -> RetryOption:
    """Retry immediately, without waiting."""
    return lambda options: replace(options, backoff=None)


def with_fixed_backoff(delay: float) -> RetryOption:
    """Wait ``delay`` seconds between attempts."""
    return with_backoff(FixedBackoff(delay))


def with_random_backoff(delay: float) -> RetryOption:
    """Wait ``delay`` seconds plus a random jitter of up to ``delay / 2``.

    Use ``with_backoff(RandomBackoff(delay, jitter))`` for another jitter.
    """
    return with_backoff(RandomBackoff(delay, delay / 2))


def with_exponential_backoff(initial: float, maximum: float = 0) -> RetryOption:
    """Wait ``initial * 2 ** (attempt - 1)`` seconds, capped at ``maximum``
    when it is not 0.

    Use ``with_backoff(ExponentialBackoff(...))`` for another multiplier.
    """
    return with_backoff(ExponentialBackoff(initial, DEFAULT_MULTIPLIER, maximum))


def with_exponential_random_backoff(initial: float, maximum: float = 0) -> RetryOption:
    """Exponential backoff with a jitter of up to ``initial / 2`` that
    respects ``maximum``."""
    return with_backoff(
        ExponentialRandomBackoff(initial, DEFAULT_MULTIPLIER, maximum, initial / 2)
    )


def with_on_retry(*handlers: OnRetryHandler) -> RetryOption:
    """Call every handler, in order, with ``(error, attempt)`` before each
    retry."""
    handler = compose_handlers(*handlers)
    return lambda options: replace(options, on_retry=handler)


def with_on_retry_logging(level: int, message: str, log: logging.Logger | None = None) -> RetryOption:
    """Log ``message`` at ``level`` before each retry.

    See ``aretry.callbacks.on_retry_logging``.
    """
    return with_on_retry(on_retry_logging(level, message, log))


def with_join_cancel_error(join: bool = True) -> RetryOption:
    """Chain cancellation errors to the last retryable error of the
    operation."""
    return lambda options: replace(options, join_cancel_error=join)


def with_retry_on_cancel_error() -> RetryOption:
    """Classify cancellation errors raised by the operation like any other
    error instead of never retrying them."""
    return lambda options: replace(options, retry_on_cancel_error=True)


def with_cancellation(token: CancellationToken | None) -> RetryOption:
    """Poll ``token`` before every attempt and stop once it fires."""
    return lambda options: replace(options, cancellation=token)
