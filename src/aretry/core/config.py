r"""Configuration dataclass and defaults for the retry engine.

This module provides the default constants and the immutable
``RetryOptions`` value object read by the retry executors. A single
``RetryOptions`` can be shared by any number of concurrent runs since no
run ever mutates it.
"""

from __future__ import annotations

__all__ = [
    "DEFAULT_BACKOFF",
    "DEFAULT_JITTER",
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_MULTIPLIER",
    "MAX_BACKOFF_DELAY",
    "ErrorMatcher",
    "OnRetryHandler",
    "RetryOptions",
]

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable

from aretry.backoff.fixed import RandomBackoff
from aretry.core.validation import validate_retry_options

if TYPE_CHECKING:
    from aretry.backoff.base import BackoffStrategy
    from aretry.cancellation import CancellationToken

# Default maximum number of attempts (initial attempt included)
DEFAULT_MAX_ATTEMPTS = 5

# Default fixed delay between two attempts, in seconds
DEFAULT_BACKOFF = 0.2

# Default maximum random delay added to DEFAULT_BACKOFF, in seconds
DEFAULT_JITTER = DEFAULT_BACKOFF / 2

# Default growth factor of the exponential backoff options
DEFAULT_MULTIPLIER = 2

# Upper bound applied to any computed delay, in seconds
MAX_BACKOFF_DELAY = 3600.0

ErrorMatcher = Callable[[Exception], bool]
OnRetryHandler = Callable[[Exception, int], None]


@dataclass(frozen=True)
class RetryOptions:
    """Configuration of a retry loop.

    Instances are immutable. Use ``merge`` or the option functions of
    ``aretry.options`` to derive a new configuration.

    Args:
        max_attempts: Maximum number of attempts. 0 means unlimited,
            1 means a single attempt (no retry). Must be >= 0.
        retry_if: Optional predicate selecting the retryable errors. If not
            set, every error is retryable except cancellation errors.
        no_retry_if: Optional predicate selecting errors that must never be
            retried. Takes precedence over ``retry_if``.
        backoff: Optional backoff strategy. ``None`` means no wait between
            attempts.
        on_retry: Optional handler called with ``(error, attempt)`` before
            each retry. It is not called after the final attempt.
        join_cancel_error: Whether a cancellation error is chained to the
            last retryable error of the operation.
        retry_on_cancel_error: Whether cancellation errors raised by the
            operation itself are retryable.
        cancellation: Optional cancellation token polled before each attempt.

    Example:
        ```pycon
        >>> from aretry.core.config import RetryOptions
        >>> options = RetryOptions()
        >>> options.max_attempts
        5
        >>> merged = options.merge(max_attempts=10)
        >>> merged.max_attempts
        10
        >>> options.max_attempts  # Original unchanged
        5

        ```
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS
    retry_if: ErrorMatcher | None = None
    no_retry_if: ErrorMatcher | None = None
    backoff: BackoffStrategy | None = field(
        default_factory=lambda: RandomBackoff(DEFAULT_BACKOFF, DEFAULT_JITTER)
    )
    on_retry: OnRetryHandler | None = None
    join_cancel_error: bool = False
    retry_on_cancel_error: bool = False
    cancellation: CancellationToken | None = None

    def __post_init__(self) -> None:
        """Validate configuration parameters after initialization.

        Raises:
            ValueError: If any parameter fails validation.
            TypeError: If any parameter has the wrong type.
        """
        validate_retry_options(
            max_attempts=self.max_attempts,
            backoff=self.backoff,
            on_retry=self.on_retry,
            retry_if=self.retry_if,
            no_retry_if=self.no_retry_if,
            cancellation=self.cancellation,
        )

    def merge(self, **overrides: Any) -> RetryOptions:
        """Create a new configuration with the given fields overridden.

        Only non-None override values are applied. Use
        ``dataclasses.replace`` to reset a field to ``None``.

        Args:
            **overrides: Keyword arguments for fields to override.

        Returns:
            A new ``RetryOptions`` instance.
        """
        filtered_overrides = {k: v for k, v in overrides.items() if v is not None}
        return replace(self, **filtered_overrides)

    @property
    def unlimited(self) -> bool:
        return self.max_attempts == 0
