r"""Core configuration and validation of the retry engine."""

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
    "validate_retry_options",
]

from aretry.core.config import (
    DEFAULT_BACKOFF,
    DEFAULT_JITTER,
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_MULTIPLIER,
    MAX_BACKOFF_DELAY,
    ErrorMatcher,
    OnRetryHandler,
    RetryOptions,
)
from aretry.core.validation import validate_retry_options
