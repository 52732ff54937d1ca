r"""Jitter wrapper for backoff strategies."""

from __future__ import annotations

__all__ = ["JitterBackoff"]

from typing import TYPE_CHECKING

from aretry.backoff.base import BaseBackoffStrategy, random_jitter, validate_delay

if TYPE_CHECKING:
    from aretry.backoff.base import BackoffStrategy


class JitterBackoff(BaseBackoffStrategy):
    """Add a random jitter to any backoff strategy.

    The jitter is always added, so the wrapped strategy's own maximum is
    not respected: an ``ExponentialBackoff`` capped at 5 seconds can wait
    up to ``5 + jitter`` seconds. Use ``ExponentialRandomBackoff`` or
    ``IncrementalRandomBackoff`` when the cap matters.

    This wrapper is intended to add jitter to user defined strategies.

    Args:
        strategy: The strategy to wrap. Any ``(error, attempt) -> float``
            callable is accepted.
        jitter: The maximum random delay in seconds added to each delay.

    Example:
        ```pycon
        >>> from aretry.backoff import FixedBackoff, JitterBackoff
        >>> backoff = JitterBackoff(FixedBackoff(1.0), jitter=0.1)
        >>> 1.0 <= backoff(ValueError(), 3) <= 1.1
        True
        >>> backoff = JitterBackoff(lambda error, attempt: attempt * 1.0, jitter=0.0)
        >>> backoff(ValueError(), 3)
        3.0

        ```
    """

    def __init__(self, strategy: BackoffStrategy, jitter: float) -> None:
        validate_delay("jitter", jitter)
        self.strategy = strategy
        self.jitter = jitter

    def calculate(self, error: Exception, attempt: int) -> float:
        return self.strategy(error, attempt) + random_jitter(self.jitter)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={self.strategy!r}, jitter={self.jitter})"
