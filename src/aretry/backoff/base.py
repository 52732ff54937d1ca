r"""Abstract base class for backoff strategies."""

from __future__ import annotations

__all__ = [
    "BackoffStrategy",
    "BaseBackoffStrategy",
    "cap_with_jitter",
    "random_jitter",
    "validate_delay",
]

import random
from abc import ABC, abstractmethod
from typing import Callable

# Any callable with this signature can be used as a backoff strategy
BackoffStrategy = Callable[[Exception, int], float]


class BaseBackoffStrategy(ABC):
    """Abstract base class for backoff strategies.

    A backoff strategy determines how long to wait before retrying a
    failed operation based on the error and the attempt number.
    Instances are callable so they can be used wherever a plain
    ``(error, attempt) -> float`` function is accepted.
    """

    @abstractmethod
    def calculate(self, error: Exception, attempt: int) -> float:
        """Calculate the backoff delay after a failed attempt.

        Args:
            error: The error raised by the failed attempt.
            attempt: The attempt number (1-indexed). For example,
                attempt=1 is the first failure, attempt=2 the second, etc.

        Returns:
            The delay in seconds before the next attempt.
        """

    def __call__(self, error: Exception, attempt: int) -> float:
        return self.calculate(error, attempt)


def validate_delay(name: str, value: float) -> None:
    if value < 0:
        msg = f"{name} must be non-negative, got {value}"
        raise ValueError(msg)


def random_jitter(jitter: float) -> float:
    """Return a random jitter in ``[0, jitter]``, or 0 if ``jitter`` is 0."""
    if jitter <= 0:
        return 0.0
    return random.uniform(0, jitter)  # noqa: S311


def cap_with_jitter(delay: float, maximum: float, jitter: float) -> float:
    """Apply a random jitter to ``delay`` without going over ``maximum``.

    Below the cap the jitter is added and the result is capped. At or
    above the cap the jitter is subtracted from the cap instead, so the
    delays stay spread out right below ``maximum``. A ``maximum`` of 0
    means uncapped.

    Example:
        ```pycon
        >>> from aretry.backoff.base import cap_with_jitter
        >>> cap_with_jitter(1.0, 0, 0.0)
        1.0
        >>> cap_with_jitter(8.0, 5.0, 0.0)
        5.0
        >>> 4.0 <= cap_with_jitter(8.0, 5.0, 1.0) <= 5.0
        True

        ```
    """
    value = random_jitter(jitter)
    if maximum == 0:
        return delay + value
    if delay >= maximum:
        return max(maximum - value, 0.0)
    return min(delay + value, maximum)
