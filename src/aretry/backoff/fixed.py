r"""Fixed and random backoff strategies."""

from __future__ import annotations

__all__ = ["FixedBackoff", "RandomBackoff"]

from aretry.backoff.base import BaseBackoffStrategy, validate_delay
from aretry.backoff.jitter import JitterBackoff


class FixedBackoff(BaseBackoffStrategy):
    """Fixed backoff strategy.

    Returns the same delay for every attempt, regardless of the error and
    the attempt number.

    Args:
        delay: The fixed delay in seconds (default: 0.2).

    Example:
        ```pycon
        >>> from aretry.backoff import FixedBackoff
        >>> backoff = FixedBackoff(delay=2.5)
        >>> backoff.calculate(ValueError(), 1)
        2.5
        >>> backoff(ValueError(), 10)
        2.5

        ```
    """

    def __init__(self, delay: float = 0.2) -> None:
        validate_delay("delay", delay)
        self.delay = delay

    def calculate(self, error: Exception, attempt: int) -> float:  # noqa: ARG002
        return self.delay

    def __repr__(self) -> str:
        return f"{type(self).__name__}(delay={self.delay})"


class RandomBackoff(JitterBackoff):
    """Fixed backoff with an added random jitter.

    The delay is ``delay + uniform(0, jitter)``.

    Args:
        delay: The minimum delay in seconds.
        jitter: The maximum random delay added on top of ``delay``.

    Example:
        ```pycon
        >>> from aretry.backoff import RandomBackoff
        >>> backoff = RandomBackoff(delay=1.0, jitter=0.5)
        >>> 1.0 <= backoff(ValueError(), 1) <= 1.5
        True

        ```
    """

    def __init__(self, delay: float, jitter: float) -> None:
        super().__init__(FixedBackoff(delay), jitter)
        self.delay = delay
