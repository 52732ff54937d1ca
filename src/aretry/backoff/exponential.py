r"""Exponential backoff strategies."""

from __future__ import annotations

__all__ = ["ExponentialBackoff", "ExponentialRandomBackoff"]

from aretry.backoff.base import BaseBackoffStrategy, cap_with_jitter, validate_delay


class ExponentialBackoff(BaseBackoffStrategy):
    """Exponential backoff strategy.

    Calculates delay as: initial * (multiplier ** (attempt - 1)), capped at
    maximum if maximum > 0.

    Args:
        initial: The delay in seconds after the first failure.
        multiplier: The growth factor between two consecutive delays
            (default: 2). Must be >= 1.
        maximum: Optional maximum delay in seconds. 0 means uncapped.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialBackoff
        >>> backoff = ExponentialBackoff(initial=0.2)
        >>> backoff(ValueError(), 1)
        0.2
        >>> backoff(ValueError(), 2)
        0.4
        >>> backoff(ValueError(), 3)
        0.8
        >>> backoff = ExponentialBackoff(initial=1.0, maximum=5.0)
        >>> backoff(ValueError(), 10)  # Would be 512.0, but capped
        5.0

        ```
    """

    def __init__(self, initial: float, multiplier: float = 2, maximum: float = 0) -> None:
        validate_delay("initial", initial)
        validate_delay("maximum", maximum)
        if multiplier < 1:
            msg = f"multiplier must be >= 1, got {multiplier}"
            raise ValueError(msg)

        self.initial = initial
        self.multiplier = multiplier
        self.maximum = maximum

    def _uncapped(self, attempt: int) -> float:
        try:
            return self.initial * (self.multiplier ** (attempt - 1))
        except OverflowError:
            return float("inf")

    def calculate(self, error: Exception, attempt: int) -> float:  # noqa: ARG002
        delay = self._uncapped(attempt)
        if self.maximum == 0:
            return delay
        return min(delay, self.maximum)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(initial={self.initial}, multiplier={self.multiplier}, "
            f"maximum={self.maximum})"
        )


class ExponentialRandomBackoff(ExponentialBackoff):
    """Exponential backoff with a random jitter that respects the maximum.

    Below the maximum a jitter in ``[0, jitter]`` is added and the result is
    capped. Once the exponential delay reaches the maximum, the jitter is
    subtracted from the maximum instead, so the worst-case wait never
    exceeds ``maximum``.

    Args:
        initial: The delay in seconds after the first failure.
        multiplier: The growth factor between two consecutive delays.
        maximum: Maximum delay in seconds. 0 means uncapped, in which case
            the jitter is always added.
        jitter: The maximum random delay in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import ExponentialRandomBackoff
        >>> backoff = ExponentialRandomBackoff(initial=1.0, multiplier=2, maximum=5.0, jitter=0.5)
        >>> 1.0 <= backoff(ValueError(), 1) <= 1.5
        True
        >>> 4.5 <= backoff(ValueError(), 10) <= 5.0
        True

        ```
    """

    def __init__(
        self,
        initial: float,
        multiplier: float = 2,
        maximum: float = 0,
        jitter: float = 0,
    ) -> None:
        super().__init__(initial=initial, multiplier=multiplier, maximum=maximum)
        validate_delay("jitter", jitter)
        self.jitter = jitter

    def calculate(self, error: Exception, attempt: int) -> float:  # noqa: ARG002
        return cap_with_jitter(self._uncapped(attempt), self.maximum, self.jitter)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(initial={self.initial}, multiplier={self.multiplier}, "
            f"maximum={self.maximum}, jitter={self.jitter})"
        )
