r"""Incremental (linear) backoff strategies."""

from __future__ import annotations

__all__ = ["IncrementalBackoff", "IncrementalRandomBackoff"]

from aretry.backoff.base import BaseBackoffStrategy, cap_with_jitter, validate_delay


class IncrementalBackoff(BaseBackoffStrategy):
    """Incremental backoff strategy.

    Calculates delay as: initial + increment * (attempt - 1), capped at
    maximum if maximum > 0.

    This strategy provides evenly spaced delays, which can be useful for
    services that recover quickly or when you want predictable timing.

    Args:
        initial: The delay in seconds after the first failure.
        increment: The delay in seconds added after every further failure.
        maximum: Optional maximum delay in seconds. 0 means uncapped.

    Example:
        ```pycon
        >>> from aretry.backoff import IncrementalBackoff
        >>> backoff = IncrementalBackoff(initial=1.0, increment=0.5)
        >>> backoff(ValueError(), 1)
        1.0
        >>> backoff(ValueError(), 2)
        1.5
        >>> backoff(ValueError(), 3)
        2.0
        >>> backoff = IncrementalBackoff(initial=1.0, increment=1.0, maximum=3.0)
        >>> backoff(ValueError(), 10)  # Would be 10.0, but capped
        3.0

        ```
    """

    def __init__(self, initial: float, increment: float, maximum: float = 0) -> None:
        validate_delay("initial", initial)
        validate_delay("increment", increment)
        validate_delay("maximum", maximum)

        self.initial = initial
        self.increment = increment
        self.maximum = maximum

    def _uncapped(self, attempt: int) -> float:
        return self.initial + self.increment * (attempt - 1)

    def calculate(self, error: Exception, attempt: int) -> float:  # noqa: ARG002
        delay = self._uncapped(attempt)
        if self.maximum == 0:
            return delay
        return min(delay, self.maximum)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(initial={self.initial}, increment={self.increment}, "
            f"maximum={self.maximum})"
        )


class IncrementalRandomBackoff(IncrementalBackoff):
    """Incremental backoff with a random jitter that respects the maximum.

    Uses the same policy as ``ExponentialRandomBackoff``: the jitter is
    added below the maximum and subtracted from the maximum once reached.

    Args:
        initial: The delay in seconds after the first failure.
        increment: The delay in seconds added after every further failure.
        maximum: Maximum delay in seconds. 0 means uncapped.
        jitter: The maximum random delay in seconds.
    """

    def __init__(
        self,
        initial: float,
        increment: float,
        maximum: float = 0,
        jitter: float = 0,
    ) -> None:
        super().__init__(initial=initial, increment=increment, maximum=maximum)
        validate_delay("jitter", jitter)
        self.jitter = jitter

    def calculate(self, error: Exception, attempt: int) -> float:  # noqa: ARG002
        return cap_with_jitter(self._uncapped(attempt), self.maximum, self.jitter)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(initial={self.initial}, increment={self.increment}, "
            f"maximum={self.maximum}, jitter={self.jitter})"
        )
