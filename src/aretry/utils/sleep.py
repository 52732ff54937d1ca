r"""Backoff delay calculation and waiting.

This module computes the delay returned by a backoff strategy, clamps it
to a sane range, and performs the wait, optionally cut short by a
cancellation token.
"""

from __future__ import annotations

__all__ = ["calculate_sleep_time", "sleep", "sleep_async"]

import asyncio
import logging
import math
import time
from typing import TYPE_CHECKING

from aretry.core.config import MAX_BACKOFF_DELAY
from aretry.utils.structured_logging import log_structured

if TYPE_CHECKING:
    from aretry.backoff.base import BackoffStrategy
    from aretry.cancellation import CancellationToken

logger: logging.Logger = logging.getLogger(__name__)


def calculate_sleep_time(
    backoff: BackoffStrategy,
    error: Exception,
    attempt: int,
    max_delay: float = MAX_BACKOFF_DELAY,
) -> float:
    """Calculate the wait time before the next attempt.

    The delay returned by the strategy is clamped to ``[0, max_delay]``.
    ``NaN`` is treated as 0.

    Args:
        backoff: The backoff strategy.
        error: The error raised by the failed attempt.
        attempt: The 1-indexed number of the failed attempt.
        max_delay: Upper bound of the delay in seconds.

    Returns:
        The wait time in seconds.

    Example:
        ```pycon
        >>> from aretry.backoff import FixedBackoff
        >>> from aretry.utils.sleep import calculate_sleep_time
        >>> calculate_sleep_time(FixedBackoff(0.5), ValueError(), attempt=1)
        0.5
        >>> calculate_sleep_time(lambda e, i: -1.0, ValueError(), attempt=1)
        0.0
        >>> calculate_sleep_time(FixedBackoff(10.0), ValueError(), attempt=1, max_delay=2.0)
        2.0

        ```
    """
    delay = float(backoff(error, attempt))
    if math.isnan(delay) or delay < 0:
        logger.debug(f"Backoff returned {delay} for attempt {attempt}, using 0s")
        return 0.0
    if delay > max_delay:
        logger.debug(f"Capping sleep time from {delay:.2f}s to {max_delay:.2f}s")
        return max_delay
    return delay


def sleep(seconds: float, cancellation: CancellationToken | None = None) -> bool:
    """Block for ``seconds``.

    When a cancellation token is given, the wait ends as soon as the token
    fires.

    A non-positive ``seconds`` returns at once without looking at the
    token, so a token that fired earlier is reported by the caller's next
    cancellation check instead.

    Returns:
        ``True`` if the token fired before or during the wait.
    """
    if seconds <= 0:
        return False
    log_structured(logger, logging.DEBUG, f"Waiting {seconds:.2f}s before retry", delay=seconds)
    if cancellation is None:
        time.sleep(seconds)
        return False
    return cancellation.wait(seconds)


async def sleep_async(seconds: float, cancellation: CancellationToken | None = None) -> bool:
    """Asynchronous counterpart of ``sleep``."""
    if seconds <= 0:
        return False
    log_structured(logger, logging.DEBUG, f"Waiting {seconds:.2f}s before retry", delay=seconds)
    if cancellation is None:
        await asyncio.sleep(seconds)
        return False
    return await cancellation.wait_async(seconds)
