r"""Backoff strategies computing the wait time before the next attempt.

A backoff strategy is any callable ``(error, attempt) -> float`` returning
a non-negative number of seconds. ``attempt`` is 1-based: it is the index
of the attempt that just failed. This package provides fixed, random,
exponential and incremental strategies, plus a wrapper adding jitter to
any strategy.
"""

from __future__ import annotations

__all__ = [
    "BackoffStrategy",
    "BaseBackoffStrategy",
    "ExponentialBackoff",
    "ExponentialRandomBackoff",
    "FixedBackoff",
    "IncrementalBackoff",
    "IncrementalRandomBackoff",
    "JitterBackoff",
    "RandomBackoff",
]

from aretry.backoff.base import BackoffStrategy, BaseBackoffStrategy
from aretry.backoff.exponential import ExponentialBackoff, ExponentialRandomBackoff
from aretry.backoff.fixed import FixedBackoff, RandomBackoff
from aretry.backoff.incremental import IncrementalBackoff, IncrementalRandomBackoff
from aretry.backoff.jitter import JitterBackoff
