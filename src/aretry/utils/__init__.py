r"""Utility functions used by the retry executors.

This package provides helpers to compute and perform the backoff wait
and to emit structured log records.
"""

from __future__ import annotations

__all__ = [
    "StructuredFormatter",
    "calculate_sleep_time",
    "log_structured",
    "sleep",
    "sleep_async",
]

from aretry.utils.sleep import calculate_sleep_time, sleep, sleep_async
from aretry.utils.structured_logging import StructuredFormatter, log_structured
