r"""Parameter validation utilities for retry options.

This module provides validation functions for retry parameters to ensure
they meet the required constraints before a retry loop starts.
"""

from __future__ import annotations

__all__ = ["validate_retry_options"]

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from aretry.cancellation import CancellationToken


def validate_retry_options(
    max_attempts: int,
    backoff: object | None = None,
    on_retry: object | None = None,
    retry_if: object | None = None,
    no_retry_if: object | None = None,
    cancellation: CancellationToken | None = None,
) -> None:
    """Validate retry options.

    Args:
        max_attempts: Maximum number of attempts. Must be >= 0. A value of 0
            means unlimited attempts, 1 means a single attempt (no retry).
        backoff: Optional backoff strategy. Must be callable if provided.
        on_retry: Optional retry handler. Must be callable if provided.
        retry_if: Optional error matcher. Must be callable if provided.
        no_retry_if: Optional error matcher. Must be callable if provided.
        cancellation: Optional cancellation token. Must expose ``error()``
            if provided.

    Raises:
        ValueError: If ``max_attempts`` is negative.
        TypeError: If a callable parameter is not callable, or if
            ``max_attempts`` is not an integer.

    Example:
        ```pycon
        >>> from aretry.core.validation import validate_retry_options
        >>> validate_retry_options(max_attempts=3)
        >>> validate_retry_options(max_attempts=0)
        >>> validate_retry_options(max_attempts=-1)
        Traceback (most recent call last):
        ...
        ValueError: max_attempts must be >= 0, got -1

        ```
    """
    if isinstance(max_attempts, bool) or not isinstance(max_attempts, int):
        msg = f"max_attempts must be an int, got {type(max_attempts).__name__}"
        raise TypeError(msg)
    if max_attempts < 0:
        msg = f"max_attempts must be >= 0, got {max_attempts}"
        raise ValueError(msg)
    for name, value in (
        ("backoff", backoff),
        ("on_retry", on_retry),
        ("retry_if", retry_if),
        ("no_retry_if", no_retry_if),
    ):
        if value is not None and not callable(value):
            msg = f"{name} must be callable, got {type(value).__name__}"
            raise TypeError(msg)
    if cancellation is not None and not callable(getattr(cancellation, "error", None)):
        msg = f"cancellation must provide an error() method, got {type(cancellation).__name__}"
        raise TypeError(msg)
