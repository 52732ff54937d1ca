r"""Cancellation signal observed by the retry engine.

A ``CancellationToken`` is owned by the caller. The engine only polls it
at the top of every attempt and waits on it during backoff, it never
cancels it.
"""

from __future__ import annotations

__all__ = ["CancellationToken"]

import asyncio
import threading
import time

from aretry.exceptions import CancellationError, CancelledError, DeadlineExceededError

# Polling interval used while awaiting a token from asyncio code
_ASYNC_POLL_INTERVAL = 0.01


class CancellationToken:
    """Thread-safe cancellation signal with an optional deadline.

    The token is cancelled either explicitly with ``cancel()`` or
    implicitly once its deadline has passed. ``error()`` reports which of
    the two happened. An explicit cancellation wins over an expired
    deadline.

    Args:
        timeout: Optional number of seconds after which the token expires.
        deadline: Optional absolute expiry time, as a ``time.monotonic()``
            value. Mutually exclusive with ``timeout``.

    Raises:
        ValueError: If both ``timeout`` and ``deadline`` are given, or if
            ``timeout`` is negative.

    Example:
        ```pycon
        >>> from aretry.cancellation import CancellationToken
        >>> token = CancellationToken()
        >>> token.cancelled
        False
        >>> token.cancel()
        >>> token.cancelled
        True
        >>> token.error()
        CancelledError('operation cancelled')

        ```
    """

    def __init__(self, timeout: float | None = None, deadline: float | None = None) -> None:
        if timeout is not None and deadline is not None:
            msg = "timeout and deadline are mutually exclusive"
            raise ValueError(msg)
        if timeout is not None:
            if timeout < 0:
                msg = f"timeout must be >= 0, got {timeout}"
                raise ValueError(msg)
            deadline = time.monotonic() + timeout
        self._deadline = deadline
        self._event = threading.Event()

    @classmethod
    def with_timeout(cls, timeout: float) -> CancellationToken:
        """Create a token that expires ``timeout`` seconds from now."""
        return cls(timeout=timeout)

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def cancelled(self) -> bool:
        """Whether the token was cancelled or its deadline has passed."""
        return self.error() is not None

    def cancel(self) -> None:
        """Cancel the token. Calling it again has no effect."""
        self._event.set()

    def remaining(self) -> float | None:
        """Return the seconds left before the deadline, or ``None`` if the
        token has no deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def error(self) -> CancellationError | None:
        """Return a new cancellation error if the token fired, otherwise
        ``None``."""
        if self._event.is_set():
            return CancelledError()
        if self._deadline is not None and time.monotonic() >= self._deadline:
            return DeadlineExceededError()
        return None

    def wait(self, seconds: float) -> bool:
        """Block for up to ``seconds`` or until the token fires.

        Args:
            seconds: The maximum number of seconds to wait.

        Returns:
            ``True`` if the token fired before or during the wait.
        """
        end = time.monotonic() + seconds
        while not self.cancelled:
            left = end - time.monotonic()
            if left <= 0:
                return False
            remaining = self.remaining()
            self._event.wait(left if remaining is None else min(left, remaining))
        return True

    async def wait_async(self, seconds: float) -> bool:
        """Asynchronous counterpart of ``wait``.

        ``threading.Event`` cannot be awaited, so the token is polled at a
        short interval while sleeping.
        """
        loop = asyncio.get_running_loop()
        end = loop.time() + seconds
        while not self.cancelled:
            left = end - loop.time()
            if left <= 0:
                return False
            step = min(left, _ASYNC_POLL_INTERVAL)
            remaining = self.remaining()
            if remaining is not None:
                step = min(step, remaining)
            await asyncio.sleep(step)
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}(cancelled={self._event.is_set()}, deadline={self._deadline})"

