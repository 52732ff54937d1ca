r"""Run an async operation with automatic retries.

Asynchronous counterparts of ``aretry.execute``. The operation is a
zero-argument callable returning an awaitable, typically an ``async def``
function, so a fresh coroutine is created for every attempt.
"""

from __future__ import annotations

__all__ = ["do_async", "do_async_with_options", "get_async", "get_async_with_options"]

from typing import TYPE_CHECKING, TypeVar

from aretry.options import new_options
from aretry.retry.executor_async import AsyncRetryExecutor

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from aretry.cancellation import CancellationToken
    from aretry.core.config import RetryOptions
    from aretry.options import RetryOption

T = TypeVar("T")


async def do_async(
    operation: Callable[[], Awaitable[object]],
    *options: RetryOption,
    cancellation: CancellationToken | None = None,
) -> None:
    """Run an async ``operation``, retrying it when it raises.

    Example:
        ```pycon
        >>> import asyncio
        >>> from aretry import do_async
        >>> from aretry.options import with_no_backoff
        >>> async def ping():
        ...     return None
        ...
        >>> asyncio.run(do_async(ping, with_no_backoff()))

        ```
    """
    await do_async_with_options(operation, new_options(*options), cancellation=cancellation)


async def do_async_with_options(
    operation: Callable[[], Awaitable[object]],
    options: RetryOptions,
    *,
    cancellation: CancellationToken | None = None,
) -> None:
    await AsyncRetryExecutor(options, cancellation).execute(operation)


async def get_async(
    operation: Callable[[], Awaitable[T]],
    *options: RetryOption,
    cancellation: CancellationToken | None = None,
) -> T:
    """Run an async ``operation`` and return the value of the first
    successful attempt."""
    return await get_async_with_options(
        operation, new_options(*options), cancellation=cancellation
    )


async def get_async_with_options(
    operation: Callable[[], Awaitable[T]],
    options: RetryOptions,
    *,
    cancellation: CancellationToken | None = None,
) -> T:
    return await AsyncRetryExecutor(options, cancellation).execute(operation)
