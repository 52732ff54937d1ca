r"""Unit tests for the asynchronous retry executor."""

from __future__ import annotations

import asyncio
from unittest.mock import AsyncMock, Mock, call

import pytest

from aretry.backoff import FixedBackoff
from aretry.cancellation import CancellationToken
from aretry.core.config import RetryOptions
from aretry.exceptions import CancelledError, RetryLimitExceededError
from aretry.matchers import err_as
from aretry.retry import AsyncRetryExecutor


@pytest.mark.asyncio
async def test_async_executor_success_first_attempt(
    mock_asleep: Mock, mock_callback: Mock
) -> None:
    operation = AsyncMock(return_value="ok")
    executor = AsyncRetryExecutor(RetryOptions(on_retry=mock_callback))

    assert await executor.execute(operation) == "ok"
    operation.assert_awaited_once_with()
    mock_asleep.assert_not_called()
    mock_callback.assert_not_called()


@pytest.mark.asyncio
async def test_async_executor_success_after_retries(
    mock_asleep: Mock, mock_callback: Mock, async_flaky_operation: AsyncMock
) -> None:
    """Test that the loop retries an async operation with backoff."""
    executor = AsyncRetryExecutor(
        RetryOptions(backoff=FixedBackoff(0.5), on_retry=mock_callback)
    )

    assert await executor.execute(async_flaky_operation) == "ok"
    assert async_flaky_operation.await_count == 3
    assert mock_asleep.call_args_list == [call(0.5), call(0.5)]
    assert mock_callback.call_count == 2


@pytest.mark.asyncio
async def test_async_executor_limit_exceeded(mock_asleep: Mock) -> None:
    operation = AsyncMock(side_effect=ConnectionError("reset"))
    executor = AsyncRetryExecutor(RetryOptions(max_attempts=4))

    with pytest.raises(RetryLimitExceededError, match=r"after 4 attempts: reset"):
        await executor.execute(operation)

    assert operation.await_count == 4
    assert mock_asleep.call_count == 3


@pytest.mark.asyncio
async def test_async_executor_non_retryable_error(mock_asleep: Mock) -> None:
    error = KeyError("missing")
    operation = AsyncMock(side_effect=error)
    executor = AsyncRetryExecutor(RetryOptions(retry_if=err_as(ConnectionError)))

    with pytest.raises(KeyError) as exc_info:
        await executor.execute(operation)

    assert exc_info.value is error
    operation.assert_awaited_once()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_executor_cancelled_before_first_attempt() -> None:
    token = CancellationToken()
    token.cancel()
    operation = AsyncMock(return_value="ok")

    with pytest.raises(CancelledError):
        await AsyncRetryExecutor(RetryOptions(), cancellation=token).execute(operation)

    operation.assert_not_awaited()


@pytest.mark.asyncio
async def test_async_executor_cancellation_cuts_backoff_short(mock_callback: Mock) -> None:
    """Test that cancelling the token from another task ends a long
    backoff wait."""
    token = CancellationToken()
    last_error = ConnectionError("reset")
    operation = AsyncMock(side_effect=last_error)
    executor = AsyncRetryExecutor(
        RetryOptions(backoff=FixedBackoff(30.0), on_retry=mock_callback, join_cancel_error=True),
        cancellation=token,
    )

    async def cancel_soon() -> None:
        await asyncio.sleep(0.05)
        token.cancel()

    canceller = asyncio.create_task(cancel_soon())
    with pytest.raises(CancelledError) as exc_info:
        await asyncio.wait_for(executor.execute(operation), timeout=5.0)
    await canceller

    operation.assert_awaited_once()
    mock_callback.assert_not_called()
    assert exc_info.value.__cause__ is last_error


@pytest.mark.asyncio
async def test_async_executor_task_cancellation_propagates() -> None:
    """Test that cancelling the task running the loop stops it."""
    operation = AsyncMock(side_effect=ConnectionError("reset"))
    executor = AsyncRetryExecutor(RetryOptions(backoff=FixedBackoff(30.0)))

    task = asyncio.create_task(executor.execute(operation))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
    operation.assert_awaited_once()


@pytest.mark.asyncio
async def test_async_executor_concurrent_runs(mock_asleep: Mock) -> None:
    """Test that one executor can drive several operations concurrently."""
    executor = AsyncRetryExecutor(RetryOptions(max_attempts=3))
    operations = [AsyncMock(side_effect=[ConnectionError(), i]) for i in range(5)]

    results = await asyncio.gather(*(executor.execute(op) for op in operations))

    assert results == [0, 1, 2, 3, 4]
    assert all(op.await_count == 2 for op in operations)


@pytest.mark.asyncio
async def test_async_executor_sync_operation_rejected(mock_asleep: Mock) -> None:
    """Test that a callable returning a non-awaitable raises TypeError
    without being retried."""
    operation = Mock(return_value="ok")

    with pytest.raises(TypeError, match=r"operation must return an awaitable, got str"):
        await AsyncRetryExecutor(RetryOptions()).execute(operation)

    operation.assert_called_once_with()
    mock_asleep.assert_not_called()


@pytest.mark.asyncio
async def test_async_executor_awaitable_returned_by_sync_callable() -> None:
    """Test that a plain callable returning a coroutine is accepted."""

    async def fetch() -> str:
        return "ok"

    executor = AsyncRetryExecutor(RetryOptions(backoff=None))
    assert await executor.execute(lambda: fetch()) == "ok"  # noqa: PLW0108
