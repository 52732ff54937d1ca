r"""Unit tests for do, do_with_options, get and get_with_options."""

from __future__ import annotations

import logging
import threading
from unittest.mock import Mock, call

import pytest

from aretry import (
    CancellationToken,
    CancelledError,
    RetryLimitExceededError,
    RetryOptions,
    do,
    do_with_options,
    get,
    get_with_options,
    is_error,
)
from aretry.options import (
    with_cancellation,
    with_fixed_backoff,
    with_join_cancel_error,
    with_max_attempts,
    with_no_backoff,
    with_no_retry_for,
    with_on_retry,
    with_on_retry_logging,
    with_retry_for,
    with_unlimited_attempts,
)


def test_do_success(mock_sleep: Mock) -> None:
    operation = Mock(return_value="ignored")
    assert do(operation) is None
    operation.assert_called_once_with()
    mock_sleep.assert_not_called()


def test_do_default_attempts(mock_sleep: Mock) -> None:
    """Test that the defaults allow 5 attempts with a jittered 200ms wait."""
    operation = Mock(side_effect=ConnectionError("reset"))

    with pytest.raises(RetryLimitExceededError, match=r"after 5 attempts"):
        do(operation)

    assert operation.call_count == 5
    assert mock_sleep.call_count == 4
    for c in mock_sleep.call_args_list:
        assert 0.2 <= c.args[0] <= 0.3 + 1e-9


def test_do_retries_until_success(
    mock_sleep: Mock, mock_callback: Mock, flaky_operation: Mock
) -> None:
    do(flaky_operation, with_fixed_backoff(1.0), with_on_retry(mock_callback))
    assert flaky_operation.call_count == 3
    assert mock_sleep.call_args_list == [call(1.0), call(1.0)]
    assert mock_callback.call_count == 2


def test_do_retry_for(mock_sleep: Mock) -> None:
    """Test that only the listed errors are retried."""
    error = KeyError("missing")
    operation = Mock(side_effect=[ConnectionError(), error])

    with pytest.raises(KeyError) as exc_info:
        do(operation, with_retry_for(ConnectionError))

    assert exc_info.value is error
    assert operation.call_count == 2


def test_do_no_retry_for() -> None:
    error = PermissionError("denied")
    operation = Mock(side_effect=error)

    with pytest.raises(PermissionError):
        do(operation, with_no_retry_for(error), with_no_backoff())

    operation.assert_called_once()


def test_do_unlimited_attempts() -> None:
    operation = Mock(side_effect=[ValueError()] * 1000 + [None])
    do(operation, with_unlimited_attempts(), with_no_backoff())
    assert operation.call_count == 1001


def test_do_cancellation_keyword() -> None:
    token = CancellationToken()
    token.cancel()
    operation = Mock()

    with pytest.raises(CancelledError):
        do(operation, cancellation=token)

    operation.assert_not_called()


def test_do_cancellation_option() -> None:
    token = CancellationToken()
    last_error = ConnectionError("reset")

    def operation() -> None:
        token.cancel()
        raise last_error

    with pytest.raises(CancelledError) as exc_info:
        do(operation, with_cancellation(token), with_join_cancel_error(), with_no_backoff())

    assert is_error(exc_info.value, last_error)


def test_do_cancel_from_other_thread() -> None:
    """Test that a cancel from another thread interrupts the backoff."""
    token = CancellationToken()
    operation = Mock(side_effect=ConnectionError("reset"))
    timer = threading.Timer(0.05, token.cancel)
    timer.start()
    try:
        with pytest.raises(CancelledError):
            do(operation, with_fixed_backoff(30.0), cancellation=token)
    finally:
        timer.cancel()
    operation.assert_called_once()


def test_do_on_retry_logging(mock_sleep: Mock, caplog: pytest.LogCaptureFixture) -> None:
    operation = Mock(side_effect=[ConnectionError("reset"), None])
    with caplog.at_level(logging.INFO, logger="aretry.callbacks"):
        do(operation, with_on_retry_logging(logging.INFO, "upload failed"))
    assert "upload failed - retries #1 reset" in caplog.text


def test_do_with_options(mock_sleep: Mock, flaky_operation: Mock) -> None:
    do_with_options(flaky_operation, RetryOptions(max_attempts=3))
    assert flaky_operation.call_count == 3


def test_get_returns_value(mock_sleep: Mock, flaky_operation: Mock) -> None:
    assert get(flaky_operation) == "ok"


def test_get_limit_exceeded(mock_sleep: Mock) -> None:
    error = ConnectionError("reset")
    operation = Mock(side_effect=error)

    with pytest.raises(RetryLimitExceededError) as exc_info:
        get(operation, with_max_attempts(2))

    assert exc_info.value.attempts == 2
    assert is_error(exc_info.value, error)


def test_get_with_options(flaky_operation: Mock) -> None:
    assert get_with_options(flaky_operation, RetryOptions(backoff=None)) == "ok"


def test_get_with_options_shared_config(mock_sleep: Mock) -> None:
    """Test that a shared configuration is not changed by runs."""
    options = RetryOptions(max_attempts=2)
    for _ in range(3):
        with pytest.raises(RetryLimitExceededError):
            get_with_options(Mock(side_effect=ValueError()), options)
    assert options.max_attempts == 2
