from __future__ import annotations

from typing import TYPE_CHECKING
from unittest.mock import AsyncMock, Mock, patch

import pytest

if TYPE_CHECKING:
    from collections.abc import Generator


@pytest.fixture
def mock_sleep() -> Generator[Mock, None, None]:
    """Patch time.sleep to make tests run faster."""
    with patch("time.sleep", return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_asleep() -> Generator[Mock, None, None]:
    """Patch asyncio.sleep to make tests run faster."""
    with patch("asyncio.sleep", new_callable=AsyncMock, return_value=None) as mock:
        yield mock


@pytest.fixture
def mock_callback() -> Mock:
    """Create a mock callback function for testing retry handlers.

    Returns:
        A Mock object that can be used as an ``on_retry`` handler.

    Example:
        >>> def test_callback(mock_callback):
        ...     do(operation, with_on_retry(mock_callback))
        ...     mock_callback.assert_called_once()
    """
    return Mock()


@pytest.fixture
def flaky_operation() -> Mock:
    """Create an operation failing twice with ``ConnectionError`` before
    returning ``"ok"``."""
    return Mock(side_effect=[ConnectionError("reset"), ConnectionError("reset"), "ok"])


@pytest.fixture
def async_flaky_operation() -> AsyncMock:
    """Async counterpart of ``flaky_operation``."""
    return AsyncMock(side_effect=[ConnectionError("reset"), ConnectionError("reset"), "ok"])
