r"""Unit tests for retry option validation."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry.cancellation import CancellationToken
from aretry.core.validation import validate_retry_options


@pytest.mark.parametrize("max_attempts", [0, 1, 5, 1000])
def test_validate_retry_options_valid_max_attempts(max_attempts: int) -> None:
    validate_retry_options(max_attempts=max_attempts)


def test_validate_retry_options_negative_max_attempts() -> None:
    """Test that negative max_attempts raises ValueError."""
    with pytest.raises(ValueError, match=r"max_attempts must be >= 0, got -3"):
        validate_retry_options(max_attempts=-3)


@pytest.mark.parametrize("max_attempts", [1.5, "3", True, None])
def test_validate_retry_options_max_attempts_not_int(max_attempts: object) -> None:
    with pytest.raises(TypeError, match=r"max_attempts must be an int"):
        validate_retry_options(max_attempts=max_attempts)  # type: ignore[arg-type]


@pytest.mark.parametrize("name", ["backoff", "on_retry", "retry_if", "no_retry_if"])
def test_validate_retry_options_not_callable(name: str) -> None:
    """Test that non-callable hooks raise TypeError."""
    with pytest.raises(TypeError, match=rf"{name} must be callable, got int"):
        validate_retry_options(max_attempts=3, **{name: 42})


@pytest.mark.parametrize("name", ["backoff", "on_retry", "retry_if", "no_retry_if"])
def test_validate_retry_options_callable(name: str) -> None:
    validate_retry_options(max_attempts=3, **{name: Mock()})


def test_validate_retry_options_cancellation() -> None:
    validate_retry_options(max_attempts=3, cancellation=CancellationToken())


def test_validate_retry_options_invalid_cancellation() -> None:
    with pytest.raises(TypeError, match=r"cancellation must provide an error\(\) method"):
        validate_retry_options(max_attempts=3, cancellation=object())  # type: ignore[arg-type]
