r"""Unit tests for error matchers."""

from __future__ import annotations

from unittest.mock import Mock

import pytest

from aretry.matchers import any_match, err_as, err_is


def test_err_is_instance() -> None:
    """Test that instances are matched by identity."""
    sentinel = ConnectionError("reset")
    matcher = err_is(sentinel)
    assert matcher(sentinel)
    assert not matcher(ConnectionError("reset"))


def test_err_is_type() -> None:
    matcher = err_is(TimeoutError)
    assert matcher(TimeoutError())
    assert not matcher(ValueError())


def test_err_is_wrapped() -> None:
    sentinel = KeyError("missing")
    wrapper = RuntimeError("lookup failed")
    wrapper.__cause__ = sentinel
    assert err_is(sentinel)(wrapper)


def test_err_is_several_targets() -> None:
    sentinel = ValueError("bad")
    matcher = err_is(sentinel, TimeoutError)
    assert matcher(sentinel)
    assert matcher(TimeoutError())
    assert not matcher(KeyError())


def test_err_is_no_target() -> None:
    with pytest.raises(TypeError, match=r"err_is\(\) requires at least one target"):
        err_is()


def test_err_as() -> None:
    matcher = err_as(ConnectionError, TimeoutError)
    assert matcher(ConnectionRefusedError())
    assert matcher(TimeoutError())
    assert not matcher(ValueError())


def test_err_as_wrapped() -> None:
    wrapper = RuntimeError("outer")
    wrapper.__cause__ = ConnectionResetError()
    assert err_as(ConnectionError)(wrapper)


def test_err_as_no_type() -> None:
    with pytest.raises(TypeError, match=r"err_as\(\) requires at least one error type"):
        err_as()


def test_err_as_not_a_type() -> None:
    with pytest.raises(TypeError, match=r"err_as\(\) expects exception types"):
        err_as(ValueError("instance"))  # type: ignore[arg-type]


def test_any_match() -> None:
    """Test that any_match matches when any matcher matches."""
    first = Mock(return_value=False)
    second = Mock(return_value=True)
    error = ValueError()
    assert any_match(first, second)(error)
    first.assert_called_once_with(error)
    second.assert_called_once_with(error)


def test_any_match_none_matches() -> None:
    assert not any_match(Mock(return_value=False), Mock(return_value=False))(ValueError())


def test_any_match_short_circuits() -> None:
    first = Mock(return_value=True)
    second = Mock(return_value=False)
    assert any_match(first, second)(ValueError())
    second.assert_not_called()


def test_any_match_single_matcher() -> None:
    matcher = Mock()
    assert any_match(matcher) is matcher


def test_any_match_no_matcher() -> None:
    with pytest.raises(TypeError, match=r"any_match\(\) requires at least one matcher"):
        any_match()
