"""Tests for the Ok/Err result values returned by operator actions."""

import pytest

from core.result import Err, Ok


class TestOk:
    def test_accessors(self) -> None:
        result = Ok(5)
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == 5
        assert result.unwrap_or(0) == 5
        assert result.error is None
        assert repr(result) == "Ok(5)"


class TestErr:
    def test_accessors(self) -> None:
        result = Err("No pending recommendation")
        assert result.is_err()
        assert not result.is_ok()
        assert result.unwrap_or(None) is None
        assert result.value is None
        assert repr(result) == "Err('No pending recommendation')"

    def test_unwrap_raises(self) -> None:
        with pytest.raises(ValueError, match="No pending"):
            Err("No pending recommendation").unwrap()


def test_world_actions_return_results(world) -> None:
    assert world.accept_recommendation().unwrap_or("nothing") == "nothing"
    assert world.request_recommendation().unwrap_or(None) is not None
