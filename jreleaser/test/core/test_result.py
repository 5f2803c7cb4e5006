"""Tests for jreleaser.core.result module."""

from __future__ import annotations

import pytest

from jreleaser.core.result import Err, Ok, Result


def _parse_port(raw: str) -> Result[int, str]:
    if not raw.isdigit():
        return Err(f"not a number: {raw}")
    return Ok(int(raw))


class TestOk:
    def test_value(self) -> None:
        assert Ok(42).value == 42
        assert repr(Ok("x")) == "Ok('x')"

    def test_frozen(self) -> None:
        result = Ok(1)
        with pytest.raises(AttributeError):
            result.value = 2  # type: ignore[misc]


class TestErr:
    def test_error(self) -> None:
        assert Err("boom").error == "boom"
        assert repr(Err("boom")) == "Err('boom')"

    def test_equality(self) -> None:
        assert Err("boom") == Err("boom")
        assert Err("boom") != Ok("boom")


class TestNarrowing:
    def test_isinstance(self) -> None:
        assert isinstance(_parse_port("8080"), Ok)
        assert isinstance(_parse_port("http"), Err)

    def test_pattern_matching(self) -> None:
        match _parse_port("abc"):
            case Ok(value):
                pytest.fail(f"unexpected value {value}")
            case Err(error):
                assert error == "not a number: abc"

    def test_error_identity_is_kept(self) -> None:
        marker = object()
        assert Err(marker).error is marker
