"""Tests for prtag.core.result module."""

from __future__ import annotations

import pytest

from prtag.core.result import Err, Ok, Result, is_err, is_ok


def _parse(raw: str) -> Result[int, str]:
    if not raw.isdigit():
        return Err(f"not a number: {raw}")
    return Ok(int(raw))


def test_ok_unwrap() -> None:
    assert Ok(3).unwrap() == 3
    assert Ok(3).unwrap_or(7) == 3


def test_err_unwrap_raises() -> None:
    with pytest.raises(ValueError, match="boom"):
        Err("boom").unwrap()


def test_err_unwrap_or_returns_default() -> None:
    assert Err("boom").unwrap_or(7) == 7


def test_values_compare_by_content() -> None:
    assert Ok(1) == Ok(1)
    assert Ok(1) != Err(1)
    assert Err("x") == Err("x")


def test_pattern_matching() -> None:
    match _parse("42"):
        case Ok(value):
            assert value == 42
        case Err(_):
            pytest.fail("expected Ok")

    match _parse("4x"):
        case Ok(_):
            pytest.fail("expected Err")
        case Err(error):
            assert error == "not a number: 4x"


def test_type_guards() -> None:
    assert is_ok(_parse("1"))
    assert not is_err(_parse("1"))
    assert is_err(_parse("x"))
