"""Tests for prtag.core.errors module."""

from prtag.core.errors import ErrorCode


class TestErrorCodeValues:
    """Exit codes are part of the CLI contract and must stay stable."""

    def test_ok_is_zero(self) -> None:
        assert ErrorCode.OK == 0

    def test_user_error_is_one(self) -> None:
        assert ErrorCode.USER_ERROR == 1

    def test_env_error_is_two(self) -> None:
        assert ErrorCode.ENV_ERROR == 2

    def test_network_error_is_four(self) -> None:
        assert ErrorCode.NETWORK_ERROR == 4

    def test_io_error_is_five(self) -> None:
        assert ErrorCode.IO_ERROR == 5


def test_str_is_human_readable() -> None:
    assert str(ErrorCode.NETWORK_ERROR) == "network error"


def test_success_flags() -> None:
    assert ErrorCode.OK.is_success
    assert not ErrorCode.OK.is_error
    assert ErrorCode.USER_ERROR.is_error
