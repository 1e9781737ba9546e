"""Tests for prtag.output.console module."""

from __future__ import annotations

import pytest

from prtag.output.console import MockConsole, RichConsole, Style


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.DIM) == "dim"


class TestMockConsole:
    def test_print_captures_message_and_style(self) -> None:
        console = MockConsole()
        console.print("hello", Style.DIM)
        assert console.outputs[0].message == "hello"
        assert console.outputs[0].style == Style.DIM

    def test_prefixes(self) -> None:
        console = MockConsole()
        console.success("tagged")
        console.error("failed")
        console.warning("careful")
        console.info("fyi")
        assert console.messages == ["OK tagged", "error: failed", "warning: careful", "info: fyi"]
        assert console.has_error()
        assert console.has_success()

    def test_find(self) -> None:
        console = MockConsole()
        console.print("latest tag: 1.2.3")
        console.print("commit range: a..b")
        assert len(console.find("latest tag")) == 1


class TestRichConsole:
    def test_changelog_brackets_are_printed_verbatim(
        self, capsys: pytest.CaptureFixture[str]
    ) -> None:
        console = RichConsole()
        console.print("- Fix [bold] ([#12](https://example.test/pull/12)) by @dev")
        out = capsys.readouterr().out
        assert "[#12](https://example.test/pull/12)" in out
        assert "[bold]" in out

    def test_error_prefix(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().error("no release label [x]")
        out = capsys.readouterr().out
        assert "error: no release label [x]" in out

    def test_header_is_preceded_by_blank_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().header("Release plan")
        out = capsys.readouterr().out
        assert out.splitlines() == ["", "Release plan"]
