"""Tests for relnotes.output.console module."""

from __future__ import annotations

import pytest

from relnotes.output.console import ConsoleProtocol, MockConsole, RichConsole, Style


class TestMockConsole:
    def test_records_styles(self) -> None:
        console = MockConsole()
        console.print("plain")
        console.error("bad")
        console.warning("careful")
        console.debug("trace")

        assert console.messages == [
            "plain",
            "error: bad",
            "warning: careful",
            "debug: trace",
        ]
        assert [o.style for o in console.outputs] == [
            Style.DEFAULT,
            Style.ERROR,
            Style.WARNING,
            Style.DEBUG,
        ]
        assert console.has_error()
        assert console.has_warning()

    def test_find(self) -> None:
        console = MockConsole()
        console.warning("#99 has no release note")
        console.debug("other")

        assert len(console.find("#99")) == 1


class TestRichConsole:
    def test_writes_to_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.error("unknown category heading: 'Features'")

        captured = capsys.readouterr()
        assert captured.out == ""
        assert "error:" in captured.err
        assert "Features" in captured.err

    def test_brackets_are_not_markup(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().warning("[bold]literal[/bold]")

        assert "[bold]literal[/bold]" in capsys.readouterr().err

    def test_debug_is_silent_by_default(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole().debug("trace")
        assert capsys.readouterr().err == ""

    def test_debug_enabled(self, capsys: pytest.CaptureFixture[str]) -> None:
        RichConsole(debug=True).debug("read line: - foo")
        assert "read line: - foo" in capsys.readouterr().err

    def test_satisfies_protocol(self) -> None:
        def accept_console(_c: ConsoleProtocol) -> bool:
            return True

        assert accept_console(RichConsole())
