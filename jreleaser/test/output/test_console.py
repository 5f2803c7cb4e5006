"""Tests for jreleaser.output.console module."""

from __future__ import annotations

import pytest

from jreleaser.output.console import (
    ConsoleProtocol,
    MockConsole,
    OutputRecord,
    RichConsole,
    Style,
)


class TestStyle:
    def test_str_conversion(self) -> None:
        assert str(Style.SUCCESS) == "success"
        assert str(Style.ERROR) == "error"
        assert str(Style.DEFAULT) == "default"


class TestMockConsole:
    def test_print_captures_message(self) -> None:
        console = MockConsole()
        console.print("hello")
        assert console.outputs == [OutputRecord("hello", Style.DEFAULT, 0)]

    def test_prefixed_helpers(self) -> None:
        console = MockConsole()
        console.success("done")
        console.error("failed")
        console.warning("careful")
        console.info("note")
        console.header("Section")
        assert console.messages == [
            "OK done",
            "error: failed",
            "warning: careful",
            "info: note",
            "Section",
        ]
        assert console.has_error()
        assert console.count(Style.HEADER) == 1

    def test_indented_tracks_depth(self) -> None:
        console = MockConsole()
        console.print("top")
        with console.indented():
            console.print("nested")
            with console.indented():
                console.print("deeper")
        console.print("back")
        assert [o.depth for o in console.outputs] == [0, 1, 2, 0]

    def test_indented_restores_depth_on_error(self) -> None:
        console = MockConsole()
        with pytest.raises(RuntimeError):
            with console.indented():
                raise RuntimeError("boom")
        assert console.depth == 0

    def test_find_and_text(self) -> None:
        console = MockConsole()
        console.print("alpha")
        console.print("beta")
        assert [o.message for o in console.find("alp")] == ["alpha"]
        assert console.text == "alpha\nbeta"


class TestRichConsole:
    def test_writes_to_stdout(self, capsys: pytest.CaptureFixture[str]) -> None:
        console = RichConsole()
        console.success("released")
        with console.indented():
            console.print("nested [not markup]")
        out = capsys.readouterr().out
        assert "OK released" in out
        assert "  nested [not markup]" in out

    def test_satisfies_protocol(self) -> None:
        console: ConsoleProtocol = RichConsole()
        assert callable(console.header)
