"""Tests for the terminal interaction collaborators."""

from __future__ import annotations

import io
from pathlib import Path
from typing import Iterator, List

import pyperclip
import pytest

from ffgen.interaction import (
    AcceptPrompt,
    ClipboardError,
    ConsolePicker,
    ConsolePrompt,
    PyperclipClipboard,
    SelectAllPicker,
    StdoutClipboard,
    parse_selection,
)
from ffgen.models import PickerItem


def _items() -> List[PickerItem]:
    return [
        PickerItem(label="a.ts", description="/p/a.ts", path=Path("/p/a.ts")),
        PickerItem(
            label="b.ts",
            description="/p/b.ts",
            path=Path("/p/b.ts"),
            detail="Imported from: a.ts",
        ),
        PickerItem(label="c.ts", description="/p/c.ts", path=Path("/p/c.ts")),
    ]


def _answers(*values: str):
    iterator: Iterator[str] = iter(values)

    def _input(prompt: str) -> str:
        try:
            return next(iterator)
        except StopIteration:
            raise EOFError from None

    return _input


def test_parse_selection_handles_ranges_and_commas() -> None:
    assert parse_selection("1, 3-4", 5) == [0, 2, 3]
    assert parse_selection("2 2", 3) == [1]


@pytest.mark.parametrize("answer", ["0", "4", "3-1", "x", "1-b"])
def test_parse_selection_rejects_bad_input(answer: str) -> None:
    with pytest.raises(ValueError):
        parse_selection(answer, 3)


def test_console_picker_lists_items_with_detail() -> None:
    output = io.StringIO()
    picker = ConsolePicker(_answers(""), output)

    chosen = picker.pick(_items())

    assert chosen == [Path("/p/a.ts"), Path("/p/b.ts"), Path("/p/c.ts")]
    listing = output.getvalue()
    assert "1. a.ts  /p/a.ts" in listing
    assert "Imported from: a.ts" in listing


def test_console_picker_retries_after_invalid_answer() -> None:
    output = io.StringIO()
    picker = ConsolePicker(_answers("9", "1 3"), output)

    assert picker.pick(_items()) == [Path("/p/a.ts"), Path("/p/c.ts")]
    assert "out of range" in output.getvalue()


@pytest.mark.parametrize("answers", [("q",), ()])
def test_console_picker_cancel_and_eof(answers) -> None:
    picker = ConsolePicker(_answers(*answers), io.StringIO())

    assert picker.pick(_items()) is None


def test_select_all_picker() -> None:
    assert SelectAllPicker().pick(_items()) == [item.path for item in _items()]


def test_console_prompt_accept_replace_cancel() -> None:
    output = io.StringIO()

    assert ConsolePrompt(_answers(""), output).edit("ffg x") == "ffg x"
    assert ConsolePrompt(_answers("  ffg y  "), output).edit("ffg x") == "ffg y"
    assert ConsolePrompt(_answers("q"), output).edit("ffg x") is None
    assert ConsolePrompt(_answers(), output).edit("ffg x") is None
    assert "ffg x" in output.getvalue()


def test_accept_prompt_is_identity() -> None:
    assert AcceptPrompt().edit("ffg z") == "ffg z"


def test_pyperclip_clipboard_copies(monkeypatch) -> None:
    copied: List[str] = []
    monkeypatch.setattr(pyperclip, "copy", copied.append)

    PyperclipClipboard().copy("ffg a")

    assert copied == ["ffg a"]


def test_pyperclip_failure_becomes_clipboard_error(monkeypatch) -> None:
    def _fail(text: str) -> None:
        raise pyperclip.PyperclipException("no clipboard mechanism")

    monkeypatch.setattr(pyperclip, "copy", _fail)

    with pytest.raises(ClipboardError, match="no clipboard mechanism"):
        PyperclipClipboard().copy("ffg a")


def test_stdout_clipboard_prints(capsys) -> None:
    StdoutClipboard().copy("ffg b")

    assert capsys.readouterr().out == "ffg b\n"
