"""Terminal implementations of the interaction contracts."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Set, TextIO

import pyperclip

from ..models import PickerItem
from .base import Clipboard, ClipboardError, Notifier, Picker, Prompt

InputFn = Callable[[str], str]

_ALL = {"", "a", "all", "*"}
_CANCEL = {"q", "quit", "none", "n"}


class SelectAllPicker(Picker):
    """Chooses every item without asking."""

    def pick(self, items: Sequence[PickerItem]) -> Optional[List[Path]]:
        return [item.path for item in items]


class ConsolePicker(Picker):
    """Numbered multi-select over stdin.

    Accepts indices and ranges (``1 3-5``), ``all`` (or Enter) for everything,
    and ``q`` to abandon.
    """

    def __init__(self, input_fn: InputFn = input, output: TextIO | None = None) -> None:
        self._input = input_fn
        self._output = output or sys.stderr

    def pick(self, items: Sequence[PickerItem]) -> Optional[List[Path]]:
        if not items:
            return []
        width = len(str(len(items)))
        for number, item in enumerate(items, start=1):
            self._write(f"{number:>{width}}. {item.label}  {item.description}")
            if item.detail:
                self._write(f"{' ' * width}   {item.detail}")

        while True:
            try:
                answer = self._input("Select files to include [all]: ")
            except EOFError:
                return None
            answer = answer.strip().lower()
            if answer in _CANCEL:
                return None
            if answer in _ALL:
                return [item.path for item in items]
            try:
                chosen = parse_selection(answer, len(items))
            except ValueError as exc:
                self._write(str(exc))
                continue
            return [items[index].path for index in chosen]

    def _write(self, line: str) -> None:
        print(line, file=self._output)


def parse_selection(answer: str, count: int) -> List[int]:
    """Parse ``"1, 3-5"`` into sorted zero-based indices within ``count``."""
    indices: Set[int] = set()
    for token in answer.replace(",", " ").split():
        start_text, _, end_text = token.partition("-")
        try:
            start = int(start_text)
            end = int(end_text) if end_text else start
        except ValueError:
            raise ValueError(f"Not a number or range: {token}") from None
        if start < 1 or end > count or start > end:
            raise ValueError(f"Selection out of range 1-{count}: {token}")
        indices.update(range(start - 1, end))
    if not indices:
        raise ValueError("Nothing selected")
    return sorted(indices)


class AcceptPrompt(Prompt):
    """Returns the command unchanged."""

    def edit(self, command: str) -> Optional[str]:
        return command


class ConsolePrompt(Prompt):
    """Shows the command and accepts a replacement line."""

    def __init__(self, input_fn: InputFn = input, output: TextIO | None = None) -> None:
        self._input = input_fn
        self._output = output or sys.stderr

    def edit(self, command: str) -> Optional[str]:
        print(command, file=self._output)
        try:
            answer = self._input("Enter to accept, type a replacement, or 'q' to cancel: ")
        except EOFError:
            return None
        stripped = answer.strip()
        if not stripped:
            return command
        if stripped.lower() in _CANCEL:
            return None
        return stripped


class PyperclipClipboard(Clipboard):
    """System clipboard through pyperclip."""

    def copy(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as exc:
            raise ClipboardError(f"Clipboard unavailable: {exc}") from exc


class StdoutClipboard(Clipboard):
    """Prints the command instead of copying it."""

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output

    def copy(self, text: str) -> None:
        print(text, file=self._output or sys.stdout)


class ConsoleNotifier(Notifier):
    """Writes messages to stderr."""

    def __init__(self, output: TextIO | None = None) -> None:
        self._output = output

    def info(self, message: str) -> None:
        print(message, file=self._output or sys.stderr)

    def error(self, message: str) -> None:
        print(f"error: {message}", file=self._output or sys.stderr)


class RecordingNotifier(Notifier):
    """Collects messages in memory; used by the service layer."""

    def __init__(self) -> None:
        self.messages: List[str] = []
        self.errors: List[str] = []

    def info(self, message: str) -> None:
        self.messages.append(message)

    def error(self, message: str) -> None:
        self.errors.append(message)
