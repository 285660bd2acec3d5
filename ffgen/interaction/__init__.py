"""Picker, prompt, clipboard and notification collaborators."""

from .base import Clipboard, ClipboardError, Notifier, Picker, Prompt
from .console import (
    AcceptPrompt,
    ConsoleNotifier,
    ConsolePicker,
    ConsolePrompt,
    PyperclipClipboard,
    RecordingNotifier,
    SelectAllPicker,
    StdoutClipboard,
    parse_selection,
)

__all__ = [
    "AcceptPrompt",
    "Clipboard",
    "ClipboardError",
    "ConsoleNotifier",
    "ConsolePicker",
    "ConsolePrompt",
    "Notifier",
    "Picker",
    "Prompt",
    "PyperclipClipboard",
    "RecordingNotifier",
    "SelectAllPicker",
    "StdoutClipboard",
    "parse_selection",
]
