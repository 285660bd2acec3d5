"""Contracts for the interactive collaborators of command generation."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Optional, Sequence

from ..models import PickerItem


class ClipboardError(RuntimeError):
    """Raised when the generated command cannot be copied."""


class Picker(ABC):
    """Lets the user choose which discovered files go into the command."""

    @abstractmethod
    def pick(self, items: Sequence[PickerItem]) -> Optional[List[Path]]:
        """Return the chosen paths, or None when the user abandons the operation."""


class Prompt(ABC):
    """Shows the generated command and lets the user edit it."""

    @abstractmethod
    def edit(self, command: str) -> Optional[str]:
        """Return the final command, or None when the user cancels."""


class Clipboard(ABC):
    """Destination for the final command."""

    @abstractmethod
    def copy(self, text: str) -> None:
        """Copy ``text``; raise ClipboardError on failure."""


class Notifier(ABC):
    """User-visible messages."""

    @abstractmethod
    def info(self, message: str) -> None:
        """Report an informational message."""

    @abstractmethod
    def error(self, message: str) -> None:
        """Report a failure."""
