"""End-to-end ffg command generation flow."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Sequence

from .command import build_command
from .config import FfgenConfig, load_config
from .interaction import (
    Clipboard,
    ConsoleNotifier,
    ConsolePicker,
    ConsolePrompt,
    Notifier,
    Picker,
    Prompt,
    PyperclipClipboard,
)
from .logging import get_logger
from .models import PickerItem, WalkResult
from .resolution import ImportGraphWalker, load_alias_table
from .workspace import build_picker_items, collect_seed_files, sort_paths

MSG_NO_OPEN_FILES = "No files are currently open."
MSG_NO_VALID_FILES = "No valid files found to generate ffg command."
MSG_NOTHING_SELECTED = "No files selected."
MSG_CANCELLED = "Command generation cancelled."
MSG_COPIED = "File Forge command generated and copied to clipboard!"


class Status(str, Enum):
    COPIED = "copied"
    CANCELLED = "cancelled"
    NO_FILES = "no_files"
    FAILED = "failed"


@dataclass
class Preparation:
    """Everything known before the user is asked anything."""

    config: FfgenConfig
    seeds: List[Path]
    skipped: List[Path]
    walk: WalkResult
    items: List[PickerItem] = field(default_factory=list)


@dataclass
class GenerationOutcome:
    """Result of one generate run."""

    status: Status
    message: str
    command: Optional[str] = None
    files: List[Path] = field(default_factory=list)


class CommandGenerator:
    """Coordinates seed collection, import walking, picking and copying."""

    def __init__(
        self,
        picker: Picker | None = None,
        prompt: Prompt | None = None,
        clipboard: Clipboard | None = None,
        notifier: Notifier | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.picker = picker or ConsolePicker()
        self.prompt = prompt or ConsolePrompt()
        self.clipboard = clipboard or PyperclipClipboard()
        self.notifier = notifier or ConsoleNotifier()
        self.clock = clock or datetime.now
        self.logger = get_logger("generator")

    def prepare(self, root: Path | str, paths: Iterable[Path | str]) -> Preparation:
        """Load settings, collect seeds and walk their imports.

        Configuration and aliases are reloaded on every call.
        """
        root_path = Path(os.path.abspath(Path(root).expanduser()))
        config = load_config(root_path)
        seeds, skipped = collect_seed_files(paths, root_path, config.files)
        self.logger.debug("Collected %d seed(s), skipped %d", len(seeds), len(skipped))

        alias_table = load_alias_table(root_path, config.aliases.manifest)
        walker = ImportGraphWalker(
            alias_table, try_all_alias_targets=config.aliases.try_all_targets
        )
        result = walker.walk(seeds)
        items = build_picker_items(
            result, root_path, include_file_path=config.files.include_file_path
        )
        return Preparation(
            config=config, seeds=seeds, skipped=skipped, walk=result, items=items
        )

    def render(self, config: FfgenConfig, files: Sequence[Path | str]) -> str:
        """Build the command for ``files`` sorted by lowercase path."""
        ordered = sort_paths([Path(item) for item in files])
        return build_command(
            ordered,
            now=self.clock(),
            output_dir=config.output.directory,
            output_prefix=config.output.prefix,
        )

    def generate(self, root: Path | str, paths: Iterable[Path | str]) -> GenerationOutcome:
        """Run the interactive flow; failures are reported, never raised."""
        try:
            return self._generate(root, paths)
        except Exception as exc:
            message = f"Error generating command: {exc}"
            self.logger.exception("Error in generate for %s", root)
            self.notifier.error(message)
            return GenerationOutcome(status=Status.FAILED, message=message)

    def _generate(self, root: Path | str, paths: Iterable[Path | str]) -> GenerationOutcome:
        paths = list(paths)
        if not paths:
            return self._finish(Status.NO_FILES, MSG_NO_OPEN_FILES)

        prepared = self.prepare(root, paths)
        if not prepared.walk.files:
            return self._finish(Status.NO_FILES, MSG_NO_VALID_FILES)

        chosen = self.picker.pick(prepared.items)
        if chosen is None:
            return self._finish(Status.CANCELLED, MSG_CANCELLED)
        if not chosen:
            return self._finish(Status.CANCELLED, MSG_NOTHING_SELECTED)

        command = self.render(prepared.config, chosen)
        final = self.prompt.edit(command)
        if final is None:
            return self._finish(Status.CANCELLED, MSG_CANCELLED)

        self.clipboard.copy(final)
        self.logger.info("Copied command covering %d file(s)", len(chosen))
        outcome = self._finish(Status.COPIED, MSG_COPIED)
        outcome.command = final
        outcome.files = sort_paths(chosen)
        return outcome

    def _finish(self, status: Status, message: str) -> GenerationOutcome:
        self.notifier.info(message)
        return GenerationOutcome(status=status, message=message)


__all__ = [
    "CommandGenerator",
    "GenerationOutcome",
    "Preparation",
    "Status",
]
