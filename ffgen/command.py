"""Serialise a file selection into an ffg command line."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .config import DEFAULT_OUTPUT_DIRECTORY, DEFAULT_OUTPUT_PREFIX

PROGRAM = "ffg"
NO_FILES_COMMAND = "echo 'No valid files found to generate ffg command.'"
TIMESTAMP_FORMAT = "%Y%m%d_%H%M%S"
TRAILING_FLAGS: Tuple[str, ...] = ("--markdown", "--whitespace", "--clipboard")


@dataclass
class FfgInvocation:
    """Ordered file selection plus the output target of one ffg run."""

    files: List[str]
    output: str
    flags: Tuple[str, ...] = field(default=TRAILING_FLAGS)

    def render(self) -> str:
        if not self.files:
            return NO_FILES_COMMAND
        parts = [PROGRAM]
        parts.extend(f'--include "{path}"' for path in self.files)
        parts.append(f"--output {self.output}")
        parts.extend(self.flags)
        return " ".join(parts)


def format_timestamp(moment: datetime) -> str:
    return moment.strftime(TIMESTAMP_FORMAT)


def output_path(
    moment: datetime,
    *,
    output_dir: str = DEFAULT_OUTPUT_DIRECTORY,
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
) -> str:
    """Return ``<dir>/<prefix><YYYYMMDD_HHMMSS>.md`` with forward slashes."""
    directory = output_dir.rstrip("/\\")
    filename = f"{output_prefix}{format_timestamp(moment)}.md"
    return f"{directory}/{filename}" if directory else filename


def build_invocation(
    selected_files: Sequence[Path | str],
    *,
    now: Optional[datetime] = None,
    output_dir: str = DEFAULT_OUTPUT_DIRECTORY,
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
) -> FfgInvocation:
    """Deduplicate the selection, keeping first occurrences in order."""
    moment = now or datetime.now()
    files: List[str] = []
    for item in selected_files:
        text = str(item)
        if text not in files:
            files.append(text)
    return FfgInvocation(
        files=files,
        output=output_path(moment, output_dir=output_dir, output_prefix=output_prefix),
    )


def build_command(
    selected_files: Sequence[Path | str],
    *,
    now: Optional[datetime] = None,
    output_dir: str = DEFAULT_OUTPUT_DIRECTORY,
    output_prefix: str = DEFAULT_OUTPUT_PREFIX,
) -> str:
    """Return the ffg invocation for ``selected_files`` in the given order.

    An empty selection yields an ``echo`` explaining that nothing was found.
    """
    invocation = build_invocation(
        selected_files, now=now, output_dir=output_dir, output_prefix=output_prefix
    )
    return invocation.render()


__all__ = [
    "FfgInvocation",
    "NO_FILES_COMMAND",
    "build_command",
    "build_invocation",
    "format_timestamp",
    "output_path",
]
