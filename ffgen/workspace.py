"""Seed file collection and picker presentation for a project workspace."""

from __future__ import annotations

import os
import sys
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

from .config import FilesConfig
from .logging import get_logger
from .models import PickerItem, WalkResult

_GLOBSTAR_PREFIX = "**/"

logger = get_logger("workspace")


def matches_pattern(rel_path: str, pattern: str) -> bool:
    """Glob match where ``**/`` may also match zero leading directories."""
    pattern = pattern.strip()
    if pattern.startswith("./"):
        pattern = pattern[2:]
    if not pattern:
        return False
    if fnmatchcase(rel_path, pattern):
        return True
    if pattern.startswith(_GLOBSTAR_PREFIX):
        return matches_pattern(rel_path, pattern[len(_GLOBSTAR_PREFIX):])
    return False


def is_selected(path: Path, root: Path, files: FilesConfig) -> bool:
    """Apply include then exclude patterns to ``path`` relative to ``root``."""
    rel_path = relative_posix(path, root)
    if files.include and not any(matches_pattern(rel_path, p) for p in files.include):
        return False
    return not any(matches_pattern(rel_path, p) for p in files.exclude)


def relative_posix(path: Path, root: Path) -> str:
    try:
        return path.relative_to(root).as_posix()
    except ValueError:
        return path.as_posix()


def collect_seed_files(
    paths: Iterable[Path | str],
    root: Path,
    files: Optional[FilesConfig] = None,
) -> Tuple[List[Path], List[Path]]:
    """Return ``(seeds, skipped)`` from candidate paths.

    Seeds are absolute, deduplicated in first-seen order, backed by a regular
    file, and pass the include/exclude patterns.
    """
    files = files or FilesConfig()
    root = Path(os.path.abspath(root))
    seeds: List[Path] = []
    skipped: List[Path] = []
    for raw in paths:
        candidate = Path(raw).expanduser()
        if not candidate.is_absolute():
            candidate = root / candidate
        path = Path(os.path.abspath(candidate))
        if path in seeds or path in skipped:
            continue
        if not path.is_file():
            logger.info("Skipping %s: not a file", path)
            skipped.append(path)
            continue
        if not is_selected(path, root, files):
            logger.debug("Skipping %s: filtered by include/exclude patterns", path)
            skipped.append(path)
            continue
        seeds.append(path)
    return seeds, skipped


def read_paths_file(source: str) -> List[str]:
    """Read one path per line from ``source`` (``-`` for stdin), ignoring comments."""
    if source == "-":
        text = sys.stdin.read()
    else:
        text = Path(source).expanduser().read_text(encoding="utf-8")
    entries: List[str] = []
    for line in text.splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        entries.append(stripped)
    return entries


def sort_paths(paths: Sequence[Path]) -> List[Path]:
    """Sort ascending by lowercase full path."""
    return sorted(paths, key=lambda path: str(path).lower())


def build_picker_items(
    result: WalkResult, root: Path, *, include_file_path: bool = True
) -> List[PickerItem]:
    """Turn a walk result into picker entries ordered by lowercase full path."""
    items: List[PickerItem] = []
    for path in sort_paths(result.files):
        origins = [origin for origin in result.origins(path) if origin != path]
        detail = None
        if origins:
            detail = "Imported from: " + ", ".join(origin.name for origin in origins)
        description = str(path) if include_file_path else relative_posix(path, root)
        items.append(
            PickerItem(label=path.name, description=description, path=path, detail=detail)
        )
    return items


__all__ = [
    "build_picker_items",
    "collect_seed_files",
    "is_selected",
    "matches_pattern",
    "read_paths_file",
    "sort_paths",
]
