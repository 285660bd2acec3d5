"""Path alias loading and rewriting from tsconfig.json-style manifests."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import json5

from ..config import DEFAULT_ALIAS_MANIFEST
from ..logging import get_logger
from ..models import AliasTable

_WILDCARD = "*"
_MAX_EXTENDS_DEPTH = 6

logger = get_logger("resolution.aliases")


def load_alias_table(
    project_root: Path | str, manifest_name: str = DEFAULT_ALIAS_MANIFEST
) -> AliasTable:
    """Build the alias table from ``compilerOptions.paths`` of the project manifest.

    A missing, unreadable or malformed manifest yields an empty table, so alias
    resolution silently becomes a no-op.
    """
    root = Path(os.path.abspath(Path(project_root).expanduser()))
    manifest = root / manifest_name
    empty = AliasTable(base_dir=root)
    if not manifest.is_file():
        logger.debug("No alias manifest at %s", manifest)
        return empty

    chain = _load_extends_chain(manifest)
    if not chain:
        logger.debug("Alias manifest %s could not be parsed; ignoring aliases", manifest)
        return empty

    base_url: Optional[Tuple[Path, str]] = None
    paths: Dict[str, List[str]] = {}
    paths_dir = root
    # Parents first so the child manifest overrides inherited options.
    for manifest_path, data in reversed(chain):
        options = data.get("compilerOptions")
        if not isinstance(options, dict):
            continue
        value = options.get("baseUrl")
        if isinstance(value, str) and value.strip():
            base_url = (manifest_path.parent, value.strip())
        mapping = options.get("paths")
        if isinstance(mapping, dict):
            paths = _clean_paths(mapping)
            paths_dir = manifest_path.parent

    if base_url is not None:
        anchor, value = base_url
        base_dir = Path(os.path.normpath(anchor / value))
    else:
        base_dir = paths_dir

    if paths:
        logger.debug("Loaded %d path aliases from %s", len(paths), manifest)
    return AliasTable(base_dir=base_dir, paths=paths)


def is_alias_candidate(specifier: str, table: AliasTable) -> bool:
    """Return True when some alias prefix is a literal prefix of ``specifier``."""
    return _match_alias(specifier, table) is not None


def resolve_alias(specifier: str, table: AliasTable) -> Optional[Path]:
    """Rewrite ``specifier`` through the first target of the first matching alias."""
    candidates = alias_candidates(specifier, table)
    return candidates[0] if candidates else None


def alias_candidates(specifier: str, table: AliasTable) -> List[Path]:
    """Return every target of the first matching alias, in configured order."""
    match = _match_alias(specifier, table)
    if match is None:
        return []
    prefix, targets = match
    remainder = specifier[len(prefix):]
    return [
        Path(os.path.normpath(table.base_dir / (_strip_wildcard(target) + remainder)))
        for target in targets
    ]


def _match_alias(specifier: str, table: AliasTable) -> Optional[Tuple[str, List[str]]]:
    for alias, targets in table.paths.items():
        prefix = _strip_wildcard(alias)
        if specifier.startswith(prefix):
            return prefix, targets
    return None


def _strip_wildcard(pattern: str) -> str:
    return pattern[: -len(_WILDCARD)] if pattern.endswith(_WILDCARD) else pattern


def _clean_paths(mapping: Dict[Any, Any]) -> Dict[str, List[str]]:
    cleaned: Dict[str, List[str]] = {}
    for alias, targets in mapping.items():
        if not isinstance(alias, str) or not alias.strip():
            continue
        if isinstance(targets, str):
            targets = [targets]
        if not isinstance(targets, list):
            continue
        cleaned[alias] = [target for target in targets if isinstance(target, str) and target]
    return cleaned


def _load_extends_chain(manifest: Path) -> List[Tuple[Path, Dict[str, Any]]]:
    """Return ``(path, data)`` pairs from the manifest up through local ``extends``."""
    chain: List[Tuple[Path, Dict[str, Any]]] = []
    visited: set[Path] = set()
    current: Optional[Path] = manifest
    while current is not None and len(chain) <= _MAX_EXTENDS_DEPTH:
        if current in visited:
            break
        visited.add(current)
        data = _load_manifest(current)
        if data is None:
            break
        chain.append((current, data))
        current = _resolve_extends(current, data.get("extends"))
    return chain


def _resolve_extends(manifest: Path, value: Any) -> Optional[Path]:
    if not isinstance(value, str) or not value.strip():
        return None
    value = value.strip()
    # Package-based extends (e.g. "@tsconfig/node20") are not followed.
    if not value.startswith(("./", "../", "/")):
        return None
    candidate = Path(value) if value.startswith("/") else manifest.parent / value
    candidate = Path(os.path.normpath(candidate))
    if candidate.is_file():
        return candidate
    if not candidate.name.endswith(".json"):
        with_suffix = Path(f"{candidate}.json")
        if with_suffix.is_file():
            return with_suffix
    return None


def _load_manifest(path: Path) -> Optional[Dict[str, Any]]:
    # tsconfig files allow comments and trailing commas, and editors may add a BOM.
    try:
        raw = path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError):
        return None
    if not raw.strip():
        return None
    try:
        data = json5.loads(raw)
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


__all__ = [
    "alias_candidates",
    "is_alias_candidate",
    "load_alias_table",
    "resolve_alias",
]
