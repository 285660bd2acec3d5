"""Resolve import specifiers to files on disk."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, List, Optional

from ..logging import get_logger
from ..models import ECMA_EXTENSIONS, PYTHON_EXTENSIONS, AliasTable, LanguageFamily
from .aliases import alias_candidates, is_alias_candidate, resolve_alias

_RELATIVE_MARKER = "."
_ECMA_INDEX = "index"
_PYTHON_PACKAGE_INIT = "__init__.py"

logger = get_logger("resolution.resolver")


def resolve_specifier(
    specifier: str,
    importing_dir: Path,
    alias_table: Optional[AliasTable],
    family: LanguageFamily,
    *,
    try_all_alias_targets: bool = False,
) -> Optional[Path]:
    """Return the file ``specifier`` refers to, or ``None`` when it is not followed.

    Only relative specifiers and, for ECMAScript sources, alias-mapped
    specifiers are followed. Everything else (package imports, broken paths)
    resolves to ``None`` without raising.
    """
    for base in _candidate_bases(
        specifier, importing_dir, alias_table, family, try_all_alias_targets
    ):
        found = probe(base, family)
        if found is not None:
            return found
    logger.debug("Unresolved import %r from %s", specifier, importing_dir)
    return None


def probe(base: Path, family: LanguageFamily) -> Optional[Path]:
    """Return the first existing file among the suffix and index candidates of ``base``."""
    for candidate in candidate_paths(base, family):
        if candidate.is_file():
            return candidate
    return None


def candidate_paths(base: Path, family: LanguageFamily) -> List[Path]:
    """List the probe order for ``base``: exact, with suffixes, then index files."""
    if family is LanguageFamily.PYTHON:
        extensions = PYTHON_EXTENSIONS
        index_names = [_PYTHON_PACKAGE_INIT]
    elif family is LanguageFamily.ECMA:
        extensions = ECMA_EXTENSIONS
        index_names = [f"{_ECMA_INDEX}{ext}" for ext in ECMA_EXTENSIONS]
    else:
        return [base]

    candidates = [base]
    candidates.extend(Path(f"{base}{ext}") for ext in extensions)
    candidates.extend(base / name for name in index_names)
    return candidates


def _candidate_bases(
    specifier: str,
    importing_dir: Path,
    alias_table: Optional[AliasTable],
    family: LanguageFamily,
    try_all_alias_targets: bool,
) -> Iterator[Path]:
    if not specifier:
        return
    if specifier.startswith(_RELATIVE_MARKER):
        if family is LanguageFamily.PYTHON:
            module_path = python_module_path(specifier, importing_dir)
            # "from . import x" names the package itself.
            if not specifier.strip(_RELATIVE_MARKER):
                module_path = module_path / _PYTHON_PACKAGE_INIT
            yield module_path
        else:
            yield Path(os.path.normpath(importing_dir / specifier))
        return
    if family is not LanguageFamily.ECMA or not alias_table:
        return
    if not is_alias_candidate(specifier, alias_table):
        return
    if try_all_alias_targets:
        yield from alias_candidates(specifier, alias_table)
        return
    target = resolve_alias(specifier, alias_table)
    if target is not None:
        yield target


def python_module_path(specifier: str, importing_dir: Path) -> Path:
    """Translate a relative dotted module into a path.

    One leading dot is the importing package, each further dot climbs one
    directory; the remaining dotted parts become path segments.
    """
    stripped = specifier.lstrip(_RELATIVE_MARKER)
    level = len(specifier) - len(stripped)
    base = importing_dir
    for _ in range(level - 1):
        base = base.parent
    parts = [part for part in stripped.split(".") if part]
    if parts:
        base = base.joinpath(*parts)
    return Path(os.path.normpath(base))


__all__ = ["candidate_paths", "probe", "python_module_path", "resolve_specifier"]
