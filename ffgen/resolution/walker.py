"""Import graph traversal from a set of seed files."""

from __future__ import annotations

import os
from collections import deque
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Set

from ..logging import get_logger
from ..models import (
    AliasTable,
    FileImports,
    LanguageFamily,
    ResolvedImport,
    SourceFile,
    WalkResult,
)
from .extractor import extract_imports
from .resolver import resolve_specifier

Reader = Callable[[Path], str]

logger = get_logger("resolution.walker")


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class ImportGraphWalker:
    """Discovers every file statically reachable from the seeds.

    One walker serves one invocation. The ``seen`` set lives in the call to
    :meth:`walk` and is shared by every seed's expansion, so the walker holds no
    traversal state between calls.
    """

    def __init__(
        self,
        alias_table: Optional[AliasTable] = None,
        *,
        try_all_alias_targets: bool = False,
        reader: Reader | None = None,
    ) -> None:
        self.alias_table = alias_table
        self.try_all_alias_targets = try_all_alias_targets
        self._reader = reader or _read_text

    def walk(self, seeds: Iterable[Path | str]) -> WalkResult:
        """Return the flattened, deduplicated file set and its provenance."""
        seed_paths = _dedupe(Path(os.path.abspath(seed)) for seed in seeds)
        result = WalkResult(seeds=seed_paths)
        seen: Set[Path] = set()
        expanded: Dict[Path, FileImports] = {}

        for seed in seed_paths:
            if seed not in seen:
                self._expand(seed, seen, expanded)

        for path, info in expanded.items():
            if info.error is not None:
                result.errors[path] = info.error
                continue
            result.files.append(path)
            result.imports[path] = list(info.imports)

        for seed in seed_paths:
            if seed in result.errors:
                continue
            for reached in self._reachable(seed, result.imports):
                result.provenance.setdefault(reached, set()).add(seed)

        logger.debug(
            "Walked %d seed(s): %d file(s), %d error(s)",
            len(seed_paths),
            len(result.files),
            len(result.errors),
        )
        return result

    def scan_file(self, path: Path) -> FileImports:
        """Extract and resolve the direct imports of one file."""
        if not path.is_file():
            logger.warning("Error parsing imports for %s: not a file", path)
            return FileImports(path=path, error=f"Not a file: {path}")
        source = SourceFile.from_path(path)
        if source.family is LanguageFamily.UNSUPPORTED:
            return FileImports(path=path)
        try:
            text = self._reader(path)
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Error parsing imports for %s: %s", path, exc)
            return FileImports(path=path, error=str(exc))

        imports: List[Path] = []
        specifiers: List[ResolvedImport] = []
        for specifier in extract_imports(text, source.family):
            resolved = resolve_specifier(
                specifier,
                path.parent,
                self.alias_table,
                source.family,
                try_all_alias_targets=self.try_all_alias_targets,
            )
            specifiers.append(ResolvedImport(specifier=specifier, path=resolved))
            if resolved is not None and resolved not in imports:
                imports.append(resolved)
        return FileImports(path=path, imports=imports, specifiers=specifiers)

    def _expand(self, seed: Path, seen: Set[Path], expanded: Dict[Path, FileImports]) -> None:
        # Depth-first preorder with an explicit stack; chain length is unbounded.
        stack: List[Path] = [seed]
        while stack:
            path = stack.pop()
            if path in seen:
                continue
            seen.add(path)
            info = self.scan_file(path)
            expanded[path] = info
            stack.extend(dep for dep in reversed(info.imports) if dep not in seen)

    @staticmethod
    def _reachable(seed: Path, graph: Dict[Path, List[Path]]) -> List[Path]:
        # Fresh traversal per seed; files that failed to scan are not in the graph.
        visited: Set[Path] = {seed}
        order: List[Path] = [seed]
        queue = deque([seed])
        while queue:
            current = queue.popleft()
            for dependency in graph.get(current, []):
                if dependency in visited or dependency not in graph:
                    continue
                visited.add(dependency)
                order.append(dependency)
                queue.append(dependency)
        return order


def walk(
    seeds: Iterable[Path | str],
    alias_table: Optional[AliasTable] = None,
    *,
    try_all_alias_targets: bool = False,
) -> WalkResult:
    """Walk the import graph from ``seeds`` with a fresh walker."""
    walker = ImportGraphWalker(alias_table, try_all_alias_targets=try_all_alias_targets)
    return walker.walk(seeds)


def _dedupe(paths: Iterable[Path]) -> List[Path]:
    unique: List[Path] = []
    seen: Set[Path] = set()
    for path in paths:
        if path in seen:
            continue
        seen.add(path)
        unique.append(path)
    return unique


__all__ = ["ImportGraphWalker", "walk"]
