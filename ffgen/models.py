"""Core data models shared across ffgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Set, Tuple


class LanguageFamily(str, Enum):
    """Import syntax family of a source file."""

    ECMA = "ecma"
    PYTHON = "python"
    UNSUPPORTED = "unsupported"

    @classmethod
    def for_path(cls, path: Path | str) -> "LanguageFamily":
        suffix = Path(path).suffix.lower()
        if suffix in ECMA_EXTENSIONS:
            return cls.ECMA
        if suffix in PYTHON_EXTENSIONS:
            return cls.PYTHON
        return cls.UNSUPPORTED


# Ordered: resolution tries suffixes in exactly this order.
ECMA_EXTENSIONS: Tuple[str, ...] = (".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs")
PYTHON_EXTENSIONS: Tuple[str, ...] = (".py",)


@dataclass(frozen=True)
class SourceFile:
    """An absolute file path together with its language family."""

    path: Path
    family: LanguageFamily

    @classmethod
    def from_path(cls, path: Path | str) -> "SourceFile":
        resolved = Path(path)
        return cls(path=resolved, family=LanguageFamily.for_path(resolved))


@dataclass(frozen=True)
class ResolvedImport:
    """A raw specifier and the file it resolved to, if any."""

    specifier: str
    path: Optional[Path] = None

    @property
    def resolved(self) -> bool:
        return self.path is not None


@dataclass
class AliasTable:
    """Path-alias mapping loaded from a project manifest such as tsconfig.json."""

    base_dir: Path
    paths: Dict[str, List[str]] = field(default_factory=dict)

    def __bool__(self) -> bool:
        return bool(self.paths)


@dataclass
class FileImports:
    """Direct imports of one expanded file, or the reason it could not be scanned."""

    path: Path
    imports: List[Path] = field(default_factory=list)
    error: Optional[str] = None
    specifiers: List[ResolvedImport] = field(default_factory=list)

    @property
    def unresolved(self) -> List[str]:
        return [item.specifier for item in self.specifiers if not item.resolved]


@dataclass
class WalkResult:
    """Outcome of walking the import graph from a set of seed files."""

    seeds: List[Path]
    files: List[Path] = field(default_factory=list)
    provenance: Dict[Path, Set[Path]] = field(default_factory=dict)
    imports: Dict[Path, List[Path]] = field(default_factory=dict)
    errors: Dict[Path, str] = field(default_factory=dict)

    def origins(self, path: Path) -> List[Path]:
        """Return the seeds reaching ``path`` sorted case-insensitively."""
        return sorted(self.provenance.get(path, set()), key=lambda item: str(item).lower())


@dataclass
class PickerItem:
    """Single selectable entry presented to the file picker."""

    label: str
    description: str
    path: Path
    detail: Optional[str] = None
