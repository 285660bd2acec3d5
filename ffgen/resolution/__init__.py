"""Import extraction, path resolution and dependency walking."""

from .aliases import (
    alias_candidates,
    is_alias_candidate,
    load_alias_table,
    resolve_alias,
)
from .extractor import PATTERN_VERSION, extract_imports
from .resolver import resolve_specifier
from .walker import ImportGraphWalker, walk

__all__ = [
    "ImportGraphWalker",
    "PATTERN_VERSION",
    "alias_candidates",
    "extract_imports",
    "is_alias_candidate",
    "load_alias_table",
    "resolve_alias",
    "resolve_specifier",
    "walk",
]
