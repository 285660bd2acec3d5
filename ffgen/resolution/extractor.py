"""Heuristic import specifier extraction.

Patterns are lexical, not syntactic: dynamic ``import()`` calls, re-exports and
computed ``require`` arguments are not recognised. ``PATTERN_VERSION`` is bumped
whenever a pattern changes what it matches.
"""

from __future__ import annotations

import re
from typing import List

from ..models import LanguageFamily

PATTERN_VERSION = 1

# import x from "./a" / import {a, b} from './a' / import "./side-effect"
_ESM_IMPORT = re.compile(r"""\bimport\s*(?:[\w*{}\n\r\t, $]+from\s*)?(["'])(.+?)\1""")
# require("./a") / require( './a' )
_CJS_REQUIRE = re.compile(r"""require\s*\(\s*(["'])(.+?)\1\s*\)""")
# from .pkg import x  |  import .pkg
_PY_IMPORT = re.compile(r"^(?:from\s+(\S+)\s+import|\s*import\s+([^#\n]+))", re.MULTILINE)


def extract_imports(text: str, family: LanguageFamily) -> List[str]:
    """Return raw import specifiers in order of appearance; duplicates are kept."""
    if family is LanguageFamily.ECMA:
        return _extract_ecma(text)
    if family is LanguageFamily.PYTHON:
        return _extract_python(text)
    return []


def _extract_ecma(text: str) -> List[str]:
    matches = [(m.start(), m.group(2)) for m in _ESM_IMPORT.finditer(text)]
    matches.extend((m.start(), m.group(2)) for m in _CJS_REQUIRE.finditer(text))
    matches.sort(key=lambda item: item[0])
    return [specifier for _, specifier in matches]


def _extract_python(text: str) -> List[str]:
    specifiers: List[str] = []
    for match in _PY_IMPORT.finditer(text):
        module = (match.group(1) or match.group(2) or "").strip()
        if not module:
            continue
        specifiers.append(module.split()[0])
    return specifiers


__all__ = ["PATTERN_VERSION", "extract_imports"]
