"""
Primary-strength collation for Greek and Latin script.

Lexicon entries are sorted the way a dictionary orders them: accents,
breathings, iota subscripts, case and the final-sigma form are ignored on the
first pass. Entries equal at that level are ordered by code point, so the
ordering stays total and deterministic.
"""

from __future__ import annotations

import unicodedata
from functools import cmp_to_key
from typing import Callable, Dict, Iterable, List, Optional

Comparator = Callable[[str, str], int]

FINAL_SIGMA = "ς"
SIGMA = "σ"


def strip_accents(text: str) -> str:
    """Remove combining marks (accents, breathings, iota subscript)."""
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")


def primary_key(text: str) -> str:
    """Sort key with only the base letters of ``text``."""
    return strip_accents(text).casefold().replace(FINAL_SIGMA, SIGMA)


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def primary_compare(a: str, b: str) -> int:
    """Three-way comparison of ``a`` and ``b`` at primary strength."""
    return _cmp(primary_key(a), primary_key(b)) or _cmp(a, b)


def codepoint_compare(a: str, b: str) -> int:
    return _cmp(a, b)


COMPARATORS: Dict[str, Comparator] = {
    "primary": primary_compare,
    "codepoint": codepoint_compare,
}


def get_comparator(name: Optional[str]) -> Comparator:
    """Look up a comparator by its configured name (default ``primary``)."""
    key = (name or "primary").lower()
    try:
        return COMPARATORS[key]
    except KeyError:
        raise ValueError(f"Unknown collation '{name}'. Choose from: {', '.join(sorted(COMPARATORS))}") from None


def sort_entries(entries: Iterable[str], compare: Comparator = primary_compare) -> List[str]:
    return sorted(entries, key=cmp_to_key(compare))
