"""String parsers for versions and range expressions."""

from __future__ import annotations

from .range import RangeParser, Term, TermKind, classify, expand, split_terms
from .version import VersionParser

__all__ = [
    "RangeParser",
    "Term",
    "TermKind",
    "VersionParser",
    "classify",
    "expand",
    "split_terms",
]
