"""Immutable value types: versions, comparators and ranges."""

from __future__ import annotations

from .comparator import Comparator, ComparatorSet
from .range import Range
from .version import Identifier, Version, compare_identifiers

__all__ = [
    "Comparator",
    "ComparatorSet",
    "Identifier",
    "Range",
    "Version",
    "compare_identifiers",
]
