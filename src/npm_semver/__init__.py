"""npm-style semantic versioning: parse, compare and match versions against ranges."""

from __future__ import annotations

from .cache import ParseCache
from .config import ConfigError, Settings, load_settings
from .engine import SemverEngine, default_engine, set_default_engine
from .errors import (
    InvalidComparatorOperator,
    InvalidRangeFormat,
    InvalidVersionFormat,
    NumericOverflow,
    SemverError,
)
from .functions import (
    clean,
    cmp,
    compare,
    compare_build,
    eq,
    gt,
    gte,
    lt,
    lte,
    max_satisfying,
    min_satisfying,
    neq,
    parse,
    parse_range,
    rcompare,
    rsort,
    satisfies,
    sort,
    to_comparators,
    try_parse,
    try_parse_range,
    valid,
    valid_range,
)
from .interop import from_pep440, to_pep440
from .models import Comparator, ComparatorSet, Range, Version
from .options import Options
from .result import ParseResult

__version__ = "0.1.0"

__all__ = [
    "Comparator",
    "ComparatorSet",
    "ConfigError",
    "InvalidComparatorOperator",
    "InvalidRangeFormat",
    "InvalidVersionFormat",
    "NumericOverflow",
    "Options",
    "ParseCache",
    "ParseResult",
    "Range",
    "SemverEngine",
    "SemverError",
    "Settings",
    "Version",
    "clean",
    "cmp",
    "compare",
    "compare_build",
    "default_engine",
    "eq",
    "from_pep440",
    "gt",
    "gte",
    "load_settings",
    "lt",
    "lte",
    "max_satisfying",
    "min_satisfying",
    "neq",
    "parse",
    "parse_range",
    "rcompare",
    "rsort",
    "satisfies",
    "set_default_engine",
    "sort",
    "to_comparators",
    "try_parse",
    "try_parse_range",
    "valid",
    "valid_range",
]
