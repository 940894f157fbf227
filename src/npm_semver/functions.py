"""Module-level helpers backed by the default engine.

Every helper accepts either ``Version``/``Range`` values or raw strings.
``parse`` and ``parse_range`` return None on invalid input; ``compare`` and
``satisfies`` raise the parse error instead of guessing an answer.
"""

from __future__ import annotations

from collections.abc import Iterable
from functools import cmp_to_key

from .engine import default_engine
from .errors import InvalidComparatorOperator
from .models.comparator import check_operator, normalize_operator
from .models.range import Range
from .models.version import Version
from .options import OptionsLike
from .result import ParseResult

VersionLike = Version | str
RangeLike = Range | str


# ---- parsing ------------------------------------------------------------------------


def parse(text: object, options: OptionsLike = None) -> Version | None:
    """Return the parsed version, or None when ``text`` is not a valid version."""
    return default_engine().parse(text, options)


def try_parse(text: object, options: OptionsLike = None) -> ParseResult[Version]:
    return default_engine().try_parse(text, options)


def valid(text: object, options: OptionsLike = None) -> str | None:
    """Return the normalised version string, or None when invalid."""
    version = parse(text, options)
    return version.version if version is not None else None


def clean(text: object, options: OptionsLike = None) -> str | None:
    """Normalise a loosely written version (``"  =v1.2.3 "`` becomes ``"1.2.3"``)."""
    if not isinstance(text, str):
        return None
    return valid(text.strip().lstrip("=vV"), options)


def parse_range(text: object, options: OptionsLike = None) -> Range | None:
    """Return the parsed range, or None when ``text`` is not a valid range."""
    return default_engine().parse_range(text, options)


def try_parse_range(text: object, options: OptionsLike = None) -> ParseResult[Range]:
    return default_engine().try_parse_range(text, options)


def valid_range(text: object, options: OptionsLike = None) -> str | None:
    """Return the normalised range, ``"*"`` for match-all, or None when invalid."""
    value = parse_range(text, options)
    if value is None:
        return None
    return str(value) or "*"


def to_comparators(range_: RangeLike, options: OptionsLike = None) -> list[list[str]]:
    return default_engine().range(range_, options).to_comparators()


# ---- comparison ---------------------------------------------------------------------


def compare(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> int:
    """Return -1, 0 or 1 by SemVer precedence; build metadata is ignored."""
    return default_engine().compare(a, b, options)


def rcompare(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> int:
    return compare(b, a, options)


def compare_build(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> int:
    """Like ``compare`` but breaks ties on build metadata, for stable sorting."""
    engine = default_engine()
    return engine.version(a, options).compare_build(engine.version(b, options))


def eq(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> bool:
    return compare(a, b, options) == 0


def neq(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> bool:
    return compare(a, b, options) != 0


def lt(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> bool:
    return compare(a, b, options) < 0


def lte(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> bool:
    return compare(a, b, options) <= 0


def gt(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> bool:
    return compare(a, b, options) > 0


def gte(a: VersionLike, b: VersionLike, options: OptionsLike = None) -> bool:
    return compare(a, b, options) >= 0


def cmp(a: VersionLike, operator: str, b: VersionLike, options: OptionsLike = None) -> bool:
    """Apply ``operator`` (``= == != < <= > >=`` or ``""``) to two versions."""
    if operator == "!=":
        return neq(a, b, options)
    if not isinstance(operator, str):
        raise InvalidComparatorOperator(f"Invalid comparator operator: {operator!r}", operator)
    return check_operator(compare(a, b, options), normalize_operator(operator))


def sort(versions: Iterable[VersionLike], options: OptionsLike = None) -> list[Version]:
    """Return the versions in ascending order; ties are ordered by build metadata."""
    engine = default_engine()
    parsed = [engine.version(item, options) for item in versions]
    return sorted(parsed, key=cmp_to_key(Version.compare_build))


def rsort(versions: Iterable[VersionLike], options: OptionsLike = None) -> list[Version]:
    engine = default_engine()
    parsed = [engine.version(item, options) for item in versions]
    return sorted(parsed, key=cmp_to_key(Version.compare_build), reverse=True)


# ---- ranges -------------------------------------------------------------------------


def satisfies(version: VersionLike, range_: RangeLike, options: OptionsLike = None) -> bool:
    """Return True when ``version`` satisfies ``range_``.

    Prerelease versions only match comparator sets that explicitly mention a
    prerelease of the same ``major.minor.patch``, unless ``include_prerelease``
    is set.
    """
    return default_engine().satisfies(version, range_, options)


def max_satisfying(
    versions: Iterable[VersionLike], range_: RangeLike, options: OptionsLike = None
) -> Version | None:
    matched = default_engine().filter(versions, range_, options)
    return max(matched, default=None)


def min_satisfying(
    versions: Iterable[VersionLike], range_: RangeLike, options: OptionsLike = None
) -> Version | None:
    matched = default_engine().filter(versions, range_, options)
    return min(matched, default=None)
