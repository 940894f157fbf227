"""Parse npm-style range expressions into ``Range`` values.

Each ``||`` segment is split into terms, every term is classified as one of
the ``TermKind`` variants and a single ``expand`` function turns each variant
into explicit comparators::

    1.2.3 - 2.3      >=1.2.3 <2.4.0
    ^0.2.3           >=0.2.3 <0.3.0
    ~1.2             >=1.2.0 <1.3.0
    1.x              >=1.0.0 <2.0.0
    >1.2             >=1.3.0

With ``include_prerelease`` the exclusive upper bounds become ``-0`` bounds
(``<2.0.0-0``) so the prereleases of the excluded version stay excluded, and
lower bounds taken from partial versions gain ``-0`` as well.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum

from ..cache import ParseCache
from ..errors import InvalidComparatorOperator, InvalidRangeFormat, SemverError
from ..grammar import (
    CARET_OPERATORS,
    COMPARISON_OPERATORS,
    MAX_LENGTH,
    OPERATOR_PREFIX,
    TILDE_OPERATORS,
    is_wildcard,
    partial_pattern,
)
from ..models.comparator import Comparator, ComparatorSet
from ..models.range import Range
from ..models.version import Version
from ..options import Options, OptionsLike, parse_options
from ..result import ParseResult
from .version import VersionParser

_CACHE_KIND = "range"

Bound = tuple[str, str]


class TermKind(Enum):
    HYPHEN = "hyphen"
    CARET = "caret"
    TILDE = "tilde"
    WILDCARD = "wildcard"
    COMPARATOR = "comparator"


@dataclass(frozen=True, slots=True)
class Partial:
    """A possibly incomplete version as written in a range (``1``, ``1.x``, ``1.2.3-rc``)."""

    major: str | None
    minor: str | None = None
    patch: str | None = None
    prerelease: str | None = None
    build: str | None = None

    @property
    def x_major(self) -> bool:
        return is_wildcard(self.major)

    @property
    def x_minor(self) -> bool:
        return self.x_major or is_wildcard(self.minor)

    @property
    def x_patch(self) -> bool:
        return self.x_minor or is_wildcard(self.patch)

    @property
    def M(self) -> int:
        return int(self.major or 0)

    @property
    def m(self) -> int:
        return int(self.minor or 0)

    @property
    def p(self) -> int:
        return int(self.patch or 0)


@dataclass(frozen=True, slots=True)
class Term:
    """One classified range term, before expansion."""

    kind: TermKind
    operator: str
    lower: Partial
    upper: Partial | None = None
    text: str = ""


# ---- tokenizing ---------------------------------------------------------------------


def _partial(text: str, loose: bool, max_length: int) -> Partial:
    if len(text) > max_length:
        raise InvalidRangeFormat(f"Range term is longer than {max_length} characters", text)
    match = partial_pattern(loose).fullmatch(text)
    if match is None:
        raise InvalidRangeFormat(f"Invalid range term: {text!r}", text)
    return Partial(*match.groups())


def classify(word: str, loose: bool = False, max_length: int = MAX_LENGTH) -> Term:
    """Classify a single whitespace-free term such as ``^1.2``, ``>=1.0.0`` or ``1.x``."""
    operator = OPERATOR_PREFIX.match(word).group()  # type: ignore[union-attr]
    operand = word[len(operator) :]

    if operator in CARET_OPERATORS:
        kind: TermKind | None = TermKind.CARET
    elif operator in TILDE_OPERATORS:
        kind = TermKind.TILDE
    elif operator in COMPARISON_OPERATORS:
        kind = None
    else:
        raise InvalidComparatorOperator(f"Invalid comparator operator: {operator!r}", word)

    if not operand:
        raise InvalidRangeFormat(f"Operator {operator!r} is missing a version", word)

    partial = _partial(operand, loose, max_length)
    if kind is None:
        kind = TermKind.WILDCARD if partial.x_patch else TermKind.COMPARATOR
    return Term(kind=kind, operator=operator, lower=partial, text=word)


def split_terms(segment: str, loose: bool = False, max_length: int = MAX_LENGTH) -> list[Term]:
    """Split one ``||`` segment into classified terms.

    Whitespace between an operator and its version is allowed (``>= 1.2.3``,
    ``^ 1.2``). A hyphen range must be the whole segment.
    """
    words = segment.split()
    if not words:
        return []

    if len(words) == 3 and words[1] == "-":
        return [
            Term(
                kind=TermKind.HYPHEN,
                operator="",
                lower=_partial(words[0], loose, max_length),
                upper=_partial(words[2], loose, max_length),
                text=segment.strip(),
            )
        ]

    glued: list[str] = []
    pending = ""
    for word in words:
        word = pending + word
        pending = ""
        if OPERATOR_PREFIX.fullmatch(word):
            pending = word
            continue
        glued.append(word)
    if pending:
        raise InvalidRangeFormat(f"Operator {pending!r} is missing a version", segment)

    return [classify(word, loose, max_length) for word in glued]


# ---- expansion ----------------------------------------------------------------------


def _bound(operator: str, major: int, minor: int, patch: int, prerelease: str = "") -> Bound:
    text = f"{major}.{minor}.{patch}"
    if prerelease:
        text += f"-{prerelease}"
    return (operator, text)


def _full(operator: str, partial: Partial) -> Bound:
    return _bound(operator, partial.M, partial.m, partial.p, partial.prerelease or "")


def _expand_caret(v: Partial, floor: str, ceil: str) -> list[Bound]:
    if v.x_major:
        return []
    if v.x_minor:
        return [_bound(">=", v.M, 0, 0, floor), _bound("<", v.M + 1, 0, 0, ceil)]
    if v.x_patch:
        lower = _bound(">=", v.M, v.m, 0, floor)
        if v.M == 0:
            return [lower, _bound("<", 0, v.m + 1, 0, ceil)]
        return [lower, _bound("<", v.M + 1, 0, 0, ceil)]

    lower = _full(">=", v)
    if v.M != 0:
        return [lower, _bound("<", v.M + 1, 0, 0, ceil)]
    if v.m != 0:
        return [lower, _bound("<", 0, v.m + 1, 0, ceil)]
    return [lower, _bound("<", 0, 0, v.p + 1, ceil)]


def _expand_tilde(v: Partial, floor: str, ceil: str) -> list[Bound]:
    if v.x_major:
        return []
    if v.x_minor:
        return [_bound(">=", v.M, 0, 0, floor), _bound("<", v.M + 1, 0, 0, ceil)]
    if v.x_patch:
        return [_bound(">=", v.M, v.m, 0, floor), _bound("<", v.M, v.m + 1, 0, ceil)]
    return [_full(">=", v), _bound("<", v.M, v.m + 1, 0, ceil)]


def _expand_wildcard(operator: str, v: Partial, floor: str, ceil: str) -> list[Bound]:
    if operator == "=":
        operator = ""

    if v.x_major:
        if operator in (">", "<"):
            # nothing is greater or smaller than everything
            return [_bound("<", 0, 0, 0, "0")]
        return []

    if not operator:
        if v.x_minor:
            return [_bound(">=", v.M, 0, 0, floor), _bound("<", v.M + 1, 0, 0, ceil)]
        return [_bound(">=", v.M, v.m, 0, floor), _bound("<", v.M, v.m + 1, 0, ceil)]

    major, minor = v.M, 0 if v.x_minor else v.m
    if operator == ">":
        # >1 is >=2.0.0 and >1.2 is >=1.3.0
        operator = ">="
        if v.x_minor:
            major, minor = major + 1, 0
        else:
            minor += 1
    elif operator == "<=":
        # <=1.2 is <1.3.0 and <=1 is <2.0.0
        operator = "<"
        if v.x_minor:
            major, minor = major + 1, 0
        else:
            minor += 1

    return [_bound(operator, major, minor, 0, ceil if operator == "<" else floor)]


def _expand_hyphen(low: Partial, high: Partial, floor: str, ceil: str) -> list[Bound]:
    bounds: list[Bound] = []
    if low.x_major:
        pass
    elif low.x_minor:
        bounds.append(_bound(">=", low.M, 0, 0, floor))
    elif low.x_patch:
        bounds.append(_bound(">=", low.M, low.m, 0, floor))
    else:
        bounds.append(_full(">=", low))

    if high.x_major:
        pass
    elif high.x_minor:
        bounds.append(_bound("<", high.M + 1, 0, 0, ceil))
    elif high.x_patch:
        bounds.append(_bound("<", high.M, high.m + 1, 0, ceil))
    else:
        bounds.append(_full("<=", high))
    return bounds


def expand(term: Term, include_prerelease: bool = False) -> list[Bound]:
    """Map a classified term onto explicit ``(operator, version)`` bounds."""
    floor = ceil = "0" if include_prerelease else ""

    if term.kind is TermKind.CARET:
        return _expand_caret(term.lower, floor, ceil)
    if term.kind is TermKind.TILDE:
        return _expand_tilde(term.lower, floor, ceil)
    if term.kind is TermKind.WILDCARD:
        return _expand_wildcard(term.operator, term.lower, floor, ceil)
    if term.kind is TermKind.HYPHEN:
        assert term.upper is not None
        return _expand_hyphen(term.lower, term.upper, floor, ceil)
    return [_full(term.operator or "=", term.lower)]


# ---- parser -------------------------------------------------------------------------


class RangeParser:
    """Range parser sharing its cache with a ``VersionParser`` for the operands."""

    def __init__(
        self,
        versions: VersionParser,
        cache: ParseCache | None = None,
        *,
        max_length: int = MAX_LENGTH,
    ) -> None:
        self.versions = versions
        self.cache = cache
        self.max_length = max_length

    def parse(self, text: object, options: OptionsLike = None) -> ParseResult[Range]:
        opts = parse_options(options)
        if isinstance(text, Range) and text.options == opts:
            return ParseResult.success(text)
        if isinstance(text, Range):
            if not text.raw:
                # built from explicit sets; nothing to re-expand
                return ParseResult.success(replace(text, options=opts))
            text = text.raw
        if not isinstance(text, str):
            return ParseResult.failure(
                InvalidRangeFormat(f"Invalid range, expected a string: {text!r}", text)
            )

        key = (_CACHE_KIND, text, opts)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return ParseResult.success(cached)

        try:
            value = self._parse(text, opts)
        except SemverError as exc:
            return ParseResult.failure(exc)

        if self.cache is not None:
            self.cache.set(key, value)
        return ParseResult.success(value)

    def _parse(self, text: str, opts: Options) -> Range:
        operand_options = opts.with_loose()
        sets: list[ComparatorSet] = []
        for segment in text.split("||"):
            comparators: list[Comparator] = []
            for term in split_terms(segment, opts.loose, self.max_length):
                for operator, version_text in expand(term, opts.include_prerelease):
                    comparators.append(
                        Comparator(operator, self._operand(version_text, operand_options))
                    )
            sets.append(ComparatorSet.of(comparators))

        raw = " ".join(text.split())
        return Range.from_sets(sets, raw=raw, options=opts)

    def _operand(self, text: str, options: Options) -> Version:
        return self.versions.parse(text, options).unwrap()
