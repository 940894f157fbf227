"""Version model and SemVer 2.0 precedence."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Union

from ..errors import InvalidVersionFormat
from ..grammar import BUILD_IDENTIFIER, PRERELEASE_IDENTIFIER_LOOSE, is_numeric_identifier
from ..options import DEFAULT_OPTIONS, Options, OptionsLike

Identifier = Union[int, str]

_PRERELEASE_TOKEN = re.compile(PRERELEASE_IDENTIFIER_LOOSE)
_BUILD_TOKEN = re.compile(BUILD_IDENTIFIER)


def compare_identifiers(a: Identifier, b: Identifier) -> int:
    """Compare two prerelease identifiers.

    Numeric identifiers compare numerically and always sort before
    alphanumeric ones; alphanumeric identifiers compare by code point.
    """
    a_num = isinstance(a, int)
    b_num = isinstance(b, int)
    if a_num and not b_num:
        return -1
    if b_num and not a_num:
        return 1
    if a == b:
        return 0
    return -1 if a < b else 1  # type: ignore[operator]


def _cmp(a: int, b: int) -> int:
    return (a > b) - (a < b)


def coerce_identifier(token: str) -> Identifier:
    return int(token) if is_numeric_identifier(token) else token


@dataclass(frozen=True, slots=True, eq=False)
class Version:
    """An immutable semantic version.

    Equality and hashing follow precedence: build metadata, ``raw`` and
    ``options`` are carried along but never compared.
    """

    major: int
    minor: int
    patch: int
    prerelease: tuple[Identifier, ...] = ()
    build: tuple[str, ...] = ()
    raw: str = field(default="", repr=False)
    options: Options = field(default=DEFAULT_OPTIONS, repr=False)

    def __post_init__(self) -> None:
        for name in ("major", "minor", "patch"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                raise InvalidVersionFormat(
                    f"{name} must be a non-negative integer, got {value!r}", value
                )
        prerelease = tuple(_check_prerelease(ident) for ident in self.prerelease)
        build = tuple(self.build)
        for ident in build:
            if not isinstance(ident, str) or not _BUILD_TOKEN.fullmatch(ident):
                raise InvalidVersionFormat(f"Invalid build identifier: {ident!r}", ident)
        object.__setattr__(self, "prerelease", prerelease)
        object.__setattr__(self, "build", build)
        if not self.raw:
            object.__setattr__(self, "raw", self.render())

    # ---- construction ---------------------------------------------------------------

    @classmethod
    def parse(cls, text: str, options: OptionsLike = None) -> Version:
        """Parse ``text`` with the default engine, raising on failure."""
        from ..engine import default_engine

        return default_engine().version(text, options)

    @classmethod
    def from_tuple(
        cls,
        parts: Iterable[object],
        *,
        options: Options = DEFAULT_OPTIONS,
    ) -> Version:
        """Build a version from ``(major, minor, patch[, prerelease[, build]])``.

        Prerelease and build may be given as dotted strings or as sequences.
        """
        items = list(parts)
        if not 3 <= len(items) <= 5:
            raise InvalidVersionFormat(f"Expected 3 to 5 version parts, got {len(items)}", items)
        major, minor, patch = items[:3]
        prerelease = _split_identifiers(items[3] if len(items) > 3 else ())
        build = items[4] if len(items) > 4 else ()
        if isinstance(build, str):
            build = tuple(build.split(".")) if build else ()
        return cls(
            major=major,  # type: ignore[arg-type]
            minor=minor,  # type: ignore[arg-type]
            patch=patch,  # type: ignore[arg-type]
            prerelease=prerelease,  # type: ignore[arg-type]
            build=tuple(build),  # type: ignore[arg-type]
            options=options,
        )

    # ---- rendering ------------------------------------------------------------------

    @property
    def version(self) -> str:
        """``major.minor.patch[-prerelease]`` without build metadata."""
        core = f"{self.major}.{self.minor}.{self.patch}"
        if self.prerelease:
            core += "-" + ".".join(str(ident) for ident in self.prerelease)
        return core

    def render(self) -> str:
        text = self.version
        if self.build:
            text += "+" + ".".join(self.build)
        return text

    def __str__(self) -> str:
        return self.render()

    def to_dict(self) -> dict[str, object]:
        return {
            "major": self.major,
            "minor": self.minor,
            "patch": self.patch,
            "prerelease": list(self.prerelease),
            "build": list(self.build),
            "version": self.version,
        }

    def to_tuple(self) -> tuple[int, int, int, tuple[Identifier, ...], tuple[str, ...]]:
        return (self.major, self.minor, self.patch, self.prerelease, self.build)

    @property
    def is_prerelease(self) -> bool:
        return bool(self.prerelease)

    # ---- precedence -----------------------------------------------------------------

    def compare_main(self, other: Version) -> int:
        return (
            _cmp(self.major, other.major)
            or _cmp(self.minor, other.minor)
            or _cmp(self.patch, other.patch)
        )

    def compare_pre(self, other: Version) -> int:
        # a release outranks any prerelease of the same major.minor.patch
        if not self.prerelease:
            return 0 if not other.prerelease else 1
        if not other.prerelease:
            return -1
        for a, b in zip(self.prerelease, other.prerelease):
            result = compare_identifiers(a, b)
            if result:
                return result
        return _cmp(len(self.prerelease), len(other.prerelease))

    def compare_build(self, other: Version) -> int:
        """Precedence first, then build identifiers as a tie-break for sorting."""
        result = self._compare(other)
        if result:
            return result
        for a, b in zip(self.build, other.build):
            result = compare_identifiers(coerce_identifier(a), coerce_identifier(b))
            if result:
                return result
        return _cmp(len(self.build), len(other.build))

    def _compare(self, other: Version) -> int:
        if self is other:
            return 0
        return self.compare_main(other) or self.compare_pre(other)

    def compare(self, other: Version | str) -> int:
        """Return -1, 0 or 1 as this version sorts before, equal to or after ``other``.

        Strings are parsed with this version's options; an invalid string raises
        its parse error instead of producing an ordering.
        """
        if not isinstance(other, Version):
            other = Version.parse(other, self.options)
        return self._compare(other)

    def same_release(self, other: Version) -> bool:
        return (
            self.major == other.major
            and self.minor == other.minor
            and self.patch == other.patch
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) == 0

    def __ne__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) != 0

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) < 0

    def __le__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) <= 0

    def __gt__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) > 0

    def __ge__(self, other: object) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self._compare(other) >= 0

    def __hash__(self) -> int:
        return hash((self.major, self.minor, self.patch, self.prerelease))


def _check_prerelease(ident: object) -> Identifier:
    # numeric strings become ints so "1" and 1 order the same way
    if isinstance(ident, str) and _PRERELEASE_TOKEN.fullmatch(ident):
        return coerce_identifier(ident)
    if isinstance(ident, int) and not isinstance(ident, bool) and ident >= 0:
        return ident
    raise InvalidVersionFormat(f"Invalid prerelease identifier: {ident!r}", ident)


def _split_identifiers(value: object) -> tuple[object, ...]:
    if isinstance(value, str):
        return tuple(value.split(".")) if value else ()
    return tuple(value)  # type: ignore[arg-type]
