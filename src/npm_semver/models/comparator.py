"""Comparator and comparator-set models."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..errors import InvalidComparatorOperator
from .version import Version

_OPERATOR_ALIASES = {"": "=", "=": "=", "==": "="}
_VALID_OPERATORS = {"=", "<", "<=", ">", ">="}


def normalize_operator(operator: str) -> str:
    """Map ``""`` and ``==`` onto ``=``; reject anything that is not an inequality."""
    operator = _OPERATOR_ALIASES.get(operator, operator)
    if operator not in _VALID_OPERATORS:
        raise InvalidComparatorOperator(f"Invalid comparator operator: {operator!r}", operator)
    return operator


def check_operator(sign: int, operator: str) -> bool:
    if operator == "=":
        return sign == 0
    if operator == "<":
        return sign < 0
    if operator == "<=":
        return sign <= 0
    if operator == ">":
        return sign > 0
    if operator == ">=":
        return sign >= 0
    raise InvalidComparatorOperator(f"Invalid comparator operator: {operator!r}", operator)


@dataclass(frozen=True, slots=True)
class Comparator:
    """One inequality constraint: ``operator`` applied to ``semver``."""

    operator: str
    semver: Version

    def __post_init__(self) -> None:
        object.__setattr__(self, "operator", normalize_operator(self.operator))

    def __str__(self) -> str:
        if self.operator == "=":
            return self.semver.version
        return f"{self.operator}{self.semver.version}"

    def test(self, version: Version) -> bool:
        return check_operator(version.compare(self.semver), self.operator)


@dataclass(frozen=True, slots=True)
class ComparatorSet:
    """Comparators that must all hold. An empty set accepts every version."""

    comparators: tuple[Comparator, ...] = ()

    @classmethod
    def of(cls, comparators: Iterable[Comparator]) -> ComparatorSet:
        """Build a set, dropping repeated comparators but keeping source order."""
        seen: dict[str, Comparator] = {}
        for comparator in comparators:
            seen.setdefault(str(comparator), comparator)
        return cls(comparators=tuple(seen.values()))

    def __iter__(self):
        return iter(self.comparators)

    def __len__(self) -> int:
        return len(self.comparators)

    def __str__(self) -> str:
        return " ".join(str(comparator) for comparator in self.comparators)

    @property
    def matches_all(self) -> bool:
        return not self.comparators

    @property
    def is_null(self) -> bool:
        """True for the ``<0.0.0-0`` set that no version can satisfy."""
        if len(self.comparators) != 1:
            return False
        only = self.comparators[0]
        return only.operator == "<" and only.semver.to_tuple()[:4] == (0, 0, 0, (0,))

    def test(self, version: Version, include_prerelease: bool = False) -> bool:
        for comparator in self.comparators:
            if not comparator.test(version):
                return False

        if not version.prerelease or include_prerelease:
            return True

        # A prerelease only passes when some comparator in this set targets a
        # prerelease of the same major.minor.patch: >=1.2.3-pr.1 <2.0.0 admits
        # 1.2.3-pr.2 but not 1.2.4-alpha.
        for comparator in self.comparators:
            allowed = comparator.semver
            if allowed.prerelease and allowed.same_release(version):
                return True
        return False
