"""Range model: an OR-union of comparator sets."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from ..options import DEFAULT_OPTIONS, Options, OptionsLike
from .comparator import ComparatorSet
from .version import Version


@dataclass(frozen=True, slots=True)
class Range:
    """A version range.

    A version satisfies the range when it satisfies any one of ``sets``. A
    range without sets matches nothing; a range holding one empty set
    matches everything.
    """

    sets: tuple[ComparatorSet, ...]
    raw: str = field(default="", compare=False, repr=False)
    options: Options = field(default=DEFAULT_OPTIONS, compare=False, repr=False)

    @classmethod
    def parse(cls, text: str, options: OptionsLike = None) -> Range:
        """Parse ``text`` with the default engine, raising on failure."""
        from ..engine import default_engine

        return default_engine().range(text, options)

    @classmethod
    def from_sets(
        cls,
        sets: Iterable[ComparatorSet],
        *,
        raw: str = "",
        options: Options = DEFAULT_OPTIONS,
    ) -> Range:
        """Build a range, simplifying unions the way the parser does.

        When several sets are present, unsatisfiable ``<0.0.0-0`` sets are
        dropped (unless every set is one) and a match-all set absorbs the rest.
        """
        items = tuple(sets)
        if len(items) > 1:
            useful = tuple(item for item in items if not item.is_null)
            items = useful or items[:1]
            for item in items:
                if item.matches_all:
                    items = (item,)
                    break
        return cls(sets=items, raw=raw, options=options)

    def __str__(self) -> str:
        return "||".join(str(comparator_set) for comparator_set in self.sets).strip()

    @property
    def range(self) -> str:
        return str(self)

    def test(self, version: Version | str) -> bool:
        """Return True when ``version`` satisfies at least one comparator set.

        String versions are parsed with this range's options and raise their
        parse error when invalid.
        """
        if not isinstance(version, Version):
            from ..engine import default_engine

            version = default_engine().versions.parse(version, self.options).unwrap()
        include_prerelease = self.options.include_prerelease
        return any(item.test(version, include_prerelease) for item in self.sets)

    def __contains__(self, version: object) -> bool:
        if isinstance(version, str):
            from ..engine import default_engine

            version = default_engine().versions.parse(version, self.options).value
        if not isinstance(version, Version):
            return False
        return self.test(version)

    def to_comparators(self) -> list[list[str]]:
        return [[str(comparator) for comparator in item] for item in self.sets]
