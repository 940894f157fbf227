"""Parse options shared by versions and ranges."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True, slots=True)
class Options:
    """Flags controlling grammar strictness and prerelease matching.

    ``loose`` relaxes the version grammar (leading ``v``/``=``, surrounding
    whitespace, leading zeros, a missing hyphen before the prerelease).
    ``include_prerelease`` lets prerelease versions satisfy ranges whose
    comparators do not target that exact ``major.minor.patch``.
    """

    loose: bool = False
    include_prerelease: bool = False

    def with_loose(self) -> Options:
        if self.loose:
            return self
        return Options(loose=True, include_prerelease=self.include_prerelease)

    def to_dict(self) -> dict[str, bool]:
        return {
            "loose": self.loose,
            "includePrerelease": self.include_prerelease,
        }


DEFAULT_OPTIONS = Options()
LOOSE_OPTIONS = Options(loose=True)

OptionsLike = Union[Options, Mapping[str, Any], bool, None]


def parse_options(value: OptionsLike) -> Options:
    """Coerce the accepted option shapes into an ``Options`` instance.

    ``None`` gives the defaults, a bare ``bool`` is the legacy ``loose`` flag and
    mappings may use either ``include_prerelease`` or ``includePrerelease``.
    """
    if value is None:
        return DEFAULT_OPTIONS
    if isinstance(value, Options):
        return value
    if isinstance(value, bool):
        return LOOSE_OPTIONS if value else DEFAULT_OPTIONS
    if isinstance(value, Mapping):
        loose = bool(value.get("loose", False))
        include_prerelease = bool(
            value.get("include_prerelease", value.get("includePrerelease", False))
        )
        return Options(loose=loose, include_prerelease=include_prerelease)
    raise TypeError(f"Unsupported options value: {value!r}")
