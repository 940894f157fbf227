"""Engine facade binding a parse cache to the version and range parsers.

The module-level helpers in ``npm_semver`` use ``default_engine()``. Callers
that need isolation (tests, thread pools with their own caches, no caching at
all) construct their own ``SemverEngine`` and either use it directly or
install it with ``set_default_engine``.
"""

from __future__ import annotations

import threading
from collections.abc import Iterable

from .cache import DEFAULT_CACHE_SIZE, ParseCache
from .config import Settings, load_settings
from .grammar import MAX_LENGTH, MAX_SAFE_INTEGER
from .models.range import Range
from .models.version import Version
from .options import Options, OptionsLike, parse_options
from .parsers.range import RangeParser
from .parsers.version import VersionParser
from .result import ParseResult

_UNSET = object()


class SemverEngine:
    """Version and range parsing sharing one bounded cache."""

    def __init__(
        self,
        cache: ParseCache | None | object = _UNSET,
        *,
        max_length: int = MAX_LENGTH,
        max_safe_integer: int = MAX_SAFE_INTEGER,
        default_options: OptionsLike = None,
    ) -> None:
        if cache is _UNSET:
            cache = ParseCache(DEFAULT_CACHE_SIZE)
        self.cache: ParseCache | None = cache  # type: ignore[assignment]
        self.default_options = parse_options(default_options)
        self.versions = VersionParser(
            self.cache, max_length=max_length, max_safe_integer=max_safe_integer
        )
        self.ranges = RangeParser(self.versions, self.cache, max_length=max_length)

    @classmethod
    def from_settings(cls, settings: Settings) -> SemverEngine:
        cache = ParseCache(settings.cache_size) if settings.cache_size else None
        return cls(
            cache,
            max_length=settings.max_length,
            max_safe_integer=settings.max_safe_integer,
            default_options=settings.options,
        )

    def _options(self, options: OptionsLike) -> Options:
        return self.default_options if options is None else parse_options(options)

    # ---- parsing --------------------------------------------------------------------

    def try_parse(self, text: object, options: OptionsLike = None) -> ParseResult[Version]:
        return self.versions.parse(text, self._options(options))

    def parse(self, text: object, options: OptionsLike = None) -> Version | None:
        return self.try_parse(text, options).value

    def version(self, text: object, options: OptionsLike = None) -> Version:
        """Parse a version, raising its ``SemverError`` when invalid."""
        return self.try_parse(text, options).unwrap()

    def try_parse_range(self, text: object, options: OptionsLike = None) -> ParseResult[Range]:
        return self.ranges.parse(text, self._options(options))

    def parse_range(self, text: object, options: OptionsLike = None) -> Range | None:
        return self.try_parse_range(text, options).value

    def range(self, text: object, options: OptionsLike = None) -> Range:
        """Parse a range, raising its ``SemverError`` when invalid."""
        return self.try_parse_range(text, options).unwrap()

    # ---- comparison and matching ----------------------------------------------------

    def compare(self, a: Version | str, b: Version | str, options: OptionsLike = None) -> int:
        return self.version(a, options).compare(self.version(b, options))

    def satisfies(
        self, version: Version | str, range_: Range | str, options: OptionsLike = None
    ) -> bool:
        rng = self.range(range_, options)
        return rng.test(self.version(version, rng.options))

    def filter(
        self, versions: Iterable[Version | str], range_: Range | str, options: OptionsLike = None
    ) -> list[Version]:
        """Return the valid versions that satisfy ``range_``; invalid ones are skipped."""
        rng = self.range(range_, options)
        matched: list[Version] = []
        for item in versions:
            parsed = self.parse(item, rng.options)
            if parsed is not None and rng.test(parsed):
                matched.append(parsed)
        return matched


_default_engine: SemverEngine | None = None
_default_lock = threading.Lock()


def default_engine() -> SemverEngine:
    """Return the process-wide engine, building it from ``load_settings()`` on first use."""
    global _default_engine
    engine = _default_engine
    if engine is None:
        with _default_lock:
            if _default_engine is None:
                _default_engine = SemverEngine.from_settings(load_settings())
            engine = _default_engine
    return engine


def set_default_engine(engine: SemverEngine | None) -> None:
    """Replace the process-wide engine; ``None`` rebuilds it from settings on next use."""
    global _default_engine
    with _default_lock:
        _default_engine = engine
