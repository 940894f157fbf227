"""Parse version strings into ``Version`` values.

Failures are returned as ``ParseResult`` errors rather than raised.
Successful parses go through the shared ``ParseCache`` keyed by
``("version", text, options)``.
"""

from __future__ import annotations

from ..cache import ParseCache
from ..errors import InvalidVersionFormat, NumericOverflow
from ..grammar import MAX_LENGTH, MAX_SAFE_INTEGER, version_pattern
from ..models.version import Version, coerce_identifier
from ..options import Options, OptionsLike, parse_options
from ..result import ParseResult

_CACHE_KIND = "version"


class VersionParser:
    """Parser bound to a cache and to the grammar's size limits."""

    def __init__(
        self,
        cache: ParseCache | None = None,
        *,
        max_length: int = MAX_LENGTH,
        max_safe_integer: int = MAX_SAFE_INTEGER,
    ) -> None:
        self.cache = cache
        self.max_length = max_length
        self.max_safe_integer = max_safe_integer

    def parse(self, text: object, options: OptionsLike = None) -> ParseResult[Version]:
        opts = parse_options(options)
        if isinstance(text, Version):
            return ParseResult.success(text)
        if not isinstance(text, str):
            return ParseResult.failure(
                InvalidVersionFormat(f"Invalid version, expected a string: {text!r}", text)
            )

        key = (_CACHE_KIND, text, opts)
        if self.cache is not None:
            cached = self.cache.get(key)
            if cached is not None:
                return ParseResult.success(cached)

        result = self._parse(text, opts)
        if result.ok and self.cache is not None:
            self.cache.set(key, result.value)
        return result

    def _parse(self, text: str, opts: Options) -> ParseResult[Version]:
        if len(text) > self.max_length:
            return ParseResult.failure(
                InvalidVersionFormat(
                    f"Version is longer than {self.max_length} characters", text
                )
            )

        candidate = text.strip() if opts.loose else text
        match = version_pattern(opts.loose).fullmatch(candidate)
        if match is None:
            return ParseResult.failure(InvalidVersionFormat(f"Invalid version: {text!r}", text))

        major_s, minor_s, patch_s, prerelease_s, build_s = match.groups()
        numbers: list[int] = []
        for name, digits in (("major", major_s), ("minor", minor_s), ("patch", patch_s)):
            value = int(digits)
            if value > self.max_safe_integer:
                return ParseResult.failure(
                    NumericOverflow(
                        f"Invalid {name} version {digits}: exceeds {self.max_safe_integer}", text
                    )
                )
            numbers.append(value)

        prerelease = (
            tuple(coerce_identifier(ident) for ident in prerelease_s.split("."))
            if prerelease_s
            else ()
        )
        build = tuple(build_s.split(".")) if build_s else ()

        return ParseResult.success(
            Version(
                major=numbers[0],
                minor=numbers[1],
                patch=numbers[2],
                prerelease=prerelease,
                build=build,
                raw=text,
                options=opts,
            )
        )
