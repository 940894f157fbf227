"""Command-line entrypoint: filter and sort versions against ranges.

Usage:
  npm-semver [-r RANGE ...] [-l] [-p] [--reverse] VERSION [VERSION ...]

Prints every valid VERSION that satisfies all RANGEs, sorted ascending.
Exit status is 0 when something was printed, 1 when nothing matched and 2 for
invalid ranges or configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from functools import cmp_to_key
from pathlib import Path

from .config import ConfigError, load_settings
from .engine import SemverEngine
from .errors import SemverError
from .models.version import Version
from .options import Options

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="npm-semver", description=__doc__.splitlines()[0])
    parser.add_argument("versions", nargs="+", metavar="VERSION", help="Versions to check")
    parser.add_argument(
        "-r",
        "--range",
        dest="ranges",
        action="append",
        default=[],
        help="Only print versions that satisfy this range (repeatable)",
    )
    parser.add_argument(
        "-l", "--loose", action="store_true", help="Interpret versions and ranges loosely"
    )
    parser.add_argument(
        "-p",
        "--include-prerelease",
        action="store_true",
        help="Let prerelease versions satisfy ranges that do not name them",
    )
    parser.add_argument("--reverse", action="store_true", help="Sort descending")
    parser.add_argument(
        "--config", type=Path, default=None, help="Path to a JSON settings file"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s - %(levelname)s - %(message)s")

    try:
        settings = load_settings(args.config)
    except ConfigError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    engine = SemverEngine.from_settings(settings)
    options = Options(
        loose=args.loose or settings.loose,
        include_prerelease=args.include_prerelease or settings.include_prerelease,
    )

    try:
        ranges = [engine.range(text, options) for text in args.ranges]
    except SemverError as exc:
        print(f"ERROR: {exc}", file=sys.stderr)
        return 2

    matched = []
    for text in args.versions:
        version = engine.parse(text, options)
        if version is None:
            logger.debug("Skipping invalid version %r", text)
            continue
        if all(rng.test(version) for rng in ranges):
            matched.append(version)

    if not matched:
        return 1

    for version in sorted(matched, key=cmp_to_key(Version.compare_build), reverse=args.reverse):
        print(version.version)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
