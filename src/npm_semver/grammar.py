"""Token grammar for version strings and range terms.

The patterns follow the SemVer 2.0 BNF with npm's loose extensions. Only
``[0-9]`` is used for digits (``\\d`` would accept non-ASCII digits) and every
pattern is applied with ``fullmatch`` so a trailing newline never sneaks
through a ``$`` anchor.

Callers are expected to reject inputs longer than ``MAX_LENGTH`` before
matching; with that bound none of the patterns can backtrack pathologically.
"""

from __future__ import annotations

import re

MAX_LENGTH = 256
MAX_SAFE_INTEGER = 2**53 - 1

# ## Identifiers

NUMERIC_IDENTIFIER = r"0|[1-9][0-9]*"
NUMERIC_IDENTIFIER_LOOSE = r"[0-9]+"
NON_NUMERIC_IDENTIFIER = r"[0-9]*[a-zA-Z-][a-zA-Z0-9-]*"
BUILD_IDENTIFIER = r"[0-9A-Za-z-]+"

PRERELEASE_IDENTIFIER = rf"(?:{NUMERIC_IDENTIFIER}|{NON_NUMERIC_IDENTIFIER})"
PRERELEASE_IDENTIFIER_LOOSE = rf"(?:{NUMERIC_IDENTIFIER_LOOSE}|{NON_NUMERIC_IDENTIFIER})"

# ## Dotted sections (one capture group each)

PRERELEASE = rf"(?:-({PRERELEASE_IDENTIFIER}(?:\.{PRERELEASE_IDENTIFIER})*))"
# loose mode accepts 1.2.3beta as well as 1.2.3-beta
PRERELEASE_LOOSE = rf"(?:-?({PRERELEASE_IDENTIFIER_LOOSE}(?:\.{PRERELEASE_IDENTIFIER_LOOSE})*))"
BUILD = rf"(?:\+({BUILD_IDENTIFIER}(?:\.{BUILD_IDENTIFIER})*))"

# ## Full versions: groups are major, minor, patch, prerelease, build

MAIN_VERSION = rf"({NUMERIC_IDENTIFIER})\.({NUMERIC_IDENTIFIER})\.({NUMERIC_IDENTIFIER})"
MAIN_VERSION_LOOSE = (
    rf"({NUMERIC_IDENTIFIER_LOOSE})\.({NUMERIC_IDENTIFIER_LOOSE})\.({NUMERIC_IDENTIFIER_LOOSE})"
)

FULL_PLAIN = rf"{MAIN_VERSION}{PRERELEASE}?{BUILD}?"
LOOSE_PLAIN = rf"[vV=\s]*{MAIN_VERSION_LOOSE}{PRERELEASE_LOOSE}?{BUILD}?"

FULL = re.compile(FULL_PLAIN)
LOOSE = re.compile(LOOSE_PLAIN)

# ## Partial versions used inside ranges: 1, 1.2, 1.x, *, 1.2.3-pre

X_IDENTIFIER = rf"{NUMERIC_IDENTIFIER}|x|X|\*"
X_IDENTIFIER_LOOSE = rf"{NUMERIC_IDENTIFIER_LOOSE}|x|X|\*"

PARTIAL_PLAIN = (
    rf"[vV]?({X_IDENTIFIER})"
    rf"(?:\.({X_IDENTIFIER})"
    rf"(?:\.({X_IDENTIFIER})"
    rf"{PRERELEASE}?{BUILD}?"
    r")?)?"
)
PARTIAL_PLAIN_LOOSE = (
    rf"[vV]*({X_IDENTIFIER_LOOSE})"
    rf"(?:\.({X_IDENTIFIER_LOOSE})"
    rf"(?:\.({X_IDENTIFIER_LOOSE})"
    rf"{PRERELEASE_LOOSE}?{BUILD}?"
    r")?)?"
)

PARTIAL = re.compile(PARTIAL_PLAIN)
PARTIAL_LOOSE = re.compile(PARTIAL_PLAIN_LOOSE)

# ## Operators

# A run of operator characters at the start of a range term. Whether the run
# is a known operator is decided by the range parser, so that ``=>`` or ``!=``
# are reported as bad operators rather than bad versions.
OPERATOR_PREFIX = re.compile(r"[<>=!~^]*")

COMPARISON_OPERATORS = frozenset({"", "=", "<", "<=", ">", ">="})
TILDE_OPERATORS = frozenset({"~", "~>"})
CARET_OPERATORS = frozenset({"^"})

NUMERIC = re.compile(NUMERIC_IDENTIFIER)
WILDCARDS = frozenset({"x", "X", "*"})


def version_pattern(loose: bool) -> re.Pattern[str]:
    return LOOSE if loose else FULL


def partial_pattern(loose: bool) -> re.Pattern[str]:
    return PARTIAL_LOOSE if loose else PARTIAL


def is_valid_version(text: str, loose: bool = False, max_length: int = MAX_LENGTH) -> bool:
    """Return True when ``text`` matches the (strict or loose) version grammar."""
    if not isinstance(text, str) or len(text) > max_length:
        return False
    if loose:
        text = text.strip()
    return version_pattern(loose).fullmatch(text) is not None


def is_numeric_identifier(token: str) -> bool:
    """All digits, and no leading zero unless the token is exactly ``0``."""
    return NUMERIC.fullmatch(token) is not None


def is_wildcard(token: str | None) -> bool:
    return token is None or token == "" or token in WILDCARDS
