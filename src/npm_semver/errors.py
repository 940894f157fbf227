"""Error kinds reported by the version and range parsers.

Parsing never raises on the hot path: failures are returned inside a
``ParseResult``. The classes below are still real exceptions so callers that
want fail-loud behaviour can ``raise`` them (see ``ParseResult.unwrap``).
"""

from __future__ import annotations


class SemverError(ValueError):
    """Base error for malformed versions, comparators and ranges."""

    kind = "SemverError"

    def __init__(self, message: str, value: object = None) -> None:
        super().__init__(message)
        self.value = value


class InvalidVersionFormat(SemverError):
    """Raised when a string does not match the version grammar."""

    kind = "InvalidVersionFormat"


class NumericOverflow(SemverError):
    """Raised when a numeric component exceeds the maximum safe integer."""

    kind = "NumericOverflow"


class InvalidRangeFormat(SemverError):
    """Raised when a range expression cannot be parsed."""

    kind = "InvalidRangeFormat"


class InvalidComparatorOperator(SemverError):
    """Raised for operators outside ``=``, ``<``, ``<=``, ``>``, ``>=``."""

    kind = "InvalidComparatorOperator"
