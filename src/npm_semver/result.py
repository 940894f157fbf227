"""Success/failure result returned by the parsers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from .errors import SemverError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[T]):
    """Either a parsed value or the error explaining why parsing failed."""

    value: T | None = None
    error: SemverError | None = None

    def __bool__(self) -> bool:
        return self.error is None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the stored error on failure."""
        if self.error is not None:
            raise self.error
        assert self.value is not None
        return self.value

    @classmethod
    def success(cls, value: T) -> ParseResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: SemverError) -> ParseResult[T]:
        return cls(error=error)
