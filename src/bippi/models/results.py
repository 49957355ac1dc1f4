"""Lookup results for the album fallback chain."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from bippi.models.enums import LookupStatus

T = TypeVar("T")


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    """Outcome of a lookup tier.

    ``NOT_FOUND`` is a normal outcome that moves resolution to the next
    tier. Hard failures are raised as exceptions instead.

    Example:
        >>> result = LookupResult.found("https://www.youtube.com/playlist?list=PL1")
        >>> result.is_found
        True
        >>> LookupResult.not_found().value is None
        True
    """

    status: LookupStatus
    value: T | None = None

    @classmethod
    def found(cls, value: T) -> LookupResult[T]:
        return cls(LookupStatus.FOUND, value)

    @classmethod
    def not_found(cls) -> LookupResult[T]:
        return cls(LookupStatus.NOT_FOUND)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND
