"""
Tagged result for single‑record lookups.

A lookup by (possibly partial) key can match zero, one or several
beacons.  ``LookupResult`` carries which of the three happened so that
callers have to decide what to do with each outcome instead of relying
on exceptions for a routine miss.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, Optional, TypeVar

from beacon_api.app.core.exceptions import AmbiguousResult

T = TypeVar("T")


class LookupStatus(str, Enum):
    FOUND = "found"
    NOT_FOUND = "not_found"
    AMBIGUOUS = "ambiguous"


@dataclass(frozen=True)
class LookupResult(Generic[T]):
    status: LookupStatus
    query: str
    value: Optional[T] = None

    @classmethod
    def found(cls, query: str, value: T) -> "LookupResult[T]":
        return cls(LookupStatus.FOUND, query, value)

    @classmethod
    def not_found(cls, query: str) -> "LookupResult[T]":
        return cls(LookupStatus.NOT_FOUND, query)

    @classmethod
    def ambiguous(cls, query: str) -> "LookupResult[T]":
        return cls(LookupStatus.AMBIGUOUS, query)

    @property
    def is_found(self) -> bool:
        return self.status is LookupStatus.FOUND

    def unwrap(self) -> Optional[T]:
        """Return the value, ``None`` when nothing matched.

        Raises ``AmbiguousResult`` when more than one record matched.
        """
        if self.status is LookupStatus.AMBIGUOUS:
            raise AmbiguousResult(self.query)
        return self.value
