"""Outcome entities for backend lookups.

Cache and review-store clients report failures through these objects
rather than raising, so every caller has to look at the status and decide
what to do with it.
"""

from dataclasses import dataclass
from enum import Enum


class LookupStatus(str, Enum):
    """Result of a single backend lookup."""

    HIT = "hit"
    MISS = "miss"
    ERROR = "error"


@dataclass(frozen=True)
class CacheLookup:
    """Outcome of a cache read.

    Attributes:
        status: HIT (value present), MISS (key absent) or ERROR (backend failure)
        value: The cached bytes, only set on HIT
        error: Backend error description, only set on ERROR
    """

    status: LookupStatus
    value: bytes | None = None
    error: str | None = None

    @classmethod
    def hit(cls, value: bytes) -> "CacheLookup":
        return cls(status=LookupStatus.HIT, value=value)

    @classmethod
    def miss(cls) -> "CacheLookup":
        return cls(status=LookupStatus.MISS)

    @classmethod
    def failed(cls, error: str) -> "CacheLookup":
        return cls(status=LookupStatus.ERROR, error=error)

    @property
    def is_hit(self) -> bool:
        return self.status is LookupStatus.HIT


@dataclass(frozen=True)
class CacheWrite:
    """Outcome of a cache write."""

    ok: bool
    error: str | None = None

    @classmethod
    def stored(cls) -> "CacheWrite":
        return cls(ok=True)

    @classmethod
    def failed(cls, error: str) -> "CacheWrite":
        return cls(ok=False, error=error)


@dataclass(frozen=True)
class ReviewLookup:
    """Outcome of a review lookup for one product.

    HIT means a document was found (its review list may still be empty),
    MISS means no document exists for the product, ERROR means the store
    could not answer.
    """

    status: LookupStatus
    reviews: tuple[str, ...] = ()
    error: str | None = None

    @classmethod
    def found(cls, reviews: tuple[str, ...]) -> "ReviewLookup":
        return cls(status=LookupStatus.HIT, reviews=reviews)

    @classmethod
    def not_found(cls) -> "ReviewLookup":
        return cls(status=LookupStatus.MISS)

    @classmethod
    def failed(cls, error: str) -> "ReviewLookup":
        return cls(status=LookupStatus.ERROR, error=error)

    @property
    def is_error(self) -> bool:
        return self.status is LookupStatus.ERROR
