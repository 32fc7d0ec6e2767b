"""Search result domain entity."""

from dataclasses import dataclass, field

from .lookups import LookupStatus
from .product import EnrichedProduct


@dataclass(frozen=True)
class SearchResult:
    """Result of one search request.

    Attributes:
        keyword: The normalized keyword the result was computed for
        products: Enriched products in catalog order
        payload: The exact JSON bytes served to the caller (and cached)
        cache_status: What the cache read returned (HIT, MISS or ERROR)
        cache_written: Whether the result was stored in the cache
        failed_enrichments: IDs of products whose review lookup failed
    """

    keyword: str
    products: tuple[EnrichedProduct, ...]
    payload: bytes
    cache_status: LookupStatus
    cache_written: bool = False
    failed_enrichments: tuple[int, ...] = field(default_factory=tuple)

    @property
    def from_cache(self) -> bool:
        return self.cache_status is LookupStatus.HIT

    @property
    def degraded_cache(self) -> bool:
        """True if the cache could not be read or written for this request."""
        if self.from_cache:
            return False
        return self.cache_status is LookupStatus.ERROR or not self.cache_written

    @property
    def partial(self) -> bool:
        return bool(self.failed_enrichments)
