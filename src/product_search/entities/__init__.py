"""Domain entities for internal representation.

These are pure dataclasses (frozen) used internally by services
and repositories. They are NOT used for API contracts - use DTOs
from the dto package for that.

Entities should have:
- No JSON serialization logic
- No Pydantic validation
- No external dependencies
- Pure domain logic only
"""

from .lookups import CacheLookup, CacheWrite, LookupStatus, ReviewLookup
from .product import EnrichedProduct, Product
from .search_result import SearchResult

__all__ = [
    "Product",
    "EnrichedProduct",
    "LookupStatus",
    "CacheLookup",
    "CacheWrite",
    "ReviewLookup",
    "SearchResult",
]
