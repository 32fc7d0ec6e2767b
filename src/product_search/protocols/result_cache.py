"""Result cache protocol.

Defines the key-value interface used to cache serialized search responses.
"""

from typing import Protocol, runtime_checkable

from product_search.entities import CacheLookup, CacheWrite


@runtime_checkable
class ResultCache(Protocol):
    """Protocol for response cache backends."""

    def get(self, key: str) -> CacheLookup:
        """Read a cached value.

        Args:
            key: The cache key

        Returns:
            CacheLookup with status HIT, MISS (key absent) or ERROR
            (backend unreachable). Implementations should not raise.
        """
        ...

    def set(self, key: str, value: bytes, ttl: int) -> CacheWrite:
        """Store a value with an expiration.

        Args:
            key: The cache key
            value: Opaque serialized bytes
            ttl: Time-to-live in seconds

        Returns:
            CacheWrite describing whether the value was stored
        """
        ...

    def health_check(self) -> bool:
        """Check if the cache is reachable."""
        ...
