"""Redis implementation of ResultCache.

Values are stored as plain strings with ``SET key value EX ttl`` and expire
passively; nothing is ever deleted explicitly.
"""

import redis

from product_search.config import get_redis_client
from product_search.entities import CacheLookup, CacheWrite
from product_search.utils import get_logger

logger = get_logger("cache")


class RedisResultCache:
    """Redis-backed cache for serialized search responses.

    This class satisfies the ResultCache protocol through structural
    typing - no explicit inheritance needed.

    Connection and timeout errors are returned as ERROR outcomes instead of
    being raised, so an unavailable Redis only costs latency.
    """

    def __init__(self, redis_client: redis.Redis | None = None) -> None:
        """Initialize the Redis result cache.

        Args:
            redis_client: Redis client instance. If None, creates default.
        """
        self._client = redis_client or get_redis_client()

    @classmethod
    def create(cls, redis_client: redis.Redis | None = None) -> "RedisResultCache":
        """Factory method to create RedisResultCache with defaults.

        Args:
            redis_client: Redis client. If None, one is built from settings.

        Returns:
            Configured RedisResultCache
        """
        return cls(redis_client=redis_client)

    def get(self, key: str) -> CacheLookup:
        """Read a cached response.

        Args:
            key: The cache key

        Returns:
            HIT with the stored bytes, MISS if the key is absent,
            ERROR if Redis could not be reached
        """
        try:
            value = self._client.get(key)
        except redis.RedisError as e:
            return CacheLookup.failed(f"{type(e).__name__}: {e}")

        if value is None:
            return CacheLookup.miss()
        if isinstance(value, str):
            value = value.encode()
        return CacheLookup.hit(value)

    def set(self, key: str, value: bytes, ttl: int) -> CacheWrite:
        """Store a response with an expiration.

        Args:
            key: The cache key
            value: Serialized response bytes
            ttl: Time-to-live in seconds

        Returns:
            CacheWrite describing the outcome
        """
        try:
            self._client.set(key, value, ex=ttl)
        except redis.RedisError as e:
            return CacheWrite.failed(f"{type(e).__name__}: {e}")
        return CacheWrite.stored()

    def health_check(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(self._client.ping())
        except redis.RedisError as e:
            logger.warning("Redis health check failed: %s", e)
            return False

    @property
    def client(self) -> redis.Redis:
        """Get the Redis client."""
        return self._client
