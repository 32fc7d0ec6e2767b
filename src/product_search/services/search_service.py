"""Search service for core business logic.

This service implements the read-through cache around product search:
it consults the result cache, falls back to the catalog plus the review
store on a miss, and repopulates the cache with the serialized response.
"""

import asyncio
import time

from product_search.config import settings
from product_search.entities import (
    CacheLookup,
    CacheWrite,
    EnrichedProduct,
    LookupStatus,
    Product,
    ReviewLookup,
    SearchResult,
)
from product_search.errors import CatalogUnavailableError, InvalidKeywordError, SearchTimeoutError
from product_search.metrics import SearchMetrics
from product_search.protocols import CatalogStore, ResultCache, ReviewStore
from product_search.repositories import MongoReviewRepository, RedisResultCache, SqlCatalogRepository
from product_search.utils import get_logger

from .payload import PayloadDecodeError, deserialize_products, serialize_products

logger = get_logger("search")


class SearchService:
    """Core search orchestration service.

    This service depends on PROTOCOLS, not concrete implementations:
    - CatalogStore: the relational product catalog
    - ReviewStore: the document store holding product reviews
    - ResultCache: the key-value cache for serialized responses

    Failure policy:
    - Blank keyword: InvalidKeywordError, no backend is touched.
    - Catalog failure: CatalogUnavailableError, nothing is enriched or cached.
      A catalog query past the deadline raises SearchTimeoutError.
    - Cache read/write failure or timeout: logged and counted, the request
      carries on.
    - Review lookup failure or timeout: logged and counted, that product
      gets no reviews.

    Example:
        ```python
        from product_search.services import SearchService

        # Create with defaults (Redis + MySQL + MongoDB from settings)
        service = SearchService.create()

        # Or with custom implementations
        service = SearchService(
            catalog=InMemoryCatalog(...),
            reviews=InMemoryReviews(...),
            cache=InMemoryCache(),
        )

        result = await service.search("phone")
        result.payload  # JSON bytes, identical on a later cache hit
        ```
    """

    def __init__(
        self,
        catalog: CatalogStore,
        reviews: ReviewStore,
        cache: ResultCache,
        ttl: int | None = None,
        page_limit: int | None = None,
        key_prefix: str | None = None,
        max_concurrency: int | None = None,
        timeout: float | None = None,
        metrics: SearchMetrics | None = None,
    ) -> None:
        """Initialize the search service.

        Args:
            catalog: Product catalog backend (required).
            reviews: Review store backend (required).
            cache: Result cache backend (required).
            ttl: Time-to-live for cached results in seconds. Defaults to settings.
            page_limit: Maximum number of products per search. Defaults to settings.
            key_prefix: Prefix for cache keys. Defaults to settings.
            max_concurrency: Maximum review lookups in flight. Defaults to settings.
            timeout: Deadline in seconds for each backend stage (cache read,
                catalog query, review fan-out, cache write), 0 disables.
                Defaults to settings.
            metrics: Metrics collector. A fresh one if None.

        Raises:
            ValueError: If ttl, page_limit or max_concurrency is below 1,
                or timeout is negative
        """
        self._catalog = catalog
        self._reviews = reviews
        self._cache = cache
        self._ttl = settings.cache_ttl if ttl is None else ttl
        self._page_limit = settings.catalog_page_limit if page_limit is None else page_limit
        self._key_prefix = settings.cache_key_prefix if key_prefix is None else key_prefix
        self._max_concurrency = (
            settings.enrichment_concurrency if max_concurrency is None else max_concurrency
        )
        self._timeout = settings.search_timeout if timeout is None else timeout
        self._metrics = metrics or SearchMetrics()

        if self._ttl < 1:
            raise ValueError(f"ttl must be at least 1 second, got {self._ttl}")
        if self._page_limit < 1:
            raise ValueError(f"page_limit must be at least 1, got {self._page_limit}")
        if self._max_concurrency < 1:
            raise ValueError(f"max_concurrency must be at least 1, got {self._max_concurrency}")
        if self._timeout < 0:
            raise ValueError(f"timeout must be >= 0, got {self._timeout}")

    @classmethod
    def create(
        cls,
        catalog: CatalogStore | None = None,
        reviews: ReviewStore | None = None,
        cache: ResultCache | None = None,
        **kwargs,
    ) -> "SearchService":
        """Factory method to create SearchService with default backends.

        Any backend left as None is built from settings: SqlCatalogRepository,
        MongoReviewRepository and RedisResultCache. Extra keyword arguments
        are passed to the constructor.

        Returns:
            Configured SearchService instance
        """
        return cls(
            catalog=catalog or SqlCatalogRepository.create(),
            reviews=reviews or MongoReviewRepository.create(),
            cache=cache or RedisResultCache.create(),
            **kwargs,
        )

    @staticmethod
    def normalize_keyword(keyword: str | None) -> str:
        """Normalize a search keyword.

        Surrounding whitespace is stripped and the keyword is lower-cased.
        The catalog match ignores case, so keywords that differ only in case
        or padding give the same result and share one cache entry.

        Raises:
            InvalidKeywordError: If the keyword is None or blank
        """
        if keyword is None or not keyword.strip():
            raise InvalidKeywordError("Missing search keyword")
        return keyword.strip().lower()

    def cache_key(self, keyword: str) -> str:
        """Derive the cache key for a keyword (normalized first)."""
        return f"{self._key_prefix}{self.normalize_keyword(keyword)}"

    async def search(self, keyword: str | None) -> SearchResult:
        """Search products by keyword, serving from the cache when possible.

        Business logic:
        1. Validate and normalize the keyword
        2. Read the cache; a hit is returned as-is
        3. On a miss (or cache failure) query the catalog
        4. Look up reviews for every candidate concurrently
        5. Serialize, write to the cache, return

        Args:
            keyword: The raw search keyword

        Returns:
            SearchResult with the products and the exact response bytes

        Raises:
            InvalidKeywordError: If the keyword is missing or blank
            CatalogUnavailableError: If the catalog cannot be queried
            SearchTimeoutError: If the catalog query exceeds the deadline
        """
        normalized = self.normalize_keyword(keyword)
        start_time = time.time()

        try:
            result = await self._search(normalized)
        except CatalogUnavailableError:
            self._metrics.record_catalog_error()
            raise

        latency_ms = (time.time() - start_time) * 1000
        if result.from_cache:
            self._metrics.record_hit(latency_ms)
        else:
            self._metrics.record_miss(latency_ms)
        return result

    async def _search(self, keyword: str) -> SearchResult:
        key = f"{self._key_prefix}{keyword}"

        lookup = await self._read_cache(key)
        cache_status = lookup.status
        if lookup.is_hit and lookup.value is not None:
            try:
                products = deserialize_products(lookup.value)
            except PayloadDecodeError as e:
                cache_status = LookupStatus.ERROR
                self._metrics.record_cache_read_error()
                logger.warning("Discarding undecodable cache entry %s: %s", key, e)
            else:
                logger.debug("Cache hit for %s", key)
                return SearchResult(
                    keyword=keyword,
                    products=products,
                    payload=lookup.value,
                    cache_status=LookupStatus.HIT,
                )
        elif lookup.status is LookupStatus.ERROR:
            self._metrics.record_cache_read_error()
            logger.warning("Cache read failed for %s, querying stores directly: %s", key, lookup.error)
        else:
            logger.debug("Cache miss for %s", key)

        candidates = await self._find_candidates(keyword)

        lookups = await self._enrich(candidates)
        products = tuple(
            EnrichedProduct(product=product, reviews=review.reviews)
            for product, review in zip(candidates, lookups)
        )
        failed = tuple(
            product.id for product, review in zip(candidates, lookups) if review.is_error
        )
        if failed:
            self._metrics.record_enrichment_failures(len(failed))
            logger.warning(
                "Review lookup failed for %d of %d products %s, returning them without reviews",
                len(failed),
                len(candidates),
                list(failed),
            )

        payload = serialize_products(products)

        write = await self._write_cache(key, payload)
        if not write.ok:
            self._metrics.record_cache_write_error()
            logger.warning("Cache write failed for %s: %s", key, write.error)

        return SearchResult(
            keyword=keyword,
            products=products,
            payload=payload,
            cache_status=cache_status,
            cache_written=write.ok,
            failed_enrichments=failed,
        )

    async def _call(self, func, *args):
        """Run a blocking client call in a worker thread under the stage deadline."""
        call = asyncio.to_thread(func, *args)
        if not self._timeout:
            return await call
        return await asyncio.wait_for(call, timeout=self._timeout)

    async def _read_cache(self, key: str) -> CacheLookup:
        try:
            return await self._call(self._cache.get, key)
        except asyncio.TimeoutError:
            return CacheLookup.failed(f"timed out after {self._timeout}s")
        except Exception as e:
            return CacheLookup.failed(f"{type(e).__name__}: {e}")

    async def _write_cache(self, key: str, payload: bytes) -> CacheWrite:
        try:
            return await self._call(self._cache.set, key, payload, self._ttl)
        except asyncio.TimeoutError:
            return CacheWrite.failed(f"timed out after {self._timeout}s")
        except Exception as e:
            return CacheWrite.failed(f"{type(e).__name__}: {e}")

    async def _find_candidates(self, keyword: str) -> list[Product]:
        """Query the catalog. Every failure surfaces as CatalogUnavailableError."""
        try:
            return await self._call(self._catalog.find_by_keyword, keyword, self._page_limit)
        except asyncio.TimeoutError as e:
            logger.error("Catalog query for %r exceeded %.2fs deadline", keyword, self._timeout)
            raise SearchTimeoutError(f"Catalog query exceeded {self._timeout}s deadline") from e
        except CatalogUnavailableError:
            raise
        except Exception as e:
            logger.error("Catalog query for %r failed: %s: %s", keyword, type(e).__name__, e)
            raise CatalogUnavailableError(f"Catalog query failed: {type(e).__name__}: {e}") from e

    async def _enrich(self, candidates: list[Product]) -> list[ReviewLookup]:
        """Look up reviews for every candidate, preserving candidate order.

        Lookups still pending when the deadline passes are cancelled and
        reported as failed, the rest keep their results.
        """
        if not candidates:
            return []

        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def find_reviews(product: Product) -> ReviewLookup:
            async with semaphore:
                try:
                    review = await asyncio.to_thread(self._reviews.find_reviews, product.id)
                except Exception as e:
                    review = ReviewLookup.failed(f"{type(e).__name__}: {e}")
            if review.is_error:
                logger.warning("Reviews unavailable for product %s: %s", product.id, review.error)
            return review

        tasks = [asyncio.create_task(find_reviews(p)) for p in candidates]
        try:
            _, pending = await asyncio.wait(tasks, timeout=self._timeout or None)
        except asyncio.CancelledError:
            for task in tasks:
                task.cancel()
            raise

        if pending:
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)

        lookups = []
        for product, task in zip(candidates, tasks):
            if task in pending:
                logger.warning(
                    "Reviews for product %s timed out after %.2fs", product.id, self._timeout
                )
                lookups.append(ReviewLookup.failed(f"timed out after {self._timeout}s"))
            else:
                lookups.append(task.result())
        return lookups

    async def health(self) -> dict[str, bool]:
        """Check every backend concurrently.

        Returns:
            Mapping of backend name to reachability
        """
        cache_ok, catalog_ok, reviews_ok = await asyncio.gather(
            asyncio.to_thread(self._cache.health_check),
            asyncio.to_thread(self._catalog.health_check),
            asyncio.to_thread(self._reviews.health_check),
        )
        return {"cache": cache_ok, "catalog": catalog_ok, "reviews": reviews_ok}

    def get_stats(self) -> dict:
        """Get search statistics.

        Returns:
            Dictionary with metrics plus the cache TTL and page limit
        """
        stats: dict = dict(self._metrics.to_dict())
        stats["ttl"] = self._ttl
        stats["page_limit"] = self._page_limit
        return stats

    def reset_stats(self) -> None:
        """Reset the search metrics."""
        self._metrics.reset()

    @property
    def ttl(self) -> int:
        """Get the cache TTL in seconds."""
        return self._ttl

    @property
    def page_limit(self) -> int:
        """Get the maximum number of products per search."""
        return self._page_limit

    @property
    def metrics(self) -> SearchMetrics:
        """Get the metrics collector (for testing)."""
        return self._metrics
