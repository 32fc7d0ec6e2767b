from dataclasses import dataclass


@dataclass
class SearchMetrics:
    """Track counters for search requests and degraded backends."""

    total_requests: int = 0
    cache_hits: int = 0
    cache_misses: int = 0
    cache_read_errors: int = 0
    cache_write_errors: int = 0
    enrichment_failures: int = 0
    catalog_errors: int = 0
    total_latency_ms: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        if self.total_requests == 0:
            return 0.0
        return self.cache_hits / self.total_requests

    @property
    def avg_latency_ms(self) -> float:
        """Calculate average request latency."""
        if self.total_requests == 0:
            return 0.0
        return self.total_latency_ms / self.total_requests

    def record_hit(self, latency_ms: float) -> None:
        """Record a request served from the cache."""
        self.total_requests += 1
        self.cache_hits += 1
        self.total_latency_ms += latency_ms

    def record_miss(self, latency_ms: float) -> None:
        """Record a request computed from the backing stores."""
        self.total_requests += 1
        self.cache_misses += 1
        self.total_latency_ms += latency_ms

    def record_cache_read_error(self) -> None:
        self.cache_read_errors += 1

    def record_cache_write_error(self) -> None:
        self.cache_write_errors += 1

    def record_enrichment_failures(self, count: int) -> None:
        self.enrichment_failures += count

    def record_catalog_error(self) -> None:
        self.catalog_errors += 1

    def reset(self) -> None:
        """Zero every counter."""
        self.total_requests = 0
        self.cache_hits = 0
        self.cache_misses = 0
        self.cache_read_errors = 0
        self.cache_write_errors = 0
        self.enrichment_failures = 0
        self.catalog_errors = 0
        self.total_latency_ms = 0.0

    def to_dict(self) -> dict[str, float | int]:
        """Convert metrics to dictionary."""
        return {
            "total_requests": self.total_requests,
            "cache_hits": self.cache_hits,
            "cache_misses": self.cache_misses,
            "cache_read_errors": self.cache_read_errors,
            "cache_write_errors": self.cache_write_errors,
            "enrichment_failures": self.enrichment_failures,
            "catalog_errors": self.catalog_errors,
            "hit_rate": self.hit_rate,
            "avg_latency_ms": self.avg_latency_ms,
        }
