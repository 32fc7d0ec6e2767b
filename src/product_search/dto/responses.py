"""Response DTOs for API endpoints."""

from pydantic import BaseModel, Field


class ProductItem(BaseModel):
    """Single product in the search response array.

    Field order is the wire order of the JSON object.
    """

    id: int = Field(..., description="Catalog product identifier")
    name: str = Field(..., description="Product name")
    category: str = Field(..., description="Product category")
    price: float = Field(..., description="Unit price")
    reviews: list[str] = Field(
        default_factory=list,
        description="Review texts (empty when none were found)",
    )


class SearchStatsResponse(BaseModel):
    """Response DTO for search statistics."""

    total_requests: int = Field(..., description="Searches served since start/reset", ge=0)
    cache_hits: int = Field(..., ge=0)
    cache_misses: int = Field(..., ge=0)
    cache_read_errors: int = Field(..., description="Cache reads that failed and fell through", ge=0)
    cache_write_errors: int = Field(..., description="Results that could not be cached", ge=0)
    enrichment_failures: int = Field(..., description="Review lookups that failed", ge=0)
    catalog_errors: int = Field(..., description="Requests failed by the catalog", ge=0)
    hit_rate: float = Field(..., ge=0.0, le=1.0)
    avg_latency_ms: float = Field(..., ge=0.0)
    ttl_seconds: int = Field(..., description="Time-to-live for cached results in seconds", ge=0)
    page_limit: int = Field(..., description="Maximum products per search", ge=1)


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether Redis is reachable")
    catalog_healthy: bool = Field(..., description="Whether the catalog database is reachable")
    reviews_healthy: bool = Field(..., description="Whether MongoDB is reachable")
