"""HTTP handlers for search operations.

Handlers convert between service results and HTTP responses.
They handle HTTP concerns like status codes and error mapping.
"""

from fastapi import HTTPException, Response, status

from product_search.dto import HealthCheckResponse, SearchStatsResponse
from product_search.errors import CatalogUnavailableError, InvalidKeywordError, SearchTimeoutError
from product_search.services import SearchService


class SearchHandler:
    """HTTP handlers for search operations.

    This handler delegates business logic to SearchService
    and handles HTTP-specific concerns like:
    - Returning the response bytes exactly as computed or cached
    - Mapping search errors to status codes

    Example:
        ```python
        handler = SearchHandler(search_service=SearchService.create())

        @app.get("/search")
        async def search(q: str | None = None) -> Response:
            return await handler.search(q)
        ```
    """

    def __init__(self, search_service: SearchService) -> None:
        """Initialize the search handler.

        Args:
            search_service: The search service for business logic (required).
        """
        self._search = search_service

    async def search(self, keyword: str | None) -> Response:
        """Handle GET /search requests.

        Args:
            keyword: The ``q`` query parameter

        Returns:
            JSON array of products; ``X-Cache`` tells whether it was cached

        Raises:
            HTTPException: 400 for a missing keyword, 500 when the catalog
                is unavailable, 504 when the search times out
        """
        try:
            result = await self._search.search(keyword)
        except InvalidKeywordError as e:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Missing search keyword",
            ) from e
        except SearchTimeoutError as e:
            raise HTTPException(
                status_code=status.HTTP_504_GATEWAY_TIMEOUT,
                detail="Search timed out",
            ) from e
        except CatalogUnavailableError as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Database error",
            ) from e

        return Response(
            content=result.payload,
            media_type="application/json",
            headers={"X-Cache": "HIT" if result.from_cache else "MISS"},
        )

    async def get_stats(self) -> SearchStatsResponse:
        """Handle GET /stats requests."""
        stats = self._search.get_stats()
        return SearchStatsResponse(
            total_requests=stats["total_requests"],
            cache_hits=stats["cache_hits"],
            cache_misses=stats["cache_misses"],
            cache_read_errors=stats["cache_read_errors"],
            cache_write_errors=stats["cache_write_errors"],
            enrichment_failures=stats["enrichment_failures"],
            catalog_errors=stats["catalog_errors"],
            hit_rate=stats["hit_rate"],
            avg_latency_ms=stats["avg_latency_ms"],
            ttl_seconds=stats["ttl"],
            page_limit=stats["page_limit"],
        )

    async def reset_stats(self) -> dict:
        """Handle POST /stats/reset requests."""
        self._search.reset_stats()
        return {"message": "Search metrics reset"}

    async def health_check(self) -> HealthCheckResponse:
        """Handle GET /health requests."""
        checks = await self._search.health()
        return HealthCheckResponse(
            status="healthy" if all(checks.values()) else "unhealthy",
            cache_healthy=checks["cache"],
            catalog_healthy=checks["catalog"],
            reviews_healthy=checks["reviews"],
        )
