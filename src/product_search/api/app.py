from typing import Any

from fastapi import FastAPI, Response
from fastapi.middleware.cors import CORSMiddleware

from product_search.api.dependencies import HandlerDep, lifespan
from product_search.config import settings
from product_search.dto import HealthCheckResponse, SearchStatsResponse

app = FastAPI(
    title="Product Search API",
    description="Keyword product search with reviews, cached in Redis",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,  # type: ignore[arg-type]
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
async def root() -> dict[str, Any]:
    """Root endpoint with API information."""
    return {
        "name": "Product Search API",
        "version": "0.1.0",
        "description": "Keyword product search with reviews, cached in Redis",
        "endpoints": {
            "search": "/search?q=<keyword>",
            "stats": "/stats",
            "health": "/health",
            "docs": "/docs",
        },
    }


@app.get("/health", response_model=HealthCheckResponse)
async def health(handler: HandlerDep) -> HealthCheckResponse:
    """Health check endpoint."""
    return await handler.health_check()


@app.get("/search")
async def search(handler: HandlerDep, q: str | None = None) -> Response:
    """
    Search products whose name contains the keyword.

    Args:
        q: The search keyword (required, non-blank).

    Returns:
        JSON array of {id, name, category, price, reviews}.
    """
    return await handler.search(q)


@app.get("/stats", response_model=SearchStatsResponse)
async def get_stats(handler: HandlerDep) -> SearchStatsResponse:
    """Get search statistics."""
    return await handler.get_stats()


@app.post("/stats/reset", response_model=dict[str, str])
async def reset_stats(handler: HandlerDep) -> dict[str, str]:
    """Reset search metrics."""
    return await handler.reset_stats()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "product_search.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
