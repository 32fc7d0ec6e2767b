"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Backends, service and handler built once in the lifespan
    - Dependency functions retrieve them from request.app.state
    - No module-level client handles
"""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, Request

from product_search.config import get_catalog_engine, get_mongo_client, get_redis_client
from product_search.handlers import SearchHandler
from product_search.repositories import MongoReviewRepository, RedisResultCache, SqlCatalogRepository
from product_search.services import SearchService
from product_search.utils import get_logger

logger = get_logger("api")


def get_handler(request: Request) -> SearchHandler:
    """Dependency injection for SearchHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    handler = getattr(request.app.state, "search_handler", None)
    if handler is None:
        raise RuntimeError("SearchHandler not initialized. Check lifespan setup.")
    return handler


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for FastAPI app.

    Initializes all layers and stores in app.state:
    1. Backend clients (Redis, SQLAlchemy engine, MongoClient)
    2. Service (business logic) - stored in app.state.search_service
    3. Handler (HTTP endpoints) - stored in app.state.search_handler

    Cleanup:
        Closes the backend clients and removes everything from app.state
    """
    redis_client = get_redis_client()
    engine = get_catalog_engine()
    mongo_client = get_mongo_client()

    search_service = SearchService.create(
        catalog=SqlCatalogRepository.create(engine=engine),
        reviews=MongoReviewRepository.create(client=mongo_client),
        cache=RedisResultCache.create(redis_client=redis_client),
    )
    search_handler = SearchHandler(search_service=search_service)

    app.state.search_service = search_service
    app.state.search_handler = search_handler

    logger.info("Search service initialized")
    logger.info("Cache TTL: %ss, page limit: %s", search_service.ttl, search_service.page_limit)
    logger.info("Backend health: %s", await search_service.health())

    yield

    del app.state.search_handler
    del app.state.search_service
    redis_client.close()
    engine.dispose()
    mongo_client.close()
    logger.info("Search service shut down")


# Type aliases for cleaner dependency injection
HandlerDep = Annotated[SearchHandler, Depends(get_handler)]

