"""Product Search - keyword search over a product catalog with review enrichment.

Results are served through a read-through Redis cache: the catalog (SQL) and
review store (MongoDB) are only queried on a cache miss, and a failing cache
or review store degrades the response instead of failing it.

Layers:
    - protocols: Interface contracts (CatalogStore, ReviewStore, ResultCache)
    - repositories: SQLAlchemy, pymongo and Redis implementations
    - services: Search orchestration
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models and lookup outcomes (internal)

Usage:
    ```python
    from product_search.services import SearchService

    service = SearchService.create()
    result = await service.search("phone")
    ```

For HTTP API:
    ```python
    from product_search.api.app import app
    ```
"""

from product_search.config import get_settings, settings
from product_search.entities import (
    CacheLookup,
    CacheWrite,
    EnrichedProduct,
    LookupStatus,
    Product,
    ReviewLookup,
    SearchResult,
)
from product_search.errors import (
    CatalogUnavailableError,
    InvalidKeywordError,
    SearchError,
    SearchTimeoutError,
)
from product_search.handlers import SearchHandler
from product_search.protocols import CatalogStore, ResultCache, ReviewStore
from product_search.repositories import MongoReviewRepository, RedisResultCache, SqlCatalogRepository
from product_search.services import SearchService

__all__ = [
    # Configuration
    "settings",
    "get_settings",
    # Protocols (interfaces)
    "CatalogStore",
    "ReviewStore",
    "ResultCache",
    # Services (business logic)
    "SearchService",
    # Handlers (HTTP)
    "SearchHandler",
    # Repositories (data access)
    "SqlCatalogRepository",
    "MongoReviewRepository",
    "RedisResultCache",
    # Entities (domain models)
    "Product",
    "EnrichedProduct",
    "LookupStatus",
    "CacheLookup",
    "CacheWrite",
    "ReviewLookup",
    "SearchResult",
    # Errors
    "SearchError",
    "InvalidKeywordError",
    "CatalogUnavailableError",
    "SearchTimeoutError",
]
