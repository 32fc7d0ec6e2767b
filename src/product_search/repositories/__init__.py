"""Repository layer for data access.

This layer wraps the three backends (Redis, the SQL catalog, MongoDB)
behind the protocol interfaces in ``product_search.protocols``. This enables:
- Swapping implementations without touching the search service
- Unit testing with in-memory fakes
- Clear separation of concerns

The repositories are protocol-based (structural typing), not inheritance-based.
"""

from product_search.protocols import CatalogStore, ResultCache, ReviewStore

from .mongo_review_repository import MongoReviewRepository
from .redis_result_cache import RedisResultCache
from .sql_catalog_repository import SqlCatalogRepository, products_table

__all__ = [
    "CatalogStore",
    "ResultCache",
    "ReviewStore",
    "MongoReviewRepository",
    "RedisResultCache",
    "SqlCatalogRepository",
    "products_table",
]
