"""Protocol interfaces for the search backends.

The search service depends on these structural interfaces, not on the
concrete Redis/MySQL/MongoDB repositories, so each backend can be swapped
or replaced by an in-memory fake in tests.

Usage:
    ```python
    from product_search.protocols import CatalogStore, ResultCache, ReviewStore

    catalog: CatalogStore = SqlCatalogRepository.create()
    catalog: CatalogStore = InMemoryCatalog([...])  # also works
    ```
"""

from .catalog_store import CatalogStore
from .result_cache import ResultCache
from .review_store import ReviewStore

__all__ = [
    "CatalogStore",
    "ResultCache",
    "ReviewStore",
]
