"""Service layer for business logic.

This layer contains the search orchestration. Services depend on
protocols (interfaces), not concrete implementations, making them
testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Usage:
    ```python
    from product_search.services import SearchService

    # Using factory method (recommended)
    service = SearchService.create()

    # Or manual creation
    service = SearchService(catalog=catalog, reviews=reviews, cache=cache)
    ```
"""

from .payload import PayloadDecodeError, deserialize_products, serialize_products
from .search_service import SearchService

__all__ = [
    "SearchService",
    "PayloadDecodeError",
    "serialize_products",
    "deserialize_products",
]
