"""Catalog store protocol.

Defines the read interface the search service needs from the relational
product catalog.
"""

from typing import Protocol, runtime_checkable

from product_search.entities import Product


@runtime_checkable
class CatalogStore(Protocol):
    """Protocol for product catalog backends."""

    def find_by_keyword(self, keyword: str, limit: int) -> list[Product]:
        """Find products whose name contains the keyword (case-insensitive).

        Args:
            keyword: Substring to look for in the product name
            limit: Maximum number of products to return

        Returns:
            Up to ``limit`` products in store order

        Raises:
            CatalogUnavailableError: If the store cannot be queried
        """
        ...

    def health_check(self) -> bool:
        """Check if the catalog is reachable."""
        ...
