"""Review store protocol.

Defines the point lookup the search service needs from the document store
holding product reviews.
"""

from typing import Protocol, runtime_checkable

from product_search.entities import ReviewLookup


@runtime_checkable
class ReviewStore(Protocol):
    """Protocol for review (metadata) backends."""

    def find_reviews(self, product_id: int) -> ReviewLookup:
        """Look up the reviews for one product.

        Args:
            product_id: The catalog identifier of the product

        Returns:
            ReviewLookup with status HIT (document found), MISS (no document)
            or ERROR (backend failure). Implementations should not raise.
        """
        ...

    def health_check(self) -> bool:
        """Check if the review store is reachable."""
        ...
