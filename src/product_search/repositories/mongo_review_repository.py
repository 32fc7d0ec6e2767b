"""MongoDB implementation of ReviewStore.

Each document in the reviews collection looks like::

    {"product_id": 1, "reviews": ["great!", "battery could be better"]}
"""

from typing import Any

from pymongo import MongoClient
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from product_search.config import get_mongo_client, settings
from product_search.entities import ReviewLookup
from product_search.utils import get_logger

logger = get_logger("reviews")


class MongoReviewRepository:
    """Review lookups against a MongoDB collection keyed by ``product_id``.

    This class satisfies the ReviewStore protocol through structural typing.
    """

    def __init__(
        self,
        collection: Collection | None = None,
        client: MongoClient | None = None,
    ) -> None:
        """Initialize the review repository.

        Args:
            collection: The reviews collection. If None, it is taken from
                ``client`` using the configured database/collection names.
            client: MongoDB client used when ``collection`` is None.
                If None, creates default.
        """
        if collection is None:
            client = client or get_mongo_client()
            collection = client[settings.mongo_database][settings.mongo_reviews_collection]
        self._collection = collection

    @classmethod
    def create(cls, client: MongoClient | None = None) -> "MongoReviewRepository":
        """Factory method to create MongoReviewRepository from settings."""
        return cls(client=client)

    def find_reviews(self, product_id: int) -> ReviewLookup:
        """Look up the reviews for one product.

        Args:
            product_id: The catalog identifier of the product

        Returns:
            HIT with the review texts, MISS when no document exists,
            ERROR on a backend failure or a malformed document
        """
        try:
            doc: dict[str, Any] | None = self._collection.find_one(
                {"product_id": product_id},
                projection={"_id": False, "reviews": True},
            )
        except PyMongoError as e:
            return ReviewLookup.failed(f"{type(e).__name__}: {e}")

        if doc is None:
            return ReviewLookup.not_found()

        reviews = doc.get("reviews")
        if reviews is None:
            return ReviewLookup.found(())
        if not isinstance(reviews, list):
            return ReviewLookup.failed(
                f"reviews field for product {product_id} is {type(reviews).__name__}, not a list"
            )

        # Keep only text entries; anything else is not a review
        return ReviewLookup.found(tuple(r for r in reviews if isinstance(r, str)))

    def health_check(self) -> bool:
        """Check if MongoDB is accessible."""
        try:
            self._collection.database.client.admin.command("ping")
            return True
        except PyMongoError as e:
            logger.warning("MongoDB health check failed: %s", e)
            return False

    @property
    def collection(self) -> Collection:
        """Get the underlying collection."""
        return self._collection
