"""
Tests for the SQL, MongoDB and Redis repositories.
"""

from unittest.mock import MagicMock, Mock

import pytest
import redis
from pymongo.errors import ServerSelectionTimeoutError
from sqlalchemy import MetaData, create_engine, insert
from sqlalchemy.pool import StaticPool

from product_search.entities import LookupStatus, Product
from product_search.errors import CatalogUnavailableError
from product_search.repositories import (
    MongoReviewRepository,
    RedisResultCache,
    SqlCatalogRepository,
    products_table,
)
from product_search.repositories.sql_catalog_repository import escape_like

# ============================================================================
# SQL catalog
# ============================================================================


def sqlite_engine():
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


@pytest.fixture
def catalog_engine():
    """In-memory SQLite catalog with a few products."""
    engine = sqlite_engine()
    metadata = MetaData()
    table = products_table("products", metadata)
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(
            insert(table),
            [
                {"id": 1, "name": "Smartphone X", "category": "Electronics", "price": 699.99},
                {"id": 2, "name": "Phone Case", "category": "Accessories", "price": 19.5},
                {"id": 3, "name": "Laptop Pro", "category": "Electronics", "price": 1299.0},
                {"id": 4, "name": "100% Cotton Phone Sock", "category": "Accessories", "price": 4.0},
                {"id": 5, "name": "Headphones", "category": None, "price": 59.0},
            ],
        )
    yield engine
    engine.dispose()


def test_catalog_substring_match_ignores_case(catalog_engine):
    repo = SqlCatalogRepository(engine=catalog_engine, table_name="products")

    products = repo.find_by_keyword("PHONE", limit=10)

    assert products == [
        Product(id=1, name="Smartphone X", category="Electronics", price=699.99),
        Product(id=2, name="Phone Case", category="Accessories", price=19.5),
        Product(id=4, name="100% Cotton Phone Sock", category="Accessories", price=4.0),
    ]


def test_catalog_skips_rows_with_null_columns(catalog_engine):
    repo = SqlCatalogRepository(engine=catalog_engine, table_name="products")

    products = repo.find_by_keyword("headphones", limit=10)

    assert products == []


def test_catalog_respects_limit(catalog_engine):
    repo = SqlCatalogRepository(engine=catalog_engine, table_name="products")

    assert len(repo.find_by_keyword("phone", limit=2)) == 2


def test_catalog_treats_like_wildcards_literally(catalog_engine):
    repo = SqlCatalogRepository(engine=catalog_engine, table_name="products")

    assert [p.id for p in repo.find_by_keyword("100%", limit=10)] == [4]
    assert repo.find_by_keyword("_", limit=10) == []


def test_escape_like():
    assert escape_like("50%_off!") == "50!%!_off!!"


def test_catalog_rejects_non_positive_limit(catalog_engine):
    repo = SqlCatalogRepository(engine=catalog_engine, table_name="products")

    with pytest.raises(ValueError):
        repo.find_by_keyword("phone", limit=0)


def test_catalog_query_error_raises_unavailable():
    # No table was created
    repo = SqlCatalogRepository(engine=sqlite_engine(), table_name="products")

    with pytest.raises(CatalogUnavailableError):
        repo.find_by_keyword("phone", limit=10)


def test_catalog_health_check(catalog_engine):
    repo = SqlCatalogRepository(engine=catalog_engine, table_name="products")

    assert repo.health_check() is True


# ============================================================================
# MongoDB reviews
# ============================================================================


def test_reviews_found():
    collection = Mock()
    collection.find_one.return_value = {"reviews": ["great!", "solid battery"]}
    repo = MongoReviewRepository(collection=collection)

    lookup = repo.find_reviews(1)

    assert lookup.status is LookupStatus.HIT
    assert lookup.reviews == ("great!", "solid battery")
    collection.find_one.assert_called_once_with(
        {"product_id": 1},
        projection={"_id": False, "reviews": True},
    )


def test_reviews_missing_document_is_not_an_error():
    collection = Mock()
    collection.find_one.return_value = None
    repo = MongoReviewRepository(collection=collection)

    lookup = repo.find_reviews(2)

    assert lookup.status is LookupStatus.MISS
    assert lookup.reviews == ()
    assert not lookup.is_error


def test_reviews_backend_error_is_reported():
    collection = Mock()
    collection.find_one.side_effect = ServerSelectionTimeoutError("localhost:27017: timed out")
    repo = MongoReviewRepository(collection=collection)

    lookup = repo.find_reviews(1)

    assert lookup.is_error
    assert "timed out" in lookup.error


def test_reviews_malformed_document():
    collection = Mock()
    collection.find_one.return_value = {"reviews": "great!"}
    repo = MongoReviewRepository(collection=collection)

    assert repo.find_reviews(1).is_error


def test_reviews_drop_non_text_entries():
    collection = Mock()
    collection.find_one.return_value = {"reviews": ["great!", 5, None]}
    repo = MongoReviewRepository(collection=collection)

    assert repo.find_reviews(1).reviews == ("great!",)


def test_reviews_health_check():
    collection = MagicMock()
    repo = MongoReviewRepository(collection=collection)

    assert repo.health_check() is True
    collection.database.client.admin.command.assert_called_once_with("ping")


# ============================================================================
# Redis result cache
# ============================================================================


def test_cache_hit():
    client = Mock()
    client.get.return_value = b"[]"
    cache = RedisResultCache(redis_client=client)

    lookup = cache.get("search:phone")

    assert lookup.is_hit
    assert lookup.value == b"[]"


def test_cache_miss():
    client = Mock()
    client.get.return_value = None
    cache = RedisResultCache(redis_client=client)

    assert cache.get("search:phone").status is LookupStatus.MISS


def test_cache_read_error():
    client = Mock()
    client.get.side_effect = redis.ConnectionError("Error 111 connecting to localhost:6379")
    cache = RedisResultCache(redis_client=client)

    lookup = cache.get("search:phone")

    assert lookup.status is LookupStatus.ERROR
    assert "ConnectionError" in lookup.error


def test_cache_set_uses_ttl():
    client = Mock()
    cache = RedisResultCache(redis_client=client)

    write = cache.set("search:phone", b"[]", 600)

    assert write.ok
    client.set.assert_called_once_with("search:phone", b"[]", ex=600)


def test_cache_write_error():
    client = Mock()
    client.set.side_effect = redis.TimeoutError("Timeout writing to socket")
    cache = RedisResultCache(redis_client=client)

    write = cache.set("search:phone", b"[]", 600)

    assert not write.ok
    assert "TimeoutError" in write.error


def test_cache_health_check():
    client = Mock()
    client.ping.side_effect = redis.ConnectionError("down")
    cache = RedisResultCache(redis_client=client)

    assert cache.health_check() is False
