#!/usr/bin/env python3
"""
Demo script for product search.

Seeds the configured catalog database and review collection with a few
sample products, then runs the same search twice to show the cold path
and the cached path.
"""

import asyncio
import time

from sqlalchemy import MetaData, delete, insert

from product_search.config import get_catalog_engine, get_mongo_client, get_redis_client, settings
from product_search.repositories import (
    MongoReviewRepository,
    RedisResultCache,
    SqlCatalogRepository,
    products_table,
)
from product_search.services import SearchService
from product_search.utils import configure_logging

SAMPLE_PRODUCTS = [
    {"id": 1, "name": "Smartphone X", "category": "Electronics", "price": 699.99},
    {"id": 2, "name": "Phone Case", "category": "Accessories", "price": 19.5},
    {"id": 3, "name": "Laptop Pro", "category": "Electronics", "price": 1299.0},
    {"id": 4, "name": "Wireless Headphones", "category": "Audio", "price": 89.0},
]

SAMPLE_REVIEWS = [
    {"product_id": 1, "reviews": ["great!", "battery lasts two days"]},
    {"product_id": 4, "reviews": ["comfortable", "noise cancelling works well"]},
]


def print_section(title: str) -> None:
    """Print a section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70)


def seed(engine, mongo_client) -> None:
    """Replace the sample rows and review documents."""
    metadata = MetaData()
    table = products_table(settings.catalog_table, metadata)
    metadata.create_all(engine)
    with engine.begin() as conn:
        conn.execute(delete(table).where(table.c.id.in_([p["id"] for p in SAMPLE_PRODUCTS])))
        conn.execute(insert(table), SAMPLE_PRODUCTS)

    collection = mongo_client[settings.mongo_database][settings.mongo_reviews_collection]
    collection.delete_many({"product_id": {"$in": [r["product_id"] for r in SAMPLE_REVIEWS]}})
    collection.insert_many([dict(r) for r in SAMPLE_REVIEWS])
    print(f"  ✓ Seeded {len(SAMPLE_PRODUCTS)} products and {len(SAMPLE_REVIEWS)} review documents")


async def demo_search(service: SearchService, redis_client, keyword: str) -> None:
    """Run a keyword search cold, then cached."""
    print_section(f"Searching for {keyword!r}")

    # Start cold so the first request goes to the stores
    redis_client.delete(service.cache_key(keyword))

    for attempt in ("cold", "cached"):
        start = time.time()
        result = await service.search(keyword)
        duration = (time.time() - start) * 1000
        source = "cache" if result.from_cache else "catalog + reviews"
        print(f"\n  {attempt}: {len(result.products)} products from {source} in {duration:.2f}ms")
        for item in result.products:
            print(f"    - [{item.id}] {item.product.name} ${item.product.price:.2f} reviews={list(item.reviews)}")


def main() -> None:
    """Seed the backends and run the demo searches."""
    print("\n🚀 Product Search Demo")
    configure_logging("DEBUG")

    engine = get_catalog_engine()
    mongo_client = get_mongo_client()
    redis_client = get_redis_client()

    try:
        print_section("Seeding sample data")
        seed(engine, mongo_client)

        service = SearchService.create(
            catalog=SqlCatalogRepository.create(engine=engine),
            reviews=MongoReviewRepository.create(client=mongo_client),
            cache=RedisResultCache.create(redis_client=redis_client),
        )
        asyncio.run(demo_search(service, redis_client, "phone"))

        print_section("Metrics")
        for name, value in service.get_stats().items():
            print(f"  {name}: {value}")

    except Exception as e:
        print(f"\n❌ Error: {e}")
        print("\nMake sure MySQL, MongoDB and Redis are running, or point")
        print("CATALOG_DATABASE_URL, MONGO_URI and REDIS_URL at your instances.")
    finally:
        engine.dispose()
        mongo_client.close()
        redis_client.close()


if __name__ == "__main__":
    main()
