"""
Shared fixtures: in-memory backends satisfying the search protocols.
"""

import threading
import time

import pytest

from product_search.entities import CacheLookup, CacheWrite, Product, ReviewLookup
from product_search.errors import CatalogUnavailableError


class FakeCatalog:
    """In-memory CatalogStore with call recording."""

    def __init__(
        self,
        products=None,
        error: str | None = None,
        delay: float = 0.0,
        raises: Exception | None = None,
    ):
        self.products = list(products or [])
        self.error = error
        self.raises = raises
        self.delay = delay
        self.calls: list[tuple[str, int]] = []

    def find_by_keyword(self, keyword: str, limit: int) -> list[Product]:
        self.calls.append((keyword, limit))
        if self.delay:
            time.sleep(self.delay)
        if self.raises is not None:
            raise self.raises
        if self.error:
            raise CatalogUnavailableError(self.error)
        needle = keyword.lower()
        return [p for p in self.products if needle in p.name.lower()][:limit]

    def health_check(self) -> bool:
        return self.error is None


class FakeReviews:
    """In-memory ReviewStore.

    Products in ``failing`` return an ERROR outcome, products in ``raising``
    raise from the client, products without an entry have no document.
    """

    def __init__(self, reviews=None, failing=(), raising=(), delays=None):
        self.reviews = dict(reviews or {})
        self.failing = set(failing)
        self.raising = set(raising)
        self.delays = dict(delays or {})
        self.calls: list[int] = []
        self.in_flight = 0
        self.max_in_flight = 0
        self._lock = threading.Lock()

    def find_reviews(self, product_id: int) -> ReviewLookup:
        with self._lock:
            self.calls.append(product_id)
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if product_id in self.delays:
                time.sleep(self.delays[product_id])
            if product_id in self.raising:
                raise RuntimeError("socket closed")
            if product_id in self.failing:
                return ReviewLookup.failed("connection reset")
            if product_id not in self.reviews:
                return ReviewLookup.not_found()
            return ReviewLookup.found(tuple(self.reviews[product_id]))
        finally:
            with self._lock:
                self.in_flight -= 1

    def health_check(self) -> bool:
        return True


class FakeCache:
    """In-memory ResultCache that can be told to fail or stall reads and writes."""

    def __init__(
        self,
        read_error: bool = False,
        write_error: bool = False,
        read_delay: float = 0.0,
        write_delay: float = 0.0,
    ):
        self.data: dict[str, bytes] = {}
        self.read_delay = read_delay
        self.write_delay = write_delay
        self.read_error = read_error
        self.write_error = write_error
        self.gets: list[str] = []
        self.sets: list[tuple[str, bytes, int]] = []

    def get(self, key: str) -> CacheLookup:
        self.gets.append(key)
        if self.read_delay:
            time.sleep(self.read_delay)
        if self.read_error:
            return CacheLookup.failed("ConnectionError: Error 111 connecting to localhost:6379")
        if key not in self.data:
            return CacheLookup.miss()
        return CacheLookup.hit(self.data[key])

    def set(self, key: str, value: bytes, ttl: int) -> CacheWrite:
        self.sets.append((key, value, ttl))
        if self.write_delay:
            time.sleep(self.write_delay)
        if self.write_error:
            return CacheWrite.failed("ConnectionError: Error 111 connecting to localhost:6379")
        self.data[key] = value
        return CacheWrite.stored()

    def health_check(self) -> bool:
        return not self.read_error


@pytest.fixture
def products():
    """Sample catalog rows."""
    return [
        Product(id=1, name="Smartphone X", category="Electronics", price=699.99),
        Product(id=2, name="Phone Case", category="Accessories", price=19.5),
        Product(id=3, name="Laptop Pro", category="Electronics", price=1299.0),
    ]


@pytest.fixture
def catalog(products):
    return FakeCatalog(products)


@pytest.fixture
def reviews():
    return FakeReviews({1: ["great!"]})


@pytest.fixture
def cache():
    return FakeCache()
