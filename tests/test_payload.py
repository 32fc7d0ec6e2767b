"""
Tests for response serialization and configuration validation.
"""

import logging

import pytest

from product_search.config import Settings
from product_search.entities import EnrichedProduct, Product
from product_search.services import PayloadDecodeError, deserialize_products, serialize_products
from product_search.utils import configure_logging, get_logger


def test_serialize_products_is_compact_and_ordered():
    products = (
        EnrichedProduct(Product(id=1, name="Smartphone X", category="Electronics", price=699.99), ("great!",)),
        EnrichedProduct(Product(id=2, name="Phone Case", category="Accessories", price=19.5)),
    )

    assert serialize_products(products) == (
        b'[{"id":1,"name":"Smartphone X","category":"Electronics","price":699.99,"reviews":["great!"]},'
        b'{"id":2,"name":"Phone Case","category":"Accessories","price":19.5,"reviews":[]}]'
    )


def test_deserialize_restores_products():
    products = (
        EnrichedProduct(Product(id=1, name="Smartphone X", category="Electronics", price=699.99), ("great!",)),
    )

    assert deserialize_products(serialize_products(products)) == products


@pytest.mark.parametrize("data", [b"", b"{}", b"garbage", b'[{"id":"x"}]'])
def test_deserialize_rejects_invalid_payload(data):
    with pytest.raises(PayloadDecodeError):
        deserialize_products(data)


@pytest.mark.parametrize(
    "overrides",
    [
        {"cache_ttl": 0},
        {"catalog_page_limit": 0},
        {"enrichment_concurrency": 0},
        {"search_timeout": -1.0},
    ],
)
def test_settings_validation(overrides):
    with pytest.raises(ValueError):
        Settings(**overrides)


def test_settings_defaults():
    settings = Settings()

    assert settings.cache_key_prefix == "search:"
    assert settings.catalog_page_limit >= 1


def test_logger_configuration_is_idempotent():
    logger = configure_logging("DEBUG")
    try:
        configure_logging("DEBUG")

        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
        assert not logger.propagate
        assert get_logger("search").name == "product_search.search"
        assert get_logger() is logger
    finally:
        configure_logging()
