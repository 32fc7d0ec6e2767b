"""Conversion between enriched products and the JSON response bytes.

The bytes produced here are both returned to the caller and stored in the
cache, so they must be deterministic for a given product list.
"""

from pydantic import TypeAdapter, ValidationError

from product_search.dto import ProductItem
from product_search.entities import EnrichedProduct, Product

_PRODUCT_LIST = TypeAdapter(list[ProductItem])


class PayloadDecodeError(ValueError):
    """Cached bytes are not a valid search response."""


def serialize_products(products: list[EnrichedProduct] | tuple[EnrichedProduct, ...]) -> bytes:
    """Serialize enriched products to compact JSON bytes."""
    items = [
        ProductItem(
            id=p.product.id,
            name=p.product.name,
            category=p.product.category,
            price=p.product.price,
            reviews=list(p.reviews),
        )
        for p in products
    ]
    return _PRODUCT_LIST.dump_json(items)


def deserialize_products(data: bytes) -> tuple[EnrichedProduct, ...]:
    """Decode response bytes back into enriched products.

    Raises:
        PayloadDecodeError: If the bytes are not a JSON product array
    """
    try:
        items = _PRODUCT_LIST.validate_json(data)
    except ValidationError as e:
        raise PayloadDecodeError(str(e)) from e

    return tuple(
        EnrichedProduct(
            product=Product(id=item.id, name=item.name, category=item.category, price=item.price),
            reviews=tuple(item.reviews),
        )
        for item in items
    )
