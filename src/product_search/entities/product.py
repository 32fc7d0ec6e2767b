"""Product domain entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Product:
    """A catalog row.

    Attributes:
        id: Identifier, unique within the catalog
        name: Product name (the field keyword searches match against)
        category: Category label
        price: Unit price
    """

    id: int
    name: str
    category: str
    price: float


@dataclass(frozen=True)
class EnrichedProduct:
    """A catalog product together with its review text.

    ``reviews`` is empty when the review store has no document for the
    product or the lookup failed.
    """

    product: Product
    reviews: tuple[str, ...] = field(default_factory=tuple)

    @property
    def id(self) -> int:
        return self.product.id
