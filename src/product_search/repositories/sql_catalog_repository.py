"""SQLAlchemy implementation of CatalogStore.

Queries a ``products(id, name, category, price)`` table. The default engine
targets MySQL through PyMySQL, but any SQLAlchemy dialect works (tests use
SQLite).
"""

from sqlalchemy import Column, Engine, Integer, MetaData, Numeric, String, Table, func, select, text
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError

from product_search.config import get_catalog_engine, settings
from product_search.entities import Product
from product_search.errors import CatalogUnavailableError
from product_search.utils import get_logger

logger = get_logger("catalog")

LIKE_ESCAPE = "!"


def products_table(name: str = "products", metadata: MetaData | None = None) -> Table:
    """Describe the catalog table.

    Args:
        name: Table name
        metadata: MetaData to attach the table to. A fresh one if None.

    Returns:
        The SQLAlchemy Table
    """
    return Table(
        name,
        metadata or MetaData(),
        Column("id", Integer, primary_key=True),
        Column("name", String(255)),
        Column("category", String(255)),
        Column("price", Numeric(10, 2, asdecimal=False)),
    )


def escape_like(keyword: str) -> str:
    """Escape LIKE wildcards so the keyword matches literally."""
    return (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


class SqlCatalogRepository:
    """Keyword search over the relational product catalog.

    This class satisfies the CatalogStore protocol through structural typing.
    """

    def __init__(
        self,
        engine: Engine | None = None,
        table_name: str | None = None,
    ) -> None:
        """Initialize the catalog repository.

        Args:
            engine: SQLAlchemy engine. If None, creates default from settings.
            table_name: Name of the products table. Defaults to settings.
        """
        self._engine = engine or get_catalog_engine()
        self._table = products_table(table_name or settings.catalog_table)

    @classmethod
    def create(
        cls,
        engine: Engine | None = None,
        table_name: str | None = None,
    ) -> "SqlCatalogRepository":
        """Factory method to create SqlCatalogRepository with defaults."""
        return cls(engine=engine, table_name=table_name)

    def find_by_keyword(self, keyword: str, limit: int) -> list[Product]:
        """Find products whose name contains ``keyword``, ignoring case.

        No ORDER BY is applied: rows come back in the store's own order.
        Rows with missing or unconvertible columns are skipped.

        Args:
            keyword: Substring to match against the product name
            limit: Maximum number of rows to return

        Returns:
            Up to ``limit`` products

        Raises:
            ValueError: If ``limit`` is less than 1
            CatalogUnavailableError: If the query fails
        """
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}")

        pattern = f"%{escape_like(keyword.lower())}%"
        table = self._table
        query = (
            select(table.c.id, table.c.name, table.c.category, table.c.price)
            .where(func.lower(table.c.name).like(pattern, escape=LIKE_ESCAPE))
            .limit(limit)
        )

        try:
            with self._engine.connect() as conn:
                rows = conn.execute(query).all()
        except SQLAlchemyError as e:
            logger.error("Catalog query failed for %r: %s", keyword, e)
            raise CatalogUnavailableError(f"Catalog query failed: {e}") from e

        products = []
        for row in rows:
            product = self._to_product(row)
            if product is not None:
                products.append(product)
        return products

    @staticmethod
    def _to_product(row: Row) -> Product | None:
        """Convert a result row, or return None if the row is malformed."""
        if any(value is None for value in row):
            logger.warning("Skipping catalog row with NULL column: %r", tuple(row))
            return None
        try:
            return Product(
                id=int(row.id),
                name=str(row.name),
                category=str(row.category),
                price=float(row.price),
            )
        except (TypeError, ValueError) as e:
            logger.warning("Skipping malformed catalog row %r: %s", tuple(row), e)
            return None

    def health_check(self) -> bool:
        """Check if the catalog database is accessible."""
        try:
            with self._engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.warning("Catalog health check failed: %s", e)
            return False

    @property
    def table(self) -> Table:
        """Get the products table description."""
        return self._table

    @property
    def engine(self) -> Engine:
        """Get the SQLAlchemy engine."""
        return self._engine
