import os
from dataclasses import dataclass
from functools import lru_cache

import redis
from dotenv import load_dotenv
from pymongo import MongoClient
from sqlalchemy import Engine, create_engine

load_dotenv()


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")
    redis_socket_timeout: float = float(os.getenv("REDIS_SOCKET_TIMEOUT", "2.0"))

    # Cache
    cache_ttl: int = int(os.getenv("CACHE_TTL", "600"))  # 10 minutes default
    cache_key_prefix: str = os.getenv("CACHE_KEY_PREFIX", "search:")

    # Catalog (relational)
    catalog_database_url: str = os.getenv(
        "CATALOG_DATABASE_URL",
        "mysql+pymysql://root@localhost:3306/flipkart",
    )
    catalog_table: str = os.getenv("CATALOG_TABLE", "products")
    catalog_page_limit: int = int(os.getenv("CATALOG_PAGE_LIMIT", "10"))
    catalog_timeout: int = int(os.getenv("CATALOG_TIMEOUT", "5"))

    # Reviews (MongoDB)
    mongo_uri: str = os.getenv("MONGO_URI", "mongodb://localhost:27017")
    mongo_database: str = os.getenv("MONGO_DATABASE", "flipkart")
    mongo_reviews_collection: str = os.getenv("MONGO_REVIEWS_COLLECTION", "product_reviews")
    mongo_timeout_ms: int = int(os.getenv("MONGO_TIMEOUT_MS", "2000"))

    # Search pipeline
    enrichment_concurrency: int = int(os.getenv("ENRICHMENT_CONCURRENCY", "8"))
    search_timeout: float = float(os.getenv("SEARCH_TIMEOUT", "5.0"))  # 0 disables

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8080"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        if self.cache_ttl <= 0:
            raise ValueError("CACHE_TTL must be a positive number of seconds")

        if self.catalog_page_limit < 1:
            raise ValueError(f"CATALOG_PAGE_LIMIT must be at least 1, got {self.catalog_page_limit}")

        if self.enrichment_concurrency < 1:
            raise ValueError(
                f"ENRICHMENT_CONCURRENCY must be at least 1, got {self.enrichment_concurrency}"
            )

        if self.search_timeout < 0:
            raise ValueError("SEARCH_TIMEOUT must be >= 0 (0 disables the deadline)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()


def get_redis_client() -> redis.Redis:
    """Create a Redis client instance."""
    return redis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
        socket_timeout=settings.redis_socket_timeout,
        socket_connect_timeout=settings.redis_socket_timeout,
    )


def get_catalog_engine() -> Engine:
    """Create the SQLAlchemy engine for the product catalog."""
    connect_args = {}
    if settings.catalog_database_url.startswith("mysql+pymysql"):
        connect_args = {
            "connect_timeout": settings.catalog_timeout,
            "read_timeout": settings.catalog_timeout,
        }
    return create_engine(
        settings.catalog_database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        connect_args=connect_args,
    )


def get_mongo_client() -> MongoClient:
    """Create a MongoDB client instance."""
    return MongoClient(
        settings.mongo_uri,
        serverSelectionTimeoutMS=settings.mongo_timeout_ms,
        socketTimeoutMS=settings.mongo_timeout_ms,
        connectTimeoutMS=settings.mongo_timeout_ms,
    )
