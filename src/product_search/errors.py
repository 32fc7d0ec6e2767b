"""Caller-visible search errors.

Only invalid input and catalog failures surface to the caller. Cache and
review-store failures are reported through outcome objects instead
(see ``product_search.entities``).
"""


class SearchError(Exception):
    """Base class for errors raised by the search pipeline."""


class InvalidKeywordError(SearchError, ValueError):
    """The search keyword is missing or blank."""


class CatalogUnavailableError(SearchError):
    """The product catalog could not be queried."""


class SearchTimeoutError(CatalogUnavailableError):
    """The catalog query exceeded the search deadline."""
