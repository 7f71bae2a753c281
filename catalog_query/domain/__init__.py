"""Domain layer - value objects and exceptions.

Example usage:
    from catalog_query.domain import QueryParams, SortField

    params = QueryParams(category="dairy", sort_field=SortField.PRICE, page=2)
    params.mode  # BrowseMode()
"""

# Base classes
from catalog_query.domain.base import ValueObject

# Exceptions
from catalog_query.domain.exceptions import (
    CatalogError,
    DataFormatError,
    DomainError,
    InvalidQueryError,
    NetworkError,
    NotFoundError,
)

# Value Objects
from catalog_query.domain.value_objects import (
    DEFAULT_PAGE_SIZE,
    BrowseMode,
    QueryKey,
    QueryParams,
    RetrievalMode,
    SearchMode,
    SortDirection,
    SortField,
    clean_text,
)

__all__ = [
    # Base classes
    "ValueObject",
    # Value Objects
    "DEFAULT_PAGE_SIZE",
    "BrowseMode",
    "QueryKey",
    "QueryParams",
    "RetrievalMode",
    "SearchMode",
    "SortDirection",
    "SortField",
    "clean_text",
    # Exceptions
    "CatalogError",
    "DataFormatError",
    "DomainError",
    "InvalidQueryError",
    "NetworkError",
    "NotFoundError",
]
