"""Category list retrieval with process-lifetime memoization."""

import asyncio
from typing import Any

import structlog

from catalog_query.catalog.cache import CategoryCache
from catalog_query.domain.exceptions import DataFormatError
from catalog_query.infrastructure.product_source import ProductDataSource

logger = structlog.get_logger()

# Record fields that may carry the category identifier, in priority order.
_IDENTIFIER_FIELDS = ("slug", "id", "name")


def _identifier(record: Any) -> str:
    """Extract the identifier of one category record.

    Raises:
        DataFormatError: If the record carries no usable identifier.
    """
    if isinstance(record, str) and record.strip():
        return record
    if isinstance(record, dict):
        for field in _IDENTIFIER_FIELDS:
            value = record.get(field)
            if isinstance(value, str) and value.strip():
                return value
    raise DataFormatError("categories", f"unrecognized category record {record!r}")


def parse_categories(data: Any) -> tuple[str, ...]:
    """Validate a category payload and extract identifiers.

    Args:
        data: Decoded payload from the data source.

    Returns:
        Category identifiers in payload order.

    Raises:
        DataFormatError: If the payload is not a non-empty list of records.
    """
    if not isinstance(data, list):
        raise DataFormatError("categories", f"expected a list, got {type(data).__name__}")
    if not data:
        raise DataFormatError("categories", "category list is empty")
    return tuple(_identifier(record) for record in data)


class CategoryService:
    """Fetches the category list once and serves it from memory afterwards.

    Concurrent first calls share a single fetch. A failed fetch caches
    nothing, so the next call tries again.
    """

    def __init__(
        self,
        source: ProductDataSource,
        cache: CategoryCache | None = None,
    ) -> None:
        """Initialize service.

        Args:
            source: Category data source.
            cache: Category slot; a fresh one is created when omitted.
        """
        self.source = source
        self.cache = cache or CategoryCache()
        self._lock = asyncio.Lock()

    async def get_categories(self) -> tuple[str, ...]:
        """Get the category identifiers.

        Returns:
            Category identifiers in source order.

        Raises:
            NetworkError: If the fetch fails.
            DataFormatError: If the payload has the wrong shape.
        """
        cached = self.cache.get()
        if cached is not None:
            return cached

        async with self._lock:
            cached = self.cache.get()
            if cached is not None:
                return cached

            data = await self.source.list_categories()
            categories = parse_categories(data)
            self.cache.set(categories)

        logger.info("Categories loaded", category_count=len(categories))
        return categories

    def invalidate(self) -> None:
        """Forget the memoized list so the next call fetches again."""
        self.cache.clear()
