"""Catalog query service.

Resolves a parameter set to a page of products, choosing between two
retrieval modes:

- **Browse**: no search term. Filtering, ordering and skip/limit
  pagination are delegated to the data source and the returned page is
  cached as-is.
- **Search**: a search term is active. A bounded candidate set is
  fetched once, sorted locally and sliced into pages. The sorted
  candidates are cached under a key shared by every page of the same
  search+sort combination, so paging through results neither re-fetches
  nor re-sorts.

Concurrent requests for the same key share one pending load. Failed
loads never write to the cache.
"""

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Self, TypeVar

import structlog

from catalog_query.catalog.cache import CacheEntry, CategoryCache, QueryCache
from catalog_query.catalog.categories import CategoryService
from catalog_query.catalog.keys import candidate_key, canonicalize, effective_direction
from catalog_query.catalog.models import Product
from catalog_query.catalog.sorting import sort_products
from catalog_query.domain.exceptions import NotFoundError
from catalog_query.domain.value_objects import (
    QueryKey,
    QueryParams,
    RetrievalMode,
    SearchMode,
    clean_text,
)
from catalog_query.infrastructure.config import settings
from catalog_query.infrastructure.product_source import (
    HttpProductSource,
    ProductDataSource,
    ProductQuery,
)

logger = structlog.get_logger()

T = TypeVar("T")


@dataclass(frozen=True)
class PageResult:
    """One page of catalog results.

    Attributes:
        items: Products on the page.
        params: Parameters that produced the page.
        mode: Retrieval mode used.
        total: Number of candidates in search mode; unknown when browsing.
        from_cache: Whether the page was served without a load.
    """

    items: tuple[Product, ...]
    params: QueryParams
    mode: RetrievalMode
    total: int | None = None
    from_cache: bool = False

    @property
    def page(self) -> int:
        """Current page."""
        return self.params.page

    @property
    def limit(self) -> int:
        """Page size."""
        return self.params.limit

    @property
    def has_previous(self) -> bool:
        """Check if there's a previous page."""
        return self.page > 1

    @property
    def has_next(self) -> bool:
        """Check if there's a next page.

        Without a total, a full page is taken to mean more may follow.
        """
        if self.total is not None:
            return self.params.offset + len(self.items) < self.total
        return len(self.items) >= self.limit


class CatalogQueryService:
    """Service for catalog queries.

    Owns the result cache and the category memo; nothing else writes to
    them.

    Example usage:
        service = CatalogQueryService(HttpProductSource())

        page = await service.get_products(
            QueryParams(search="milk", sort_field=SortField.PRICE, page=2)
        )
        categories = await service.get_categories()
    """

    def __init__(
        self,
        source: ProductDataSource,
        cache: QueryCache | None = None,
        category_cache: CategoryCache | None = None,
        candidate_limit: int | None = None,
    ) -> None:
        """Initialize service.

        Args:
            source: Product and category data source.
            cache: Result cache; a fresh unbounded one when omitted.
            category_cache: Category slot; a fresh one when omitted.
            candidate_limit: Upper bound on search candidates per fetch.
        """
        self.source = source
        self.cache = cache if cache is not None else QueryCache()
        self.categories = CategoryService(source, category_cache)
        self.candidate_limit = candidate_limit or settings.search_candidate_limit
        self._in_flight: dict[QueryKey, asyncio.Future] = {}
        # Bumped by invalidate(); loads started in an older epoch do not cache.
        self._epoch = 0

    @classmethod
    def from_settings(cls) -> Self:
        """Create a service backed by the configured HTTP source.

        Returns:
            CatalogQueryService instance.
        """
        return cls(
            HttpProductSource(),
            cache=QueryCache(max_entries=settings.cache_max_entries),
            candidate_limit=settings.search_candidate_limit,
        )

    async def close(self) -> None:
        """Close the data source."""
        await self.source.close()

    def invalidate(self) -> None:
        """Drop every cached page, candidate set and the category list.

        Loads still in flight finish for their current callers but neither
        write to the cache nor get joined by later requests.
        """
        self._epoch += 1
        self._in_flight.clear()
        self.cache.clear()
        self.categories.invalidate()
        logger.info("Catalog caches invalidated")

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    async def get_products(self, params: QueryParams) -> PageResult:
        """Get one page of products.

        Args:
            params: Filter, sort and pagination parameters.

        Returns:
            The requested page.

        Raises:
            NetworkError: If the data source fails.
            DataFormatError: If the data source returns a malformed payload.
        """
        key = canonicalize(params)
        entry = self.cache.get(key)
        if entry is not None:
            logger.debug("Result cache hit", key=str(key))
            return self._to_result(params, entry, from_cache=True)

        epoch = self._epoch
        entry = await self._shared(key, lambda: self._load_page(params, key, epoch))
        return self._to_result(params, entry, from_cache=False)

    async def get_product(self, product_id: int | str) -> Product:
        """Get a single product.

        Args:
            product_id: Product identifier.

        Returns:
            The product.

        Raises:
            NotFoundError: If the source has no such product.
            NetworkError: If the data source fails.
        """
        product = await self.source.get_product(product_id)
        if product is None:
            raise NotFoundError(product_id)
        return product

    async def get_categories(self) -> tuple[str, ...]:
        """Get the memoized category identifiers."""
        return await self.categories.get_categories()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def _shared(self, key: QueryKey, load: Callable[[], Awaitable[T]]) -> T:
        """Run a load, joining one already in flight for the same key.

        The pending load is shielded so that a cancelled caller does not
        cancel it for the others.
        """
        future = self._in_flight.get(key)
        if future is None:
            future = asyncio.ensure_future(load())
            self._in_flight[key] = future

            def _release(done: asyncio.Future) -> None:
                if self._in_flight.get(key) is done:
                    del self._in_flight[key]

            future.add_done_callback(_release)
        else:
            logger.debug("Joining in-flight load", key=str(key))
        return await asyncio.shield(future)

    async def _load_page(
        self, params: QueryParams, key: QueryKey, epoch: int
    ) -> CacheEntry:
        mode = params.mode
        if isinstance(mode, SearchMode):
            entry = await self._load_search_page(params, mode, epoch)
        else:
            entry = await self._load_browse_page(params)

        if epoch == self._epoch:
            self.cache.put(key, entry)
        else:
            logger.debug("Skipping cache write after invalidation", key=str(key))
        return entry

    async def _load_browse_page(self, params: QueryParams) -> CacheEntry:
        query = ProductQuery(
            skip=params.offset,
            limit=params.limit,
            category=clean_text(params.category),
            sort_field=params.sort_field,
            sort_direction=effective_direction(params),
        )
        products = await self.source.list_products(query)

        logger.info(
            "Browse page loaded",
            category=query.category,
            page=params.page,
            limit=params.limit,
            product_count=len(products),
        )
        return CacheEntry(items=tuple(products))

    async def _load_search_page(
        self, params: QueryParams, mode: SearchMode, epoch: int
    ) -> CacheEntry:
        ckey = candidate_key(params)
        candidates = self.cache.get_candidates(ckey)
        if candidates is None:
            candidates = await self._shared(
                ckey, lambda: self._load_candidates(params, mode, ckey, epoch)
            )
        else:
            logger.debug("Reusing sorted candidates", key=str(ckey))

        start = params.offset
        return CacheEntry(
            items=candidates[start : start + params.limit],
            candidates=candidates,
        )

    async def _load_candidates(
        self, params: QueryParams, mode: SearchMode, ckey: QueryKey, epoch: int
    ) -> tuple[Product, ...]:
        query = ProductQuery(
            skip=0,
            limit=self.candidate_limit,
            category=clean_text(params.category),
            search=mode.term,
        )
        fetched = await self.source.list_products(query)
        candidates = tuple(
            sort_products(fetched, params.sort_field, effective_direction(params))
        )
        if epoch == self._epoch:
            self.cache.put_candidates(ckey, candidates)

        logger.info(
            "Search candidates loaded",
            search=mode.term,
            category=query.category,
            sort_field=params.sort_field.value if params.sort_field else None,
            candidate_count=len(candidates),
        )
        return candidates

    def _to_result(
        self, params: QueryParams, entry: CacheEntry, from_cache: bool
    ) -> PageResult:
        total = len(entry.candidates) if entry.candidates is not None else None
        return PageResult(
            items=entry.items,
            params=params,
            mode=params.mode,
            total=total,
            from_cache=from_cache,
        )
