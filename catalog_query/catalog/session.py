"""Browsing session state for one catalog view.

A session tracks the parameters a user is currently looking at and the
page shown for them. Every load takes a new generation number; when a
load finishes after a newer one has started, its outcome is dropped so a
slow response can never replace the view of a later request.
"""

from dataclasses import replace

import structlog

from catalog_query.catalog.query_string import encode
from catalog_query.catalog.service import CatalogQueryService, PageResult
from catalog_query.domain.exceptions import CatalogError
from catalog_query.domain.value_objects import (
    QueryParams,
    SortDirection,
    SortField,
)

logger = structlog.get_logger()


class BrowsingSession:
    """Loading, error and page state of a single catalog view.

    Attributes:
        params: Parameters of the most recent request.
        current: Page currently shown.
        error: Error of the most recent request, if it failed.
        loading: Whether the most recent request is still pending.
    """

    def __init__(
        self,
        service: CatalogQueryService,
        params: QueryParams | None = None,
    ) -> None:
        """Initialize session.

        Args:
            service: Catalog service to load pages from.
            params: Initial parameters (e.g., decoded from the URL).
        """
        self.service = service
        self.params = params or QueryParams()
        self.current: PageResult | None = None
        self.error: CatalogError | None = None
        self.loading = False
        self._generation = 0

    @property
    def generation(self) -> int:
        """Number of loads started so far."""
        return self._generation

    @property
    def query_string(self) -> str:
        """URL query string for the current parameters."""
        return encode(self.params)

    async def load(self, params: QueryParams | None = None) -> PageResult | None:
        """Load a page and make it current.

        Args:
            params: Parameters to load; the current ones when omitted.

        Returns:
            The page, or None if the load failed or was superseded.
        """
        if params is not None:
            self.params = params
        self._generation += 1
        generation = self._generation
        self.loading = True
        self.error = None

        try:
            result = await self.service.get_products(self.params)
        except CatalogError as e:
            if generation != self._generation:
                logger.debug("Discarding stale failure", generation=generation)
                return None
            logger.warning("Catalog load failed", error=e.message, generation=generation)
            self.error = e
            self.loading = False
            return None

        if generation != self._generation:
            logger.debug(
                "Discarding stale page",
                generation=generation,
                latest=self._generation,
            )
            return None

        self.current = result
        self.loading = False
        return result

    async def change_category(self, category: str | None) -> PageResult | None:
        """Filter by category, starting again from the first page."""
        return await self.load(replace(self.params, category=category, page=1))

    async def search(self, term: str | None) -> PageResult | None:
        """Apply a search term, starting again from the first page."""
        return await self.load(replace(self.params, search=term, page=1))

    async def change_sort(
        self,
        field: SortField | str | None,
        direction: SortDirection | str | None = None,
    ) -> PageResult | None:
        """Change ordering, starting again from the first page."""
        return await self.load(
            replace(self.params, sort_field=field, sort_direction=direction, page=1)
        )

    async def change_page(self, page: int) -> PageResult | None:
        """Move to another page of the same results."""
        return await self.load(self.params.with_page(page))

    async def reset_filters(self) -> PageResult | None:
        """Clear category, search and ordering, keeping the current page."""
        return await self.load(
            QueryParams(page=self.params.page, limit=self.params.limit)
        )
