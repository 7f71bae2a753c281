"""Product data source contract and its HTTP implementation.

The catalog layer only depends on ``ProductDataSource``; the HTTP client
talks to the storefront product API and normalizes its failures into
domain errors.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from catalog_query.catalog.models import Product
from catalog_query.domain.exceptions import DataFormatError, NetworkError
from catalog_query.domain.value_objects import SortDirection, SortField
from catalog_query.infrastructure.config import settings

logger = structlog.get_logger()

_PRODUCT_LIST = TypeAdapter(list[Product])


# ============================================================================
# Data Source Contract
# ============================================================================


@dataclass(frozen=True)
class ProductQuery:
    """Filter sent to the data source for one product listing.

    Attributes:
        skip: Number of matching products to skip.
        limit: Maximum number of products to return.
        category: Category equality filter.
        search: Free-text search term.
        sort_field: Field the source should order by.
        sort_direction: Ordering direction.
    """

    skip: int = 0
    limit: int = 20
    category: str | None = None
    search: str | None = None
    sort_field: SortField | None = None
    sort_direction: SortDirection | None = None


class ProductDataSource(ABC):
    """Remote collaborator serving products and categories."""

    @abstractmethod
    async def list_products(self, query: ProductQuery) -> list[Product]:
        """List products matching a filter window.

        Args:
            query: Filter, ordering and skip/limit window.

        Returns:
            Products in source order.

        Raises:
            NetworkError: On transport failure or non-success status.
            DataFormatError: On a payload that is not a product list.
        """

    @abstractmethod
    async def get_product(self, product_id: int | str) -> Product | None:
        """Get a single product.

        Args:
            product_id: Product identifier.

        Returns:
            Product if found, None otherwise.
        """

    @abstractmethod
    async def list_categories(self) -> Any:
        """Fetch the raw category records.

        Returns:
            Decoded payload; shape validation is left to the caller.
        """

    async def close(self) -> None:
        """Release any held resources."""


# ============================================================================
# HTTP Implementation
# ============================================================================


class HttpProductSource(ProductDataSource):
    """HTTP client for the storefront product API.

    Example usage:
        async with HttpProductSource() as source:
            products = await source.list_products(ProductQuery(limit=20))
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: API base URL. Defaults to the configured source URL.
            timeout: Request timeout in seconds.
        """
        self.base_url = (base_url or settings.product_source_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"Accept": "application/json"},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "HttpProductSource":
        """Context manager entry."""
        return self

    async def __aexit__(self, *args: object) -> None:
        """Context manager exit."""
        await self.close()

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> httpx.Response:
        """Issue a GET request, wrapping transport failures.

        Args:
            path: Endpoint path.
            params: Query parameters.

        Returns:
            The raw response.

        Raises:
            NetworkError: If the request could not be completed.
        """
        client = await self._get_client()
        try:
            logger.debug("Product source request", path=path, params=params)
            return await client.get(path, params=params)
        except httpx.RequestError as e:
            logger.error("Product source request failed", path=path, error=str(e))
            raise NetworkError(
                f"Request failed: {str(e)}", url=f"{self.base_url}{path}"
            ) from e

    def _decode(self, response: httpx.Response, resource: str) -> Any:
        """Check the status and decode the JSON body.

        Raises:
            NetworkError: On a non-success status.
            DataFormatError: On a body that is not JSON.
        """
        if response.status_code != 200:
            raise NetworkError(
                f"Failed to fetch {resource}: HTTP {response.status_code}",
                status_code=response.status_code,
                url=str(response.url),
            )
        try:
            return response.json()
        except ValueError as e:
            raise DataFormatError(resource, "response body is not JSON") from e

    async def list_products(self, query: ProductQuery) -> list[Product]:
        """List products from the source.

        Args:
            query: Filter and window.

        Returns:
            Parsed products in source order.

        Raises:
            NetworkError: On API error.
            DataFormatError: On an unexpected payload.
        """
        params: dict[str, Any] = {
            "limit": query.limit,
            "skip": query.skip,
        }
        if query.category:
            params["category"] = query.category
        if query.search:
            params["search"] = query.search
        if query.sort_field:
            params["sortBy"] = query.sort_field.value
            if query.sort_direction:
                params["order"] = query.sort_direction.value

        response = await self._get("/products", params=params)
        data = self._decode(response, "products")

        if not isinstance(data, list):
            raise DataFormatError("products", f"expected a list, got {type(data).__name__}")
        try:
            return _PRODUCT_LIST.validate_python(data)
        except ValidationError as e:
            raise DataFormatError("products", str(e)) from e

    async def get_product(self, product_id: int | str) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product identifier.

        Returns:
            Product if found, None otherwise.

        Raises:
            NetworkError: On API error (except 404).
            DataFormatError: On an unexpected payload.
        """
        response = await self._get(f"/products/{product_id}")

        if response.status_code == 404:
            return None

        data = self._decode(response, "product")
        try:
            return Product.model_validate(data)
        except ValidationError as e:
            raise DataFormatError("product", str(e)) from e

    async def list_categories(self) -> Any:
        """Fetch the category records.

        Returns:
            Decoded JSON payload.

        Raises:
            NetworkError: On API error.
            DataFormatError: On a body that is not JSON.
        """
        response = await self._get("/categories")
        return self._decode(response, "categories")
