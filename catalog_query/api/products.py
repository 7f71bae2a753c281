"""Product API endpoints.

Query parameters follow the storefront URL surface: ``category``,
``search``, ``sortBy`` (price, rating), ``order`` (asc, desc) and
``page``. They are decoded leniently, so an unknown sort value or an
unparsable page never fails the request.
"""

from fastapi import APIRouter, Depends, Query, Request, status

from catalog_query.api.dependencies import get_catalog_service
from catalog_query.api.schemas import (
    ErrorResponse,
    ProductDetailResponse,
    ProductPageResponse,
    ProductSchema,
    ReviewSchema,
)
from catalog_query.catalog.query_string import decode
from catalog_query.catalog.service import CatalogQueryService
from catalog_query.catalog.sorting import sort_reviews
from catalog_query.infrastructure.config import settings

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Endpoints
# ============================================================================


@router.get(
    "",
    response_model=ProductPageResponse,
    status_code=status.HTTP_200_OK,
    summary="List products",
    description="Get one page of products for the given filters.",
    responses={502: {"model": ErrorResponse}},
)
async def list_products(
    request: Request,
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ProductPageResponse:
    """List one page of products.

    Args:
        request: Incoming request; its raw query string is decoded.
        service: Catalog service.

    Returns:
        The page with links to its neighbours.
    """
    params = decode(request.url.query, limit=settings.page_size)
    result = await service.get_products(params)
    return ProductPageResponse.from_result(result)


@router.get(
    "/{product_id}",
    response_model=ProductDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get product",
    description="Get product details with reviews.",
    responses={404: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
async def get_product(
    product_id: str,
    review_sort: str | None = Query(
        default=None,
        alias="reviewSort",
        description="Review order: date (newest first) or rating (highest first)",
    ),
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ProductDetailResponse:
    """Get product details.

    Args:
        product_id: Product identifier.
        review_sort: Optional review ordering.
        service: Catalog service.

    Returns:
        Product details.
    """
    product = await service.get_product(product_id)
    reviews = sort_reviews(product.reviews, review_sort)

    return ProductDetailResponse(
        **ProductSchema.from_product(product).model_dump(),
        description=product.description,
        reviews=[ReviewSchema.from_review(r) for r in reviews],
    )
