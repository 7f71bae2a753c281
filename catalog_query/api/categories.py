"""Category API endpoints."""

from fastapi import APIRouter, Depends, status

from catalog_query.api.dependencies import get_catalog_service
from catalog_query.api.schemas import CategoryListResponse, ErrorResponse
from catalog_query.catalog.service import CatalogQueryService

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get(
    "",
    response_model=CategoryListResponse,
    status_code=status.HTTP_200_OK,
    summary="List categories",
    description="Get the category list. Fetched once per process.",
    responses={502: {"model": ErrorResponse}},
)
async def list_categories(
    service: CatalogQueryService = Depends(get_catalog_service),
) -> CategoryListResponse:
    """List all categories.

    Returns:
        Category identifiers.
    """
    categories = await service.get_categories()
    return CategoryListResponse(categories=list(categories), total=len(categories))
