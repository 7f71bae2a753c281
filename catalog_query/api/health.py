"""Health check endpoints.

``/health`` only reports that the process is up. ``/ready`` also resolves
the shared catalog service, so a configuration that cannot build its data
source fails readiness instead of the first catalog request.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from catalog_query.api.dependencies import get_catalog_service
from catalog_query.catalog.service import CatalogQueryService
from catalog_query.infrastructure.config import settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response schema."""

    status: str
    product_source: str
    cached_pages: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="catalog-query",
        version=settings.api_version,
    )


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    service: CatalogQueryService = Depends(get_catalog_service),
) -> ReadinessResponse:
    """Check if service is ready to accept requests.

    Returns:
        Readiness status with the data source in use and the result cache size.
    """
    return ReadinessResponse(
        status="ready",
        product_source=type(service.source).__name__,
        cached_pages=len(service.cache),
    )
