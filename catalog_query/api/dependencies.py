"""FastAPI dependencies.

One catalog service (and therefore one result cache) is shared by every
request handled by the process.
"""

from catalog_query.catalog.service import CatalogQueryService

_catalog_service: CatalogQueryService | None = None


def get_catalog_service() -> CatalogQueryService:
    """Get the catalog service singleton.

    Returns:
        CatalogQueryService instance.
    """
    global _catalog_service
    if _catalog_service is None:
        _catalog_service = CatalogQueryService.from_settings()
    return _catalog_service


async def close_catalog_service() -> None:
    """Close and forget the catalog service singleton."""
    global _catalog_service
    if _catalog_service is not None:
        await _catalog_service.close()
        _catalog_service = None
