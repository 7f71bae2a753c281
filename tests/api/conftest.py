"""Shared fixtures for API tests."""

from collections.abc import Iterator

import pytest
from fastapi.testclient import TestClient

from catalog_query.api.dependencies import get_catalog_service
from catalog_query.catalog.service import CatalogQueryService
from catalog_query.main import app
from tests.factories import FakeProductSource, make_review


@pytest.fixture
def api_source(catalog_products: list) -> FakeProductSource:
    """Create a data source whose first product carries reviews."""
    reviews = (
        make_review("Ann", 3, "2024-01-10T10:00:00Z"),
        make_review("Bob", 5, "2024-03-01T10:00:00Z"),
        make_review("Cid", 4, "2024-02-15T10:00:00Z"),
    )
    first = catalog_products[0].model_copy(
        update={"reviews": reviews, "description": "Fresh whole milk"}
    )
    return FakeProductSource([first, *catalog_products[1:]])


@pytest.fixture
def client(api_source: FakeProductSource) -> Iterator[TestClient]:
    """Create test client backed by the in-memory source."""
    service = CatalogQueryService(api_source, candidate_limit=3000)
    app.dependency_overrides[get_catalog_service] = lambda: service
    yield TestClient(app)
    app.dependency_overrides.clear()
