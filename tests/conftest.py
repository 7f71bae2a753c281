"""Shared fixtures for catalog tests."""

import pytest

from catalog_query.catalog.cache import QueryCache
from catalog_query.catalog.service import CatalogQueryService
from tests.factories import FakeProductSource, make_product


@pytest.fixture
def catalog_products() -> list:
    """Forty-five search hits for "milk" plus ten dairy products without it."""
    milk = [
        make_product(i, price=100 - i, rating=(i % 5), title=f"Milk {i}", category="dairy")
        for i in range(1, 46)
    ]
    cheese = [
        make_product(100 + i, price=i, title=f"Cheese {i}", category="dairy")
        for i in range(1, 11)
    ]
    return milk + cheese


@pytest.fixture
def source(catalog_products: list) -> FakeProductSource:
    """Create an in-memory data source."""
    return FakeProductSource(catalog_products)


@pytest.fixture
def service(source: FakeProductSource) -> CatalogQueryService:
    """Create a catalog service with a fresh cache."""
    return CatalogQueryService(source, cache=QueryCache(), candidate_limit=3000)
