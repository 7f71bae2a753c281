"""Tests for application settings."""

import pytest

from catalog_query.catalog.service import CatalogQueryService
from catalog_query.infrastructure.config import Settings
from catalog_query.infrastructure.product_source import HttpProductSource


class TestSettings:
    """Tests for Settings."""

    def test_defaults(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Defaults match the storefront API and an unbounded cache."""
        monkeypatch.delenv("CATALOG_CACHE_MAX_ENTRIES", raising=False)
        config = Settings(_env_file=None)

        assert config.product_source_url == "https://next-ecommerce-api.vercel.app"
        assert config.page_size == 20
        assert config.search_candidate_limit == 3000
        assert config.cache_max_entries is None

    def test_environment_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Variables are read with the CATALOG_ prefix."""
        monkeypatch.setenv("CATALOG_PAGE_SIZE", "12")
        monkeypatch.setenv("CATALOG_CACHE_MAX_ENTRIES", "256")
        monkeypatch.setenv("PAGE_SIZE", "99")

        config = Settings(_env_file=None)

        assert config.page_size == 12
        assert config.cache_max_entries == 256


class TestServiceFromSettings:
    """Tests for building the service from configuration."""

    def test_from_settings(self) -> None:
        """The configured service talks HTTP with the configured limits."""
        service = CatalogQueryService.from_settings()

        assert isinstance(service.source, HttpProductSource)
        assert service.candidate_limit == 3000
