"""Catalog query core.

Canonical keys, result caching, local sorting, query string encoding and
the two-mode retrieval service. Import from the submodules, e.g.
``from catalog_query.catalog.service import CatalogQueryService``.
"""
