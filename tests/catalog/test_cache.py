"""Tests for the result and category caches."""

import pytest

from catalog_query.catalog.cache import CacheEntry, CategoryCache, QueryCache
from catalog_query.catalog.keys import canonicalize
from catalog_query.domain import QueryParams
from tests.factories import make_product


def _key(page: int):
    return canonicalize(QueryParams(page=page))


def _entry(product_id: int) -> CacheEntry:
    return CacheEntry(items=(make_product(product_id),))


class TestQueryCache:
    """Tests for QueryCache."""

    def test_miss_returns_none(self) -> None:
        """Unknown keys are misses."""
        assert QueryCache().get(_key(1)) is None

    def test_put_then_get(self) -> None:
        """Stored entries are returned by key."""
        cache = QueryCache()
        entry = _entry(1)
        cache.put(_key(1), entry)
        assert cache.get(_key(1)) is entry
        assert _key(1) in cache
        assert len(cache) == 1

    def test_unbounded_by_default(self) -> None:
        """Without a bound nothing is evicted."""
        cache = QueryCache()
        for page in range(1, 501):
            cache.put(_key(page), _entry(page))
        assert len(cache) == 500
        assert cache.get(_key(1)) is not None

    def test_bounded_evicts_least_recently_used(self) -> None:
        """The least recently used entry is evicted first."""
        cache = QueryCache(max_entries=2)
        cache.put(_key(1), _entry(1))
        cache.put(_key(2), _entry(2))
        cache.get(_key(1))
        cache.put(_key(3), _entry(3))

        assert _key(2) not in cache
        assert _key(1) in cache
        assert _key(3) in cache

    def test_invalid_bound_raises(self) -> None:
        """A bound must be positive."""
        with pytest.raises(ValueError):
            QueryCache(max_entries=0)

    def test_candidates_stored_separately(self) -> None:
        """Candidate sets do not count as pages."""
        cache = QueryCache()
        candidates = (make_product(1), make_product(2))
        cache.put_candidates(_key(9), candidates)
        assert cache.get_candidates(_key(9)) == candidates
        assert cache.get(_key(9)) is None
        assert len(cache) == 0

    def test_clear(self) -> None:
        """clear drops pages and candidates."""
        cache = QueryCache()
        cache.put(_key(1), _entry(1))
        cache.put_candidates(_key(2), (make_product(2),))
        cache.clear()
        assert cache.get(_key(1)) is None
        assert cache.get_candidates(_key(2)) is None


class TestCategoryCache:
    """Tests for CategoryCache."""

    def test_empty_by_default(self) -> None:
        """A new slot is empty."""
        assert CategoryCache().get() is None

    def test_set_and_clear(self) -> None:
        """The slot holds one list until cleared."""
        cache = CategoryCache()
        cache.set(("dairy",))
        assert cache.get() == ("dairy",)
        cache.clear()
        assert cache.get() is None
