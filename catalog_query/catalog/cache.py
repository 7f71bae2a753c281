"""In-process caches for catalog results.

``QueryCache`` maps canonical keys to result pages and, for search
queries, candidate keys to the full sorted candidate set. It keeps every
entry for the life of the process unless constructed with
``max_entries``, in which case each map evicts its least recently used
entry once it grows past the bound.

``CategoryCache`` is a single slot for the category list.
"""

from collections import OrderedDict
from dataclasses import dataclass
from typing import Generic, TypeVar

from catalog_query.catalog.models import Product
from catalog_query.domain.value_objects import QueryKey

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry:
    """Cached result window.

    Attributes:
        items: Products of the page.
        candidates: Full sorted candidate set (search mode only).
    """

    items: tuple[Product, ...]
    candidates: tuple[Product, ...] | None = None


class _KeyedStore(Generic[V]):
    """Dict with optional least-recently-used eviction."""

    def __init__(self, max_entries: int | None) -> None:
        self.max_entries = max_entries
        self._data: OrderedDict[QueryKey, V] = OrderedDict()

    def get(self, key: QueryKey) -> V | None:
        value = self._data.get(key)
        if value is not None and self.max_entries is not None:
            self._data.move_to_end(key)
        return value

    def put(self, key: QueryKey, value: V) -> None:
        self._data[key] = value
        self._data.move_to_end(key)
        if self.max_entries is not None:
            while len(self._data) > self.max_entries:
                self._data.popitem(last=False)

    def clear(self) -> None:
        self._data.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def __len__(self) -> int:
        return len(self._data)


class QueryCache:
    """Result cache owned by one catalog service.

    Example usage:
        cache = QueryCache(max_entries=500)
        cache.put(key, CacheEntry(items=tuple(products)))
        entry = cache.get(key)
    """

    def __init__(self, max_entries: int | None = None) -> None:
        """Initialize an empty cache.

        Args:
            max_entries: Per-map bound; None disables eviction.

        Raises:
            ValueError: If the bound is not positive.
        """
        if max_entries is not None and max_entries < 1:
            raise ValueError("max_entries must be positive")
        self._pages: _KeyedStore[CacheEntry] = _KeyedStore(max_entries)
        self._candidates: _KeyedStore[tuple[Product, ...]] = _KeyedStore(max_entries)

    @property
    def max_entries(self) -> int | None:
        """Configured bound, if any."""
        return self._pages.max_entries

    def get(self, key: QueryKey) -> CacheEntry | None:
        """Look up a cached page.

        Args:
            key: Canonical key.

        Returns:
            Cached entry, or None on a miss.
        """
        return self._pages.get(key)

    def put(self, key: QueryKey, entry: CacheEntry) -> None:
        """Store a page.

        Args:
            key: Canonical key.
            entry: Page to cache.
        """
        self._pages.put(key, entry)

    def get_candidates(self, key: QueryKey) -> tuple[Product, ...] | None:
        """Look up a sorted candidate set.

        Args:
            key: Candidate key.

        Returns:
            Sorted candidates, or None on a miss.
        """
        return self._candidates.get(key)

    def put_candidates(self, key: QueryKey, products: tuple[Product, ...]) -> None:
        """Store a sorted candidate set.

        Args:
            key: Candidate key.
            products: Candidates in final order.
        """
        self._candidates.put(key, products)

    def clear(self) -> None:
        """Drop every page and candidate set."""
        self._pages.clear()
        self._candidates.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._pages

    def __len__(self) -> int:
        return len(self._pages)


class CategoryCache:
    """Single-slot holder for the category list. Entries never expire."""

    def __init__(self) -> None:
        self._categories: tuple[str, ...] | None = None

    def get(self) -> tuple[str, ...] | None:
        return self._categories

    def set(self, categories: tuple[str, ...]) -> None:
        self._categories = categories

    def clear(self) -> None:
        self._categories = None
