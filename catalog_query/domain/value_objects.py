"""Value Objects for the domain layer.

Value objects are immutable objects that are defined by their attributes
rather than identity. They are interchangeable when their values are equal.
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Self

from catalog_query.domain.base import ValueObject
from catalog_query.domain.exceptions import InvalidQueryError

DEFAULT_PAGE_SIZE = 20


# ============================================================================
# Sorting
# ============================================================================


class SortField(str, Enum):
    """Product fields the catalog can be ordered by."""

    PRICE = "price"
    RATING = "rating"


class SortDirection(str, Enum):
    """Ordering direction."""

    ASC = "asc"
    DESC = "desc"


def clean_text(value: str | None) -> str | None:
    """Collapse empty and whitespace-only filter values to None.

    Args:
        value: Raw filter value.

    Returns:
        Stripped value, or None when nothing is left.
    """
    if value is None:
        return None
    value = value.strip()
    return value or None


def _coerce_enum(enum_cls: type[Enum], field: str, value: Any) -> Any:
    if value is None or isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        if not value.strip():
            return None
        try:
            return enum_cls(value.strip().lower())
        except ValueError:
            pass
    allowed = [member.value for member in enum_cls]
    raise InvalidQueryError(field, value, f"expected one of {allowed}")


def _parse_int(field: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError:
        raise InvalidQueryError(field, value, "must be a positive integer") from None


def _validate_positive(field: str, value: Any) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise InvalidQueryError(field, value, "must be a positive integer")


# ============================================================================
# Retrieval Modes
# ============================================================================


@dataclass(frozen=True)
class BrowseMode(ValueObject):
    """No search term: pagination and ordering are delegated to the source."""

    kind: ClassVar[str] = "browse"


@dataclass(frozen=True)
class SearchMode(ValueObject):
    """A search term is active: candidates are sorted and sliced locally.

    Attributes:
        term: Normalized search term.
    """

    term: str

    kind: ClassVar[str] = "search"


RetrievalMode = BrowseMode | SearchMode


# ============================================================================
# Query Parameters
# ============================================================================


# Accepted spellings for each field, including the URL aliases.
_FIELD_ALIASES: dict[str, str] = {
    "category": "category",
    "search": "search",
    "searchTerm": "search",
    "sort_field": "sort_field",
    "sortField": "sort_field",
    "sortBy": "sort_field",
    "sort_direction": "sort_direction",
    "sortDirection": "sort_direction",
    "order": "sort_direction",
    "page": "page",
    "limit": "limit",
}


@dataclass(frozen=True)
class QueryParams(ValueObject):
    """Filter, sort and pagination parameters for one catalog request.

    Text filters are kept as given; empty and absent values are only
    made equivalent when the parameters are canonicalized.

    Attributes:
        category: Category equality filter.
        search: Free-text search term. Selects search mode when non-empty.
        sort_field: Field to order by.
        sort_direction: Direction, meaningful only with sort_field.
        page: 1-based page number.
        limit: Page size.
    """

    category: str | None = None
    search: str | None = None
    sort_field: SortField | None = None
    sort_direction: SortDirection | None = None
    page: int = 1
    limit: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        """Validate and coerce parameter values."""
        object.__setattr__(
            self, "sort_field", _coerce_enum(SortField, "sort_field", self.sort_field)
        )
        object.__setattr__(
            self,
            "sort_direction",
            _coerce_enum(SortDirection, "sort_direction", self.sort_direction),
        )
        _validate_positive("page", self.page)
        _validate_positive("limit", self.limit)

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        """Build parameters from a mapping in any key order.

        Both field names and their camelCase / URL aliases are accepted
        (``sortBy``, ``order``, ``searchTerm``...). None values are skipped,
        and ``page`` / ``limit`` may be given as numeric strings.

        Args:
            values: Parameter mapping.

        Returns:
            QueryParams instance.

        Raises:
            InvalidQueryError: On unknown keys or invalid values.
        """
        kwargs: dict[str, Any] = {}
        for name, value in values.items():
            field = _FIELD_ALIASES.get(name)
            if field is None:
                raise InvalidQueryError(name, value, "unknown query parameter")
            if value is None:
                continue
            if field in ("page", "limit") and isinstance(value, str):
                value = _parse_int(field, value)
            kwargs[field] = value
        return cls(**kwargs)

    @property
    def mode(self) -> RetrievalMode:
        """Retrieval mode selected by the search term."""
        term = clean_text(self.search)
        if term is None:
            return BrowseMode()
        return SearchMode(term=term)

    @property
    def offset(self) -> int:
        """Index of the first item of the page."""
        return (self.page - 1) * self.limit

    def with_page(self, page: int) -> Self:
        """Return a copy pointing at another page.

        Args:
            page: Target page number.

        Returns:
            New QueryParams instance.
        """
        return replace(self, page=page)


@dataclass(frozen=True)
class QueryKey(ValueObject):
    """Canonical identity of a parameter set, used as cache key."""

    value: str

    def __str__(self) -> str:
        """Return string representation.

        Returns:
            The canonical key string.
        """
        return self.value
