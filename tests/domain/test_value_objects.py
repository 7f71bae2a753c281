"""Tests for domain value objects."""

import pytest

from catalog_query.domain import (
    BrowseMode,
    InvalidQueryError,
    QueryParams,
    SearchMode,
    SortDirection,
    SortField,
)


class TestQueryParams:
    """Tests for QueryParams value object."""

    def test_defaults(self) -> None:
        """Parameters default to the first page of twenty."""
        params = QueryParams()
        assert params.page == 1
        assert params.limit == 20
        assert params.sort_field is None

    def test_sort_values_coerced_to_enums(self) -> None:
        """Sort strings are converted to enum members."""
        params = QueryParams(sort_field="Price", sort_direction="DESC")
        assert params.sort_field is SortField.PRICE
        assert params.sort_direction is SortDirection.DESC

    def test_empty_sort_values_become_none(self) -> None:
        """Empty sort strings mean no ordering."""
        params = QueryParams(sort_field="", sort_direction="")
        assert params.sort_field is None
        assert params.sort_direction is None

    def test_unknown_sort_field_raises(self) -> None:
        """Only price and rating are sortable."""
        with pytest.raises(InvalidQueryError) as exc_info:
            QueryParams(sort_field="title")
        assert exc_info.value.details["field"] == "sort_field"

    @pytest.mark.parametrize("page", [0, -1, True, "2"])
    def test_invalid_page_raises(self, page: object) -> None:
        """Page must be a positive integer."""
        with pytest.raises(InvalidQueryError):
            QueryParams(page=page)

    def test_invalid_limit_raises(self) -> None:
        """Limit must be a positive integer."""
        with pytest.raises(InvalidQueryError):
            QueryParams(limit=0)

    def test_offset(self) -> None:
        """Offset is derived from page and limit."""
        assert QueryParams(page=3, limit=20).offset == 40

    def test_with_page(self) -> None:
        """with_page keeps every other field."""
        params = QueryParams(category="dairy", search="milk", page=1)
        moved = params.with_page(4)
        assert moved.page == 4
        assert moved.category == "dairy"
        assert params.page == 1

    def test_is_hashable_and_compared_by_value(self) -> None:
        """Equal parameters are interchangeable."""
        assert QueryParams(category="dairy") == QueryParams(category="dairy")
        assert len({QueryParams(page=2), QueryParams(page=2)}) == 1


class TestFromMapping:
    """Tests for QueryParams.from_mapping."""

    def test_accepts_url_aliases(self) -> None:
        """sortBy and order map onto the sort fields."""
        params = QueryParams.from_mapping({"sortBy": "rating", "order": "asc", "page": 2})
        assert params.sort_field is SortField.RATING
        assert params.sort_direction is SortDirection.ASC
        assert params.page == 2

    def test_skips_none_values(self) -> None:
        """None values fall back to defaults."""
        params = QueryParams.from_mapping({"page": None, "search": None})
        assert params == QueryParams()

    def test_accepts_numeric_strings(self) -> None:
        """URL-derived string values for page and limit are parsed."""
        params = QueryParams.from_mapping({"sortBy": "price", "page": "2", "limit": " 10 "})
        assert params.sort_field is SortField.PRICE
        assert params.page == 2
        assert params.limit == 10

    @pytest.mark.parametrize("page", ["abc", "0", "-3", "1.5"])
    def test_invalid_page_string_raises(self, page: str) -> None:
        """Non-numeric or non-positive page strings are rejected."""
        with pytest.raises(InvalidQueryError):
            QueryParams.from_mapping({"page": page})

    def test_unknown_key_raises(self) -> None:
        """Unknown parameters are rejected."""
        with pytest.raises(InvalidQueryError):
            QueryParams.from_mapping({"colour": "red"})


class TestRetrievalMode:
    """Tests for mode resolution."""

    def test_no_search_is_browse(self) -> None:
        """Without a search term the mode is browse."""
        assert QueryParams(category="dairy").mode == BrowseMode()

    @pytest.mark.parametrize("term", ["", "   ", None])
    def test_blank_search_is_browse(self, term: str | None) -> None:
        """Blank search terms do not switch to search mode."""
        assert isinstance(QueryParams(search=term).mode, BrowseMode)

    def test_search_term_selects_search_mode(self) -> None:
        """A search term selects search mode with the stripped term."""
        mode = QueryParams(search="  milk ").mode
        assert mode == SearchMode(term="milk")
        assert mode.kind == "search"
