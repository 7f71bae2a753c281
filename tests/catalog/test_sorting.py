"""Tests for local product and review ordering."""

import pytest

from catalog_query.catalog.sorting import sort_products, sort_reviews
from catalog_query.domain import SortDirection, SortField
from tests.factories import make_product, make_review


def _prices(products: list) -> list[int]:
    return [int(p.price) for p in products]


class TestSortProducts:
    """Tests for sort_products."""

    @pytest.fixture
    def products(self) -> list:
        """Products priced 30, 10, 20."""
        return [make_product(1, price=30), make_product(2, price=10), make_product(3, price=20)]

    def test_price_ascending(self, products: list) -> None:
        """Ascending price order."""
        result = sort_products(products, SortField.PRICE, SortDirection.ASC)
        assert _prices(result) == [10, 20, 30]

    def test_price_descending(self, products: list) -> None:
        """Descending price order."""
        result = sort_products(products, SortField.PRICE, SortDirection.DESC)
        assert _prices(result) == [30, 20, 10]

    def test_accepts_plain_strings(self, products: list) -> None:
        """Field and direction may be given as strings."""
        assert _prices(sort_products(products, "price", "asc")) == [10, 20, 30]

    def test_missing_direction_sorts_descending(self, products: list) -> None:
        """Without a direction, highest values come first."""
        assert _prices(sort_products(products, SortField.PRICE)) == [30, 20, 10]

    def test_rating(self) -> None:
        """Ratings are ordered numerically."""
        products = [
            make_product(1, rating="4.5"),
            make_product(2, rating="2"),
            make_product(3, rating="4.75"),
        ]
        result = sort_products(products, SortField.RATING, SortDirection.DESC)
        assert [p.id for p in result] == [3, 1, 2]

    @pytest.mark.parametrize("field", [None, "", "title", "stock"])
    def test_absent_or_unsupported_field_keeps_order(self, products: list, field) -> None:
        """Input order is preserved when there is nothing to sort by."""
        assert [p.id for p in sort_products(products, field, "asc")] == [1, 2, 3]

    @pytest.mark.parametrize("direction", [SortDirection.ASC, SortDirection.DESC])
    def test_ties_keep_input_order(self, direction: SortDirection) -> None:
        """Equal prices keep their relative input order in both directions."""
        products = [
            make_product(1, price=10),
            make_product(2, price=5),
            make_product(3, price=10),
            make_product(4, price=10),
        ]
        result = sort_products(products, SortField.PRICE, direction)
        tied = [p.id for p in result if p.price == 10]
        assert tied == [1, 3, 4]

    def test_does_not_mutate_input(self, products: list) -> None:
        """A new list is returned."""
        sort_products(products, SortField.PRICE, SortDirection.ASC)
        assert [p.id for p in products] == [1, 2, 3]


class TestSortReviews:
    """Tests for sort_reviews."""

    @pytest.fixture
    def reviews(self) -> list:
        """Three reviews in source order."""
        return [
            make_review("Ann", 3, "2024-05-01T10:00:00Z"),
            make_review("Bob", 5, "2024-03-01T10:00:00Z"),
            make_review("Cid", 4, "2024-06-01T10:00:00Z"),
        ]

    def test_by_date_newest_first(self, reviews: list) -> None:
        """Date order puts the newest review first."""
        assert [r.reviewer_name for r in sort_reviews(reviews, "date")] == ["Cid", "Ann", "Bob"]

    def test_by_rating_highest_first(self, reviews: list) -> None:
        """Rating order puts the best review first."""
        assert [r.reviewer_name for r in sort_reviews(reviews, "rating")] == ["Bob", "Cid", "Ann"]

    def test_default_keeps_source_order(self, reviews: list) -> None:
        """No criterion keeps source order."""
        assert [r.reviewer_name for r in sort_reviews(reviews, None)] == ["Ann", "Bob", "Cid"]

    def test_by_date_mixes_naive_and_aware(self) -> None:
        """Timestamps without an offset compare as UTC."""
        reviews = [
            make_review("Ann", 3, "2024-05-01T10:00:00"),
            make_review("Bob", 5, "2024-05-01T12:00:00+00:00"),
            make_review("Cid", 4, "2024-05-01T11:00:00"),
        ]
        assert [r.reviewer_name for r in sort_reviews(reviews, "date")] == ["Bob", "Cid", "Ann"]
