"""Local ordering of products and reviews.

All orderings are stable: items with equal keys keep their input order,
in both directions.
"""

from collections.abc import Iterable
from datetime import datetime, timezone
from operator import attrgetter

from catalog_query.catalog.models import Product, Review
from catalog_query.domain.value_objects import SortDirection, SortField

_SORTABLE = {field.value for field in SortField}


def sort_products(
    products: Iterable[Product],
    field: SortField | str | None,
    direction: SortDirection | str | None = None,
) -> list[Product]:
    """Order products by price or rating.

    An absent or unsupported field leaves the input order unchanged.
    Any direction other than ascending sorts descending.

    Args:
        products: Products to order.
        field: Field to order by.
        direction: Ordering direction.

    Returns:
        New list in the requested order.
    """
    name = field.value if isinstance(field, SortField) else field
    if name not in _SORTABLE:
        return list(products)

    descending = direction != SortDirection.ASC
    return sorted(products, key=attrgetter(name), reverse=descending)


def _review_time(review: Review) -> datetime:
    # Timestamps without an offset are taken as UTC.
    if review.date.tzinfo is None:
        return review.date.replace(tzinfo=timezone.utc)
    return review.date


def sort_reviews(reviews: Iterable[Review], by: str | None) -> list[Review]:
    """Order reviews for the product detail view.

    Args:
        reviews: Reviews in source order.
        by: "date" (newest first), "rating" (highest first), or anything
            else to keep source order.

    Returns:
        New list in the requested order.
    """
    if by == "date":
        return sorted(reviews, key=_review_time, reverse=True)
    if by == "rating":
        return sorted(reviews, key=attrgetter("rating"), reverse=True)
    return list(reviews)
