"""Canonical cache keys for catalog queries.

Two parameter sets that select the same products must map to the same
key, whatever order their fields were given in and whether an unused
filter was left out or passed as an empty string.
"""

import json
from typing import Any

from catalog_query.domain.value_objects import (
    QueryKey,
    QueryParams,
    SortDirection,
    clean_text,
)


def effective_direction(params: QueryParams) -> SortDirection | None:
    """Direction a sorted query is actually ordered in.

    Anything but ascending sorts descending, so a field without a
    direction orders the same way as an explicit ``desc``.

    Args:
        params: Query parameters.

    Returns:
        The direction, or None when no sort field is set.
    """
    if params.sort_field is None:
        return None
    if params.sort_direction is SortDirection.ASC:
        return SortDirection.ASC
    return SortDirection.DESC


def _filter_fields(params: QueryParams) -> dict[str, Any]:
    """Normalized filter and ordering fields, without the page window."""
    sort_field = params.sort_field.value if params.sort_field else None
    # A direction on its own orders nothing.
    sort_direction = effective_direction(params).value if sort_field else None
    return {
        "category": clean_text(params.category),
        "search": clean_text(params.search),
        "sort_direction": sort_direction,
        "sort_field": sort_field,
    }


def _dump(fields: dict[str, Any]) -> QueryKey:
    return QueryKey(json.dumps(fields, sort_keys=True, separators=(",", ":")))


def canonicalize(params: QueryParams) -> QueryKey:
    """Derive the cache key of a parameter set.

    Args:
        params: Query parameters.

    Returns:
        Deterministic key covering filters, ordering, page and limit.
    """
    fields = _filter_fields(params)
    fields["page"] = params.page
    fields["limit"] = params.limit
    return _dump(fields)


def candidate_key(params: QueryParams) -> QueryKey:
    """Derive the key of the full candidate set behind a page.

    Every page of one search+sort combination shares this key.

    Args:
        params: Query parameters.

    Returns:
        Key covering filters and ordering only.
    """
    return _dump(_filter_fields(params))
