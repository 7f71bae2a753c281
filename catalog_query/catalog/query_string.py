"""URL query string encoding of catalog parameters.

Recognized keys: ``category``, ``search``, ``sortBy``, ``order``, ``page``.
Absent parameters are omitted rather than encoded as empty values, so
``decode(encode(p))`` always canonicalizes to the same key as ``p``.
"""

import httpx

from catalog_query.domain.value_objects import (
    DEFAULT_PAGE_SIZE,
    QueryParams,
    SortDirection,
    SortField,
    clean_text,
)


def encode(params: QueryParams) -> str:
    """Encode parameters as a URL query string.

    The page size is not part of the URL surface and is not encoded.

    Args:
        params: Query parameters.

    Returns:
        Query string without the leading "?".
    """
    values: dict[str, str] = {}

    category = clean_text(params.category)
    if category:
        values["category"] = category

    search = clean_text(params.search)
    if search:
        values["search"] = search

    if params.sort_field:
        values["sortBy"] = params.sort_field.value
        if params.sort_direction:
            values["order"] = params.sort_direction.value

    if params.page != 1:
        values["page"] = str(params.page)

    return str(httpx.QueryParams(values))


def _parse_page(raw: str | None) -> int:
    """Parse a page number, falling back to the first page."""
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


def _parse_choice(enum_cls: type[SortField] | type[SortDirection], raw: str | None):
    value = clean_text(raw)
    if value is None:
        return None
    try:
        return enum_cls(value.lower())
    except ValueError:
        return None


def decode(query: str | httpx.QueryParams, limit: int = DEFAULT_PAGE_SIZE) -> QueryParams:
    """Decode a URL query string into parameters.

    Unknown keys are ignored; unknown sort fields or directions decode as
    absent, and an absent or unparsable page becomes page 1.

    Args:
        query: Query string (with or without a leading "?") or parsed params.
        limit: Page size to attach, since it is not carried in the URL.

    Returns:
        QueryParams instance.
    """
    if isinstance(query, str):
        query = httpx.QueryParams(query.lstrip("?"))

    sort_field = _parse_choice(SortField, query.get("sortBy"))
    sort_direction = _parse_choice(SortDirection, query.get("order")) if sort_field else None

    return QueryParams(
        category=clean_text(query.get("category")),
        search=clean_text(query.get("search")),
        sort_field=sort_field,
        sort_direction=sort_direction,
        page=_parse_page(query.get("page")),
        limit=limit,
    )
