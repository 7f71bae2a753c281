"""API schemas for the catalog query API.

Pydantic models for response serialization.
"""

from datetime import datetime
from typing import Any, Self

from pydantic import BaseModel, Field

from catalog_query.catalog.models import Product, Review
from catalog_query.catalog.query_string import encode
from catalog_query.catalog.service import PageResult


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(
        default_factory=dict, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


# ============================================================================
# Product Schemas
# ============================================================================


class ReviewSchema(BaseModel):
    """Customer review."""

    reviewer_name: str
    rating: float
    comment: str
    date: datetime

    @classmethod
    def from_review(cls, review: Review) -> Self:
        """Create from a catalog review."""
        return cls(
            reviewer_name=review.reviewer_name,
            rating=float(review.rating),
            comment=review.comment,
            date=review.date,
        )


class ProductSchema(BaseModel):
    """Product representation."""

    id: int | str = Field(..., description="Product identifier")
    title: str
    category: str
    tags: list[str] = Field(default_factory=list)
    price: float = Field(..., ge=0)
    rating: float = Field(..., ge=0, le=5)
    stock: int = Field(..., ge=0)
    images: list[str] = Field(default_factory=list)
    brand: str | None = None
    thumbnail: str | None = None

    @classmethod
    def from_product(cls, product: Product) -> Self:
        """Create from a catalog product."""
        return cls(
            id=product.id,
            title=product.title,
            category=product.category,
            tags=list(product.tags),
            price=float(product.price),
            rating=float(product.rating),
            stock=product.stock,
            images=list(product.images),
            brand=product.brand,
            thumbnail=product.thumbnail,
        )


class ProductDetailResponse(ProductSchema):
    """Product with description and reviews."""

    description: str | None = None
    reviews: list[ReviewSchema] = Field(default_factory=list)


class ProductPageResponse(BaseModel):
    """One page of products with navigation links."""

    items: list[ProductSchema]
    page: int = Field(..., ge=1, description="Current page (1-based)")
    limit: int = Field(..., ge=1, description="Page size")
    mode: str = Field(..., description="Retrieval mode: browse or search")
    total: int | None = Field(
        default=None, description="Number of matching products (search mode only)"
    )
    has_next: bool
    has_previous: bool
    query: str = Field(..., description="Canonical query string of this page")
    next_query: str | None = Field(default=None, description="Query string of the next page")
    previous_query: str | None = Field(
        default=None, description="Query string of the previous page"
    )

    @classmethod
    def from_result(cls, result: PageResult) -> Self:
        """Create from a service page result."""
        params = result.params
        return cls(
            items=[ProductSchema.from_product(p) for p in result.items],
            page=result.page,
            limit=result.limit,
            mode=result.mode.kind,
            total=result.total,
            has_next=result.has_next,
            has_previous=result.has_previous,
            query=encode(params),
            next_query=encode(params.with_page(result.page + 1)) if result.has_next else None,
            previous_query=(
                encode(params.with_page(result.page - 1)) if result.has_previous else None
            ),
        )


# ============================================================================
# Category Schemas
# ============================================================================


class CategoryListResponse(BaseModel):
    """Response for listing categories."""

    categories: list[str]
    total: int
