"""Pydantic models for catalog products.

Products are parsed from the data source payload once and never mutated
afterwards; the query layer only reorders and slices references to them.
"""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    """Customer review attached to a product."""

    reviewer_name: str = Field(..., alias="reviewerName", description="Reviewer display name")
    rating: Decimal = Field(..., ge=0, le=5, description="Review rating (0-5)")
    comment: str = Field(default="", description="Review text")
    date: datetime = Field(..., description="Review timestamp")

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

class Product(BaseModel):
    """Product as served by the remote data source.

    Attributes:
        id: Opaque, stable identifier.
        title: Product title.
        category: Category slug.
        tags: Free-form tags.
        price: Unit price (non-negative).
        rating: Average rating (0.0-5.0).
        stock: Units available.
        images: Image URLs in display order.
        reviews: Reviews in source order.
    """

    id: int | str = Field(..., description="Unique product identifier")
    title: str = Field(..., description="Product title")
    category: str = Field(..., description="Category slug")
    tags: tuple[str, ...] = Field(default=(), description="Product tags")
    price: Decimal = Field(..., ge=0, description="Unit price")
    rating: Decimal = Field(default=Decimal("0"), ge=0, le=5, description="Average rating")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    images: tuple[str, ...] = Field(default=(), description="Image URLs")
    reviews: tuple[Review, ...] = Field(default=(), description="Customer reviews")

    # Detail page fields
    description: str | None = Field(default=None, description="Long description")
    brand: str | None = Field(default=None, description="Brand name")
    thumbnail: str | None = Field(default=None, description="Thumbnail URL")

    model_config = ConfigDict(frozen=True, extra="ignore")
