"""
Category schemas and ordering payloads.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from models.base import BaseSchema


class CategoryCreate(BaseSchema):
    """Create a category."""

    name: str = Field(..., min_length=1, max_length=120, description="Category name")
    description: str = Field("", description="Short description")
    image_url: Optional[str] = Field(None, description="Public image URL")
    is_active: bool = Field(True, description="Shown on the storefront")

    @field_validator("description", mode="before")
    @classmethod
    def description_not_null(cls, v):
        return v or ""


class CategoryUpdate(BaseSchema):
    """
    Update a category.

    All fields optional - only provided fields are updated.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    description: Optional[str] = None
    image_url: Optional[str] = None
    is_active: Optional[bool] = None


class CategoryResponse(BaseSchema):
    """Category row."""

    id: str
    name: str
    description: Optional[str] = ""
    image_url: Optional[str] = None
    is_active: bool = True
    display_order: Optional[int] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class ReorderItem(BaseSchema):
    """One entry of a reorder request; list position is the new ordinal."""

    id: str = Field(..., min_length=1)


class CategoryReorderRequest(BaseSchema):
    """Categories in their new display order."""

    categories: list[ReorderItem]


class FeaturedReorderRequest(BaseSchema):
    """Featured products in their new order within the feature."""

    products: list[ReorderItem]


class ReorderResult(BaseSchema):
    """Reorder outcome."""

    success: bool = True
    updated: int
