"""
Product schemas for the product editor.

The editor loads a product with its variant matrix and reviews, and saves
them back in one request.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum
from datetime import date as Date, datetime

from models.base import BaseSchema
from models.variant import VariantMatrixState
from utils.media_urls import normalize_image_url


class FeaturedType(str, Enum):
    """Storefront feature shelves."""
    TRENDING = "trending"
    BEST_SELLER = "best_seller"


class ProductForm(BaseSchema):
    """
    Product fields edited in the form.

    name and category_id are required on save; they are checked by the
    service so the admin gets a form-level message.
    """

    name: str = Field("", max_length=255, description="Product name")
    description: str = Field("", description="Long description")
    category_id: Optional[str] = Field(None, description="Category UUID")
    return_policy: str = Field("", description="Return policy text")
    vendor_name: str = Field("", description="Vendor display name")
    alias_vendor: str = Field("", description="Vendor alias shown to customers")
    is_active: bool = Field(True, description="Listed on the storefront")
    featured_type: Optional[FeaturedType] = Field(None, description="Feature shelf")

    @field_validator("description", "return_policy", "vendor_name", "alias_vendor", "name", mode="before")
    @classmethod
    def text_not_null(cls, v):
        return v or ""

    @field_validator("category_id", mode="before")
    @classmethod
    def blank_category_is_none(cls, v):
        return v or None


class ReviewInput(BaseSchema):
    """Review entered by the admin on the product page."""

    reviewer_name: str = Field("", max_length=120)
    rating: int = Field(5, ge=1, le=5)
    comment: str = ""
    date: Date = Field(default_factory=Date.today)
    is_verified: bool = False
    profile_image_url: Optional[str] = None

    @field_validator("profile_image_url")
    @classmethod
    def normalize_profile_image(cls, v: Optional[str]) -> Optional[str]:
        """Share links are rewritten to direct image links."""
        if not v:
            return None
        return normalize_image_url(v)


class ReviewResponse(ReviewInput):
    """Stored review."""

    id: str


class ProductSave(VariantMatrixState):
    """
    Save payload from the product editor.

    reviews=None leaves stored reviews alone; a list replaces them.
    """

    product: ProductForm
    reviews: Optional[list[ReviewInput]] = None


class ProductEditorState(VariantMatrixState):
    """Everything the editor needs to render an existing product."""

    id: str
    product: ProductForm
    reviews: list[ReviewResponse] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FailedVariantWrite(BaseSchema):
    """A variant row the backend refused."""

    color_id: Optional[str] = None
    size_id: str
    operation: str = Field(..., description="update, insert or delete")
    error: str


class VariantSyncSummary(BaseSchema):
    """Outcome of writing the variant matrix to product_variants."""

    updated: int = 0
    inserted: int = 0
    deleted: int = 0
    failed: list[FailedVariantWrite] = Field(default_factory=list)

    @property
    def complete(self) -> bool:
        return not self.failed


class ProductSaveResult(BaseSchema):
    """Response of a product save."""

    product_id: str
    created: bool
    variants: VariantSyncSummary
    reviews_saved: int = 0
    warnings: list[str] = Field(default_factory=list)


class ProductSummary(BaseSchema):
    """Product row as listed under a category."""

    id: str
    name: str
    category_id: Optional[str] = None
    is_active: bool = True
    featured_type: Optional[FeaturedType] = None
    display_order_within_feature: Optional[int] = None
    vendor_name: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
