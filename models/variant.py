"""
Variant matrix schemas.

A product's variants form a matrix of selected colors x selected sizes.
Each cell is a VariantRecord keyed by (color_id, size_id); color_id is None
for size-only products.
"""

from pydantic import Field, field_validator
from typing import Optional
from enum import Enum
from datetime import datetime

from models.base import BaseSchema, dedupe_ids
from utils.number_utils import coerce_amount

# (color_id, size_id). A tuple, so None and the string "null" stay distinct.
VariantKey = tuple[Optional[str], str]

PRICE_FIELDS = ("price", "mrp_price", "rsp_price", "cost_price")


def blank_color_to_none(v):
    """An empty color id means no color axis."""
    if v is None or (isinstance(v, str) and not v.strip()):
        return None
    return v


class MediaType(str, Enum):
    """Kinds of media attached to a variant."""
    IMAGE = "image"
    VIDEO = "video"


class VariantRecord(BaseSchema):
    """
    One cell of the variant matrix.

    id / product_id are only set once the row exists in product_variants.
    """

    id: Optional[str] = Field(None, description="product_variants UUID")
    product_id: Optional[str] = Field(None, description="Owning product UUID")
    color_id: Optional[str] = Field(None, description="Color UUID, null for size-only variants")
    size_id: str = Field(..., min_length=1, description="Size UUID")
    quantity: int = Field(0, ge=0, description="Units in stock")
    sku: str = Field("", description="Stock keeping unit")
    price: int = Field(0, ge=0, description="Selling price, mirrors rsp_price")
    mrp_price: int = Field(0, ge=0, description="Maximum retail price")
    rsp_price: int = Field(0, ge=0, description="Retail selling price")
    cost_price: int = Field(0, ge=0, description="Cost price")
    discount_percentage: int = Field(0, ge=0, le=100, description="Derived from mrp/rsp")
    image_urls: list[str] = Field(default_factory=list)
    video_urls: list[str] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_validator("color_id", mode="before")
    @classmethod
    def blank_color_is_none(cls, v):
        return blank_color_to_none(v)

    @field_validator("sku", mode="before")
    @classmethod
    def sku_not_null(cls, v):
        return v or ""

    @field_validator("quantity", *PRICE_FIELDS, "discount_percentage", mode="before")
    @classmethod
    def round_amounts(cls, v):
        """Round submitted amounts half-up; null becomes 0."""
        return coerce_amount(v)

    @field_validator("image_urls", "video_urls", mode="before")
    @classmethod
    def media_not_null(cls, v):
        return list(v or [])

    @property
    def key(self) -> VariantKey:
        return (self.color_id, self.size_id)


class VariantMatrixState(BaseSchema):
    """
    Editor state for a product's variants.

    The selected axes are the source of truth for which keys should exist.
    """

    variants: list[VariantRecord] = Field(default_factory=list)
    selected_colors: list[str] = Field(default_factory=list)
    selected_sizes: list[str] = Field(default_factory=list)

    @field_validator("selected_colors", "selected_sizes", mode="before")
    @classmethod
    def unique_ids(cls, v):
        return dedupe_ids(v)


class VariantTargetRequest(VariantMatrixState):
    """Matrix state plus the key of the variant being edited."""

    color_id: Optional[str] = None
    size_id: str = Field(..., min_length=1)

    @field_validator("color_id", mode="before")
    @classmethod
    def blank_color_is_none(cls, v):
        return blank_color_to_none(v)


class VariantRemoveRequest(VariantTargetRequest):
    """Remove one variant card."""


class VariantPricingRequest(BaseSchema):
    """
    Edit the price fields of one variant.

    Omitted fields keep their current value.
    """

    variant: VariantRecord
    mrp_price: Optional[float] = Field(None, ge=0)
    rsp_price: Optional[float] = Field(None, ge=0)
    cost_price: Optional[float] = Field(None, ge=0)


class MediaAssignRequest(VariantMatrixState):
    """Fan uploaded media out to every variant of the chosen sizes."""

    urls: list[str] = Field(..., min_length=1, description="Uploaded media URLs")
    media_type: MediaType = MediaType.IMAGE
    target_size_ids: list[str] = Field(default_factory=list)

    @field_validator("urls", mode="before")
    @classmethod
    def drop_blank_urls(cls, v):
        """Blank entries are dropped; an all-blank list fails min_length."""
        return dedupe_ids(v) if isinstance(v, list) else v

    @field_validator("target_size_ids", mode="before")
    @classmethod
    def unique_targets(cls, v):
        return dedupe_ids(v)


class MediaLinkRequest(VariantTargetRequest):
    """Attach a pasted media link to one variant."""

    url: str = Field(..., min_length=1)
    media_type: MediaType = MediaType.IMAGE
    verify: bool = Field(True, description="Probe image links before keeping them")


class MediaLinkResponse(VariantMatrixState):
    """Matrix after a link was added, or unchanged if it was discarded."""

    accepted: bool
    url: Optional[str] = None
    message: Optional[str] = None


class MediaIndexRemoveRequest(VariantTargetRequest):
    """Remove the media at one position of one variant."""

    media_type: MediaType = MediaType.IMAGE
    index: int = Field(..., ge=0)


class MediaRemoveEverywhereRequest(VariantMatrixState):
    """Remove one URL from every variant."""

    url: str = Field(..., min_length=1)
    media_type: MediaType = MediaType.IMAGE
