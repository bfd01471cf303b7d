"""
Color and size reference schemas.

Colors and sizes are the two axes of the variant matrix.
"""

from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from models.base import BaseSchema

HEX_PATTERN = r"^#[0-9A-Fa-f]{6}$"


class ColorCreate(BaseSchema):
    """Create a color swatch."""

    name: str = Field(..., min_length=1, max_length=60, examples=["Red"])
    hex_code: str = Field(..., pattern=HEX_PATTERN, examples=["#FF0000"])

    @field_validator("hex_code")
    @classmethod
    def hex_uppercase(cls, v: str) -> str:
        return v.upper()


class ColorUpdate(BaseSchema):
    """Update a color. Only provided fields are updated."""

    name: Optional[str] = Field(None, min_length=1, max_length=60)
    hex_code: Optional[str] = Field(None, pattern=HEX_PATTERN)

    @field_validator("hex_code")
    @classmethod
    def hex_uppercase(cls, v: Optional[str]) -> Optional[str]:
        return v.upper() if v else v


class ColorResponse(BaseSchema):
    """Color row."""

    id: str
    name: str
    hex_code: str
    created_at: Optional[datetime] = None


class SizeResponse(BaseSchema):
    """Size row. Sizes belong to a category."""

    id: str
    name: str
    category_id: Optional[str] = None
