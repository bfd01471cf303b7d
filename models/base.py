"""
Base schemas and helpers for all models.
"""

from pydantic import BaseModel, ConfigDict
from typing import Optional


class BaseSchema(BaseModel):
    """
    Base for all schemas.

    Features:
        - Auto-trim whitespace from strings
        - Validate on attribute assignment
        - Allow ORM objects (from_attributes)
    """
    model_config = ConfigDict(
        from_attributes=True,
        str_strip_whitespace=True,
        validate_assignment=True
    )


def dedupe_ids(values: Optional[list[str]]) -> list[str]:
    """
    Drop blanks and repeats from an id list, keeping first occurrences.

    Axis selections are sets conceptually, but list order drives the
    enumeration order of the variant matrix.
    """
    seen: list[str] = []
    for value in values or []:
        if value is None:
            continue
        value = str(value).strip()
        if value and value not in seen:
            seen.append(value)
    return seen
