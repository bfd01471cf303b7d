"""
Number helpers for currency fields.

Prices are stored as integral units; edits arrive as floats from the form.
"""

from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Union

Number = Union[int, float, Decimal, str]


def round_half_up(value: Number) -> int:
    """
    Round to the nearest integer, halves away from zero.

    Python's round() uses banker's rounding (round(2.5) == 2); the admin
    form and stored prices expect 2.5 -> 3.

    Examples:
        round_half_up(19.5) -> 20
        round_half_up(19.49) -> 19
        round_half_up("7") -> 7

    Raises:
        ValueError: If value is not numeric
    """
    try:
        quantized = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    except InvalidOperation as e:
        raise ValueError(f"Not a number: {value!r}") from e
    return int(quantized)


def coerce_amount(value) -> int:
    """
    Coerce a stored or submitted amount to an integer.

    Missing / null values become 0, the way rows written before a column
    existed come back from the database. Sign is left to the caller's
    validation.
    """
    if value is None or value == "":
        return 0
    return round_half_up(value)
