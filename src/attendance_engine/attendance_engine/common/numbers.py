from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[int, float, Decimal]

_CENT = Decimal("0.01")


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # 1.005 -> Decimal("1.005"), not the binary expansion
    return Decimal(str(value))


def quantize2(value: Number) -> Decimal:
    """Round half-up to 2 decimals."""
    return to_decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP)
