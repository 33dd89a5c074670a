"""Exact decimal storage for prices, coordinates and areas.

Decimal columns are written as exact decimal text quantized to the column
scale and read back as plain numbers, so no binary floating point rounding
is introduced at the storage boundary:

    >>> to_storage(199999.99, scale=2)
    '199999.99'
    >>> from_storage("40.12345600")
    40.123456
"""
import math
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from sqlalchemy import Numeric
from sqlalchemy.types import TypeDecorator

Number = Union[int, float, Decimal, str]


class DataIntegrityError(ValueError):
    """Raised when a stored decimal value cannot be parsed back into a number."""


def to_storage(
    value: Number, scale: int, precision: Optional[int] = None, rounding: str = ROUND_HALF_UP
) -> str:
    """Serialize a number to decimal text with exactly `scale` fractional digits.

    Floats are converted through their shortest repr, so 0.1 becomes "0.10"
    rather than the binary expansion of 0.1. Rounds half up by default, the way
    numeric columns do; `rounding` takes any `decimal` rounding mode. Raises
    ValueError for non-finite input or for values with more integer digits
    than `precision - scale`.
    """
    if isinstance(value, float) and not math.isfinite(value):
        raise ValueError(f"Cannot store non-finite decimal {value!r}")

    try:
        number = Decimal(repr(value) if isinstance(value, float) else str(value))
        if not number.is_finite():
            raise ValueError(f"Cannot store non-finite decimal {value!r}")
        quantized = number.quantize(Decimal(1).scaleb(-scale), rounding=rounding)
    except InvalidOperation:
        raise ValueError(f"Not a decimal value: {value!r}")

    if precision is not None and quantized and quantized.adjusted() + 1 > precision - scale:
        raise ValueError(
            f"{value!r} does not fit in a decimal({precision}, {scale}) column"
        )

    return format(quantized, "f")


def from_storage(raw: Optional[Number]) -> Optional[float]:
    """Parse a stored decimal (text, Decimal or driver float) back into a number."""
    if raw is None:
        return None

    try:
        number = Decimal(repr(raw) if isinstance(raw, float) else str(raw).strip())
    except InvalidOperation:
        raise DataIntegrityError(f"Malformed stored decimal: {raw!r}")

    if not number.is_finite():
        raise DataIntegrityError(f"Malformed stored decimal: {raw!r}")

    return float(number)


class ExactDecimal(TypeDecorator):
    """Numeric column that applies `to_storage` on bind and `from_storage` on read.

    Bound parameters include filter comparisons, so `Property.price >= 1000`
    compares against the same exact text representation that was stored.
    """

    impl = Numeric
    cache_ok = True

    def __init__(self, precision: int, scale: int):
        super().__init__(precision=precision, scale=scale, asdecimal=True)
        self.precision = precision
        self.scale = scale

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return Decimal(to_storage(value, self.scale, self.precision))

    def process_result_value(self, value, dialect):
        return from_storage(value)
