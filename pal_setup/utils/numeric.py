"""
Fixed-point decimal helpers.

All prices and statistics in the pipeline are ``decimal.Decimal`` values held
at a fixed number of fractional digits (the scale). This module owns every
conversion boundary: text and float parsing, re-quantization after
multiplication or division, tick alignment and output formatting.
"""

from decimal import (
    ROUND_HALF_EVEN,
    Context,
    Decimal,
    InvalidOperation,
    localcontext,
)
from typing import Union

from ..errors import NumericFormatError

DEFAULT_SCALE = 7               # Fractional digits kept for prices and statistics
EQUITY_TICK = Decimal("0.01")   # Default tick when no instrument tick is known

# Precision covers 7 fractional digits on prices up to 10**20
DECIMAL_CONTEXT = Context(prec=28, rounding=ROUND_HALF_EVEN)

NumberLike = Union[str, int, float, Decimal]


def _exponent(scale: int) -> Decimal:
    return Decimal(1).scaleb(-scale)


def to_decimal(value: NumberLike, scale: int = DEFAULT_SCALE) -> Decimal:
    """
    Convert text, int, float or Decimal to a Decimal at the given scale.

    Floats are converted through their shortest repr so that 0.1 becomes
    Decimal("0.1") rather than its binary expansion.

    Args:
        value: Value to convert
        scale: Number of fractional digits to keep

    Returns:
        Decimal quantized to ``scale`` digits (ROUND_HALF_EVEN)

    Raises:
        NumericFormatError: If the value is not a finite number
    """
    if isinstance(value, bool):
        raise NumericFormatError(f"Boolean is not a number: {value!r}", text=repr(value))

    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            raise NumericFormatError("Empty numeric field", text=value)
        try:
            result = Decimal(text)
        except InvalidOperation:
            raise NumericFormatError(f"Invalid numeric literal '{value}'", text=value)
    else:
        raise NumericFormatError(f"Unsupported numeric type {type(value).__name__}", text=repr(value))

    if not result.is_finite():
        raise NumericFormatError(f"Numeric value must be finite, got '{value}'", text=str(value))

    try:
        return quantize(result, scale)
    except InvalidOperation:
        raise NumericFormatError(
            f"Numeric value '{value}' has too many digits for scale {scale}", text=str(value)
        )


def quantize(value: Decimal, scale: int = DEFAULT_SCALE) -> Decimal:
    """Round a Decimal half-even to ``scale`` fractional digits."""
    with localcontext(DECIMAL_CONTEXT):
        return value.quantize(_exponent(scale))


def format_decimal(value: Decimal, scale: int = DEFAULT_SCALE) -> str:
    """
    Format a Decimal with exactly ``scale`` fractional digits.

    Output never uses exponent notation and is identical on every platform.
    """
    return format(quantize(value, scale), "f")


def is_tick_multiple(value: Decimal, tick: Decimal) -> bool:
    """Check whether a price is an integer multiple of the tick size."""
    if tick <= 0:
        raise ValueError(f"Tick size must be positive, got {tick}")
    with localcontext(DECIMAL_CONTEXT):
        return value % tick == 0


def round_to_tick(value: Decimal, tick: Decimal, scale: int = DEFAULT_SCALE) -> Decimal:
    """Round a price half-even to the nearest multiple of the tick size."""
    if tick <= 0:
        raise ValueError(f"Tick size must be positive, got {tick}")
    with localcontext(DECIMAL_CONTEXT):
        ticks = (value / tick).to_integral_value(rounding=ROUND_HALF_EVEN)
        return quantize(ticks * tick, scale)


def to_scaled_int(value: Decimal, scale: int = DEFAULT_SCALE) -> int:
    """Map a Decimal onto the integer grid of the scale (value * 10**scale)."""
    with localcontext(DECIMAL_CONTEXT):
        return int(quantize(value, scale).scaleb(scale))


def from_scaled_int(value: int, scale: int = DEFAULT_SCALE) -> Decimal:
    """Inverse of ``to_scaled_int``."""
    with localcontext(DECIMAL_CONTEXT):
        return quantize(Decimal(value).scaleb(-scale), scale)
