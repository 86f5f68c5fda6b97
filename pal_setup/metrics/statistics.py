"""Median, MAD and standard deviation over Decimal values"""

from decimal import Decimal, localcontext
from typing import Iterable, Union

from ..data.series import NumericTimeSeries
from ..errors import EmptyInputError, InsufficientDataError
from ..utils.numeric import DECIMAL_CONTEXT, DEFAULT_SCALE, quantize

# Scales MAD to estimate the standard deviation of normally distributed data
MAD_NORMAL_CONSISTENCY = Decimal("1.4826")

Values = Union[NumericTimeSeries, Iterable[Decimal]]


def as_values(data: Values) -> list[Decimal]:
    """Extract the values of a numeric series, or copy an iterable of Decimals."""
    if isinstance(data, NumericTimeSeries):
        return data.values()
    return list(data)


def median(data: Values, scale: int = DEFAULT_SCALE) -> Decimal:
    """
    Calculate the median.

    For an even count the median is the mean of the two central order
    statistics, rounded half-even to ``scale`` digits.

    Raises:
        EmptyInputError: If there are no values
    """
    values = sorted(as_values(data))
    n = len(values)
    if n == 0:
        raise EmptyInputError("Median of an empty set is undefined", source="median")

    middle = n // 2
    if n % 2 == 1:
        return quantize(values[middle], scale)

    with localcontext(DECIMAL_CONTEXT):
        return quantize((values[middle - 1] + values[middle]) / 2, scale)


def mad(data: Values, normal_consistency: bool = False, scale: int = DEFAULT_SCALE) -> Decimal:
    """
    Calculate the median absolute deviation from the median.

    Args:
        data: Values
        normal_consistency: Multiply by 1.4826 so the result estimates a
            normal standard deviation (default: raw MAD)
        scale: Fractional digits of the result

    Raises:
        EmptyInputError: If there are no values
    """
    values = as_values(data)
    center = median(values, scale)

    with localcontext(DECIMAL_CONTEXT):
        deviations = [abs(value - center) for value in values]
        result = median(deviations, scale)
        if normal_consistency:
            result = result * MAD_NORMAL_CONSISTENCY
        return quantize(result, scale)


def std_dev(data: Values, scale: int = DEFAULT_SCALE) -> Decimal:
    """
    Calculate the sample standard deviation (n - 1 denominator).

    Raises:
        InsufficientDataError: If there are fewer than two values
    """
    values = as_values(data)
    n = len(values)
    if n < 2:
        raise InsufficientDataError(
            f"Sample standard deviation needs at least 2 values, got {n}",
            required_count=2,
            available_count=n
        )

    with localcontext(DECIMAL_CONTEXT):
        mean = sum(values, Decimal(0)) / n
        variance = sum(((value - mean) ** 2 for value in values), Decimal(0)) / (n - 1)
        return quantize(variance.sqrt(), scale)

