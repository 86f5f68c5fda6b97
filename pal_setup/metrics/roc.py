"""Rate-of-change (ROC) transform over numeric time series"""

from enum import Enum

from ..data.series import NumericTimeSeries
from ..errors import DataQualityError, InsufficientDataError
from ..utils.numeric import DECIMAL_CONTEXT, DEFAULT_SCALE, quantize


class RocMode(Enum):
    """How the change between two prices is expressed."""
    ABSOLUTE = "absolute"    # p(t) - p(t-k)
    PERCENT = "percent"      # 100 * (p(t) - p(t-k)) / p(t-k)


def roc_series(series: NumericTimeSeries, period: int = 1,
               mode: RocMode = RocMode.ABSOLUTE,
               scale: int = DEFAULT_SCALE) -> NumericTimeSeries:
    """
    Calculate the rate of change of a numeric series.

    The value at date d_i (i >= period) is the change from d_(i-period) to
    d_i. The result has len(series) - period values dated from the
    (period + 1)-th input date onward.

    Args:
        series: Source series (e.g. closing prices)
        period: Lag k in bars (default 1)
        mode: Absolute difference (default) or percentage change
        scale: Fractional digits of percentage results

    Returns:
        New NumericTimeSeries of changes

    Raises:
        ValueError: If period < 1
        InsufficientDataError: If the series has fewer than period + 1 values
    """
    if period < 1:
        raise ValueError(f"ROC period must be at least 1, got {period}")

    if len(series) < period + 1:
        raise InsufficientDataError(
            f"ROC period {period} needs at least {period + 1} values, got {len(series)}",
            required_count=period + 1,
            available_count=len(series)
        )

    dates = series.dates()
    values = series.values()
    result = NumericTimeSeries(series.time_frame)

    for i in range(period, len(values)):
        current = values[i]
        previous = values[i - period]
        if mode is RocMode.ABSOLUTE:
            change = DECIMAL_CONTEXT.subtract(current, previous)
        else:
            if previous == 0:
                raise DataQualityError(
                    f"Percentage ROC undefined on {dates[i].isoformat()}: previous value is zero",
                    context={"date": dates[i].isoformat(), "period": period}
                )
            change = quantize(
                DECIMAL_CONTEXT.divide(DECIMAL_CONTEXT.multiply(current - previous, 100), previous),
                scale
            )
        result.add_value(dates[i], change)

    return result
