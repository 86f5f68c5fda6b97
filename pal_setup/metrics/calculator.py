"""Calibration calculator coordinating the ROC transform and statistics"""

from decimal import Decimal, localcontext
from typing import Optional

from ..config.defaults import DefaultConfig, get_default_config
from ..data.series import OHLCTimeSeries
from ..errors import InsufficientDataError
from ..logging.config import get_logger, log_statistic
from ..models.calibration import CalibrationResult, DispersionSummary
from ..utils.numeric import DECIMAL_CONTEXT, DEFAULT_SCALE, quantize
from .qn import qn
from .roc import RocMode, roc_series
from .statistics import Values, as_values, mad, median, std_dev

logger = get_logger(__name__)


def summarize(data: Values, mad_normal_consistency: bool = False,
              scale: int = DEFAULT_SCALE) -> DispersionSummary:
    """
    Compute median, Qn, MAD and sample standard deviation of one sample.

    Raises:
        InsufficientDataError: If there are fewer than two values
    """
    values = as_values(data)
    return DispersionSummary(
        sample_size=len(values),
        median=median(values, scale),
        qn=qn(values, scale),
        mad=mad(values, normal_consistency=mad_normal_consistency, scale=scale),
        std_dev=std_dev(values, scale)
    )


class CalibrationCalculator:
    """
    Derives stop/target values from an in-sample price series.

    Pipeline: closing prices -> rate of change -> median, Qn, MAD, std dev;
    stop = median + Qn. The caller must pass only in-sample data.
    """

    def __init__(self, config: Optional[DefaultConfig] = None):
        self.config = config or get_default_config()
        self.roc_period = self.config.statistics.roc_period
        self.roc_mode = RocMode(self.config.statistics.roc_mode)
        self.scale = self.config.reader.scale

    def calibrate(self, in_sample: OHLCTimeSeries) -> CalibrationResult:
        """
        Calculate the calibration for an in-sample series.

        Args:
            in_sample: Chronologically ordered in-sample bars

        Returns:
            CalibrationResult with statistics, stop and half stop

        Raises:
            InsufficientDataError: If the series yields fewer than two ROC values
        """
        required = self.roc_period + 2
        if len(in_sample) < required:
            raise InsufficientDataError(
                f"Calibration needs at least {required} in-sample bars for ROC period "
                f"{self.roc_period}, got {len(in_sample)}",
                required_count=required,
                available_count=len(in_sample)
            )

        closes = in_sample.close_series()
        roc = roc_series(closes, self.roc_period, self.roc_mode, self.scale)

        statistics = summarize(
            roc,
            mad_normal_consistency=self.config.statistics.mad_normal_consistency,
            scale=self.scale
        )

        for name in ("median", "qn", "mad", "std_dev"):
            log_statistic(logger, name, getattr(statistics, name), statistics.sample_size,
                          context={"roc_period": self.roc_period, "roc_mode": self.roc_mode.value})

        stop = self.stop_value(statistics.median, statistics.qn)
        with localcontext(DECIMAL_CONTEXT):
            half_stop = quantize(stop / 2, self.scale)

        return CalibrationResult(
            roc_period=self.roc_period,
            statistics=statistics,
            stop=stop,
            half_stop=half_stop
        )

    def stop_value(self, roc_median: Decimal, roc_qn: Decimal) -> Decimal:
        """Stop/target distance: median(ROC) + Qn(ROC)."""
        with localcontext(DECIMAL_CONTEXT):
            return quantize(roc_median + roc_qn, self.scale)
