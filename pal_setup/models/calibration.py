"""Data models for calibration results"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class DispersionSummary:
    """All dispersion statistics of one sample"""
    sample_size: int
    median: Decimal
    qn: Decimal
    mad: Decimal
    std_dev: Decimal


@dataclass(frozen=True)
class DateRange:
    """Inclusive first and last date of a series segment"""
    first: date
    last: date


@dataclass(frozen=True)
class CalibrationResult:
    """Stop/target calibration derived from the in-sample rate of change"""
    roc_period: int
    statistics: DispersionSummary
    stop: Decimal          # median(ROC) + Qn(ROC)
    half_stop: Decimal     # stop / 2

    @property
    def median(self) -> Decimal:
        return self.statistics.median

    @property
    def qn(self) -> Decimal:
        return self.statistics.qn


@dataclass(frozen=True)
class PalSetupResult:
    """Everything one pipeline run produced"""
    symbol: str
    time_frame_name: str
    total_entries: int
    in_sample: DateRange
    out_of_sample: DateRange
    in_sample_entries: int
    out_of_sample_entries: int
    calibration: CalibrationResult
    output_files: dict[str, str]
