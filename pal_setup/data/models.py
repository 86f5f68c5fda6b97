"""
Canonical data models for validated price data.

This module defines the immutable bar types produced by the format adapters
and the validating reader, plus the enumerations fixed for a whole series.
"""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from ..errors import InvalidBarError, UnsupportedFormatError


class TimeFrame(Enum):
    """Bar granularity. The value is the name written to config records."""
    DAILY = "Daily"
    WEEKLY = "Weekly"
    MONTHLY = "Monthly"
    INTRADAY = "Intraday"

    @classmethod
    def from_name(cls, name: str) -> "TimeFrame":
        """Look up a time frame by its exact, case-sensitive name."""
        for time_frame in cls:
            if time_frame.value == name:
                return time_frame
        choices = [tf.value for tf in cls]
        raise UnsupportedFormatError(
            f"Unknown time frame '{name}', expected one of {', '.join(choices)}",
            value=name,
            choices=choices
        )


class VolumeUnit(Enum):
    """Unit of the volume column."""
    CONTRACTS = "contracts"
    SHARES = "shares"


def ohlc_violation(open: Decimal, high: Decimal, low: Decimal,
                   close: Decimal, volume: Decimal) -> Optional[str]:
    """
    Name the first broken bar relation, or None for a valid bar.

    Checks low <= min(open, close) <= max(open, close) <= high and volume >= 0.
    """
    if high < low:
        return "high below low"
    if high < open:
        return "high below open"
    if high < close:
        return "high below close"
    if low > open:
        return "low above open"
    if low > close:
        return "low above close"
    if volume < 0:
        return "volume negative"
    return None


@dataclass(frozen=True)
class RawBar:
    """Fields decoded from one input line, before cross-field validation."""
    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal
    line: Optional[int] = None    # Physical line number in the source file


@dataclass(frozen=True)
class OHLCEntry:
    """Validated OHLC bar."""
    date: date
    open: Decimal
    high: Decimal
    low: Decimal
    close: Decimal
    volume: Decimal = Decimal(0)

    def __post_init__(self):
        reason = ohlc_violation(self.open, self.high, self.low, self.close, self.volume)
        if reason is not None:
            raise InvalidBarError(
                f"Invalid bar on {self.date.isoformat()}: {reason} "
                f"(O={self.open}, H={self.high}, L={self.low}, C={self.close}, V={self.volume})",
                date=self.date,
                reason=reason
            )

    @classmethod
    def from_raw(cls, raw: RawBar) -> "OHLCEntry":
        """Create an entry from decoded fields."""
        return cls(
            date=raw.date,
            open=raw.open,
            high=raw.high,
            low=raw.low,
            close=raw.close,
            volume=raw.volume
        )
