"""
Chronologically ordered time series containers.

An ``OHLCTimeSeries`` maps dates to validated bars and a
``NumericTimeSeries`` maps dates to single Decimal values. Both only accept
dates strictly after their current last date, so iteration order is always
ascending and dates are always unique. Derived series copy what they need
and never hold a live reference into their source.
"""

from datetime import date
from decimal import ROUND_FLOOR, Decimal
from typing import Iterable, Iterator, Optional

from ..errors import InsufficientDataError, OutOfOrderError
from ..utils.numeric import DECIMAL_CONTEXT
from .models import OHLCEntry, TimeFrame, VolumeUnit

DEFAULT_IN_SAMPLE_RATIO = Decimal("0.8")


class SeriesFrozenError(RuntimeError):
    """Raised when adding to a series that a computation has consumed."""
    pass


class OHLCTimeSeries:
    """Ordered mapping of date to OHLCEntry with a fixed time frame and volume unit."""

    def __init__(self, time_frame: TimeFrame, volume_unit: VolumeUnit,
                 entries: Optional[Iterable[OHLCEntry]] = None):
        self.time_frame = time_frame
        self.volume_unit = volume_unit
        self._entries: dict[date, OHLCEntry] = {}
        self._frozen = False

        for entry in entries or ():
            self.add_entry(entry)

    def add_entry(self, entry: OHLCEntry) -> None:
        """
        Append an entry dated after the current last entry.

        Raises:
            OutOfOrderError: If the entry date is not strictly increasing
            SeriesFrozenError: If the series has been frozen
        """
        if self._frozen:
            raise SeriesFrozenError("Cannot add entries to a frozen time series")

        last = self.last_date if self._entries else None
        if last is not None and entry.date <= last:
            relation = "duplicates" if entry.date == last else "precedes"
            raise OutOfOrderError(
                f"Bar date {entry.date.isoformat()} {relation} previous date {last.isoformat()}",
                date=entry.date,
                previous_date=last
            )
        self._entries[entry.date] = entry

    def freeze(self) -> "OHLCTimeSeries":
        """Make the series read-only and return it."""
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[OHLCEntry]:
        return iter(self._entries.values())

    def __contains__(self, day: object) -> bool:
        return day in self._entries

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OHLCTimeSeries):
            return NotImplemented
        return (self.time_frame == other.time_frame and
                self.volume_unit == other.volume_unit and
                list(self) == list(other))

    def __repr__(self) -> str:
        if not self._entries:
            return f"OHLCTimeSeries({self.time_frame.value}, empty)"
        return (f"OHLCTimeSeries({self.time_frame.value}, {len(self)} entries, "
                f"{self.first_date.isoformat()}..{self.last_date.isoformat()})")

    def get_entry(self, day: date) -> OHLCEntry:
        """Get the entry for a date (KeyError if absent)."""
        return self._entries[day]

    def dates(self) -> list[date]:
        return list(self._entries)

    @property
    def first_date(self) -> date:
        if not self._entries:
            raise InsufficientDataError("Time series is empty", required_count=1, available_count=0)
        return next(iter(self._entries))

    @property
    def last_date(self) -> date:
        if not self._entries:
            raise InsufficientDataError("Time series is empty", required_count=1, available_count=0)
        return next(reversed(self._entries))

    def close_series(self) -> "NumericTimeSeries":
        """Closing prices as an independent numeric series."""
        return self.numeric_series("close")

    def numeric_series(self, field: str) -> "NumericTimeSeries":
        """Project one price field (open, high, low, close, volume) into a numeric series."""
        if field not in ("open", "high", "low", "close", "volume"):
            raise ValueError(f"Unknown bar field '{field}'")
        return NumericTimeSeries(
            self.time_frame,
            ((entry.date, getattr(entry, field)) for entry in self)
        )

    def filter_by_date_range(self, first: date, last: date) -> "OHLCTimeSeries":
        """Copy of the entries dated within [first, last]."""
        if first > last:
            raise ValueError(f"Date range start {first} is after end {last}")
        return OHLCTimeSeries(
            self.time_frame,
            self.volume_unit,
            (entry for entry in self if first <= entry.date <= last)
        )


class NumericTimeSeries:
    """Ordered mapping of date to a single Decimal value."""

    def __init__(self, time_frame: TimeFrame,
                 items: Optional[Iterable[tuple[date, Decimal]]] = None):
        self.time_frame = time_frame
        self._values: dict[date, Decimal] = {}

        for day, value in items or ():
            self.add_value(day, value)

    def add_value(self, day: date, value: Decimal) -> None:
        """Append a value dated after the current last value."""
        if self._values:
            last = next(reversed(self._values))
            if day <= last:
                raise OutOfOrderError(
                    f"Value date {day.isoformat()} is not after previous date {last.isoformat()}",
                    date=day,
                    previous_date=last
                )
        self._values[day] = value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[tuple[date, Decimal]]:
        return iter(self._values.items())

    def __contains__(self, day: object) -> bool:
        return day in self._values

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumericTimeSeries):
            return NotImplemented
        return self.time_frame == other.time_frame and list(self) == list(other)

    def __repr__(self) -> str:
        return f"NumericTimeSeries({self.time_frame.value}, {len(self)} values)"

    def get_value(self, day: date) -> Decimal:
        return self._values[day]

    def dates(self) -> list[date]:
        return list(self._values)

    def values(self) -> list[Decimal]:
        return list(self._values.values())

    def sorted_values(self) -> list[Decimal]:
        """Values in ascending numeric order."""
        return sorted(self._values.values())


def in_sample_count(total: int, ratio: Decimal = DEFAULT_IN_SAMPLE_RATIO) -> int:
    """Number of in-sample entries: floor(ratio * total)."""
    if not Decimal(0) < ratio < Decimal(1):
        raise ValueError(f"In-sample ratio must be between 0 and 1, got {ratio}")
    product = DECIMAL_CONTEXT.multiply(Decimal(total), ratio)
    return int(product.to_integral_value(rounding=ROUND_FLOOR))


def split_in_sample(series: OHLCTimeSeries,
                    ratio: Decimal = DEFAULT_IN_SAMPLE_RATIO) -> tuple[OHLCTimeSeries, OHLCTimeSeries]:
    """
    Partition a series chronologically into in-sample and out-of-sample parts.

    The first floor(ratio * N) entries form the in-sample series, the rest
    the out-of-sample series. Both inherit the source time frame and volume
    unit, own independent copies of their entries and are returned frozen.

    Args:
        series: Source series (already chronologically ordered)
        ratio: Fraction of entries placed in-sample

    Returns:
        Tuple of (in_sample, out_of_sample)
    """
    cutoff = in_sample_count(len(series), ratio)

    in_sample = OHLCTimeSeries(series.time_frame, series.volume_unit)
    out_of_sample = OHLCTimeSeries(series.time_frame, series.volume_unit)

    count = 0
    for entry in series:
        if count < cutoff:
            in_sample.add_entry(entry)
        else:
            out_of_sample.add_entry(entry)
        count += 1

    return in_sample.freeze(), out_of_sample.freeze()
