"""
Vendor-specific format adapters for converting text lines to raw bars.

Each adapter knows one export layout: its column order, date encoding and
delimiter. An adapter maps a single physical line to a ``RawBar`` and back;
it holds no state between lines and performs no cross-field checks, which
are the validating reader's job.

Supported formats (by integer code):
    1  CSI              YYYYMMDD,open,high,low,close,volume,open_interest
    2  CSI Extended     YYYYMMDD,open,high,low,close,volume,open_interest,roll_date,unadjusted_close
    3  TradeStation     "Date","Time","Open","High","Low","Close","Vol","OI"  (MM/DD/YYYY)
    4  Pinnacle         MM/DD/YYYY,open,high,low,close,volume,open_interest
    5  PAL              YYYYMMDD,open,high,low,close
"""

import csv
from abc import ABC
from datetime import date
from decimal import Decimal
from typing import Callable, Optional

from ..errors import FieldParseError, NumericFormatError, UnsupportedFormatError
from ..utils.dates import (
    first_matching,
    format_compact_date,
    format_us_date,
    parse_compact_date,
    parse_iso_date,
    parse_us_date,
)
from ..utils.numeric import DEFAULT_SCALE, format_decimal, to_decimal
from .models import OHLCEntry, RawBar

PRICE_COLUMNS = ("open", "high", "low", "close")


def format_volume(volume: Decimal, scale: int = DEFAULT_SCALE) -> str:
    """Format volume as an integer when it has no fractional part."""
    if volume == volume.to_integral_value():
        return str(int(volume))
    return format_decimal(volume, scale)


class FormatAdapter(ABC):
    """
    Base class for vendor format adapters.

    Subclasses declare their layout through class attributes; the parsing
    and formatting logic here is shared.
    """

    code: int = 0
    name: str = ""
    delimiter: str = ","
    columns: tuple[str, ...] = ()           # Column names in file order
    required_columns: int = 0               # Fields a data line must have
    header: Optional[str] = None            # Header line written by format_header
    parse_date: Callable[[str], date] = staticmethod(parse_compact_date)
    format_date: Callable[[date], str] = staticmethod(format_compact_date)

    def __init__(self, scale: int = DEFAULT_SCALE):
        self.scale = scale

    def __repr__(self) -> str:
        return f"{type(self).__name__}(code={self.code})"

    def split(self, line: str, line_number: Optional[int] = None) -> list[str]:
        """Split a line into stripped fields."""
        try:
            fields = next(csv.reader([line], delimiter=self.delimiter, quotechar='"'))
        except (csv.Error, StopIteration) as e:
            raise FieldParseError(
                f"Line {line_number}: malformed {self.name} line: {e}",
                line=line_number,
                reason=str(e)
            )
        return [field.strip() for field in fields]

    def is_header(self, line: str, line_number: Optional[int] = None) -> bool:
        """Check whether a line is this format's column header."""
        fields = self.split(line, line_number)
        return bool(fields) and fields[0].strip('"').strip().lower() == "date"

    def parse_line(self, line: str, line_number: Optional[int] = None) -> RawBar:
        """
        Decode one data line into a RawBar.

        Args:
            line: Physical text line without its terminator
            line_number: 1-based line number for error reporting

        Returns:
            RawBar with decoded date, prices and volume

        Raises:
            FieldParseError: If the line has too few fields or a field cannot be decoded
        """
        fields = self.split(line, line_number)

        if len(fields) < self.required_columns:
            raise FieldParseError(
                f"Line {line_number}: {self.name} line needs {self.required_columns} fields, got {len(fields)}",
                line=line_number,
                reason=f"expected {self.required_columns} fields, got {len(fields)}"
            )

        values = dict(zip(self.columns, fields))
        bar_date = self._decode_date(values["date"], line_number)

        decoded = {}
        for column in self.columns[:self.required_columns]:
            if column in ("date", "time"):
                continue
            decoded[column] = self._decode_number(column, values[column], line_number)

        self._decode_extra(values, line_number)

        return RawBar(
            date=bar_date,
            open=decoded["open"],
            high=decoded["high"],
            low=decoded["low"],
            close=decoded["close"],
            volume=decoded.get("volume", Decimal(0)),
            line=line_number
        )

    def format_header(self) -> Optional[str]:
        """Header line for this format, or None if it has none."""
        return self.header

    def format_entry(self, entry: OHLCEntry) -> str:
        """Render one entry as a line of this format (no terminator)."""
        fields = []
        for column in self.columns[:self.required_columns]:
            fields.append(self._format_column(column, entry))
        return self.delimiter.join(fields)

    def _format_column(self, column: str, entry: OHLCEntry) -> str:
        if column == "date":
            return self.format_date(entry.date)
        if column in PRICE_COLUMNS:
            return format_decimal(getattr(entry, column), self.scale)
        if column == "volume":
            return format_volume(entry.volume, self.scale)
        raise ValueError(f"{self.name} cannot format column '{column}'")

    def _decode_date(self, text: str, line_number: Optional[int]) -> date:
        try:
            return self.parse_date(text)
        except ValueError as e:
            raise FieldParseError(
                f"Line {line_number}: invalid date '{text}': {e}",
                line=line_number,
                column="date",
                reason=str(e)
            )

    def _decode_number(self, column: str, text: str, line_number: Optional[int]) -> Decimal:
        try:
            return to_decimal(text, self.scale)
        except NumericFormatError as e:
            raise FieldParseError(
                f"Line {line_number}: invalid {column} '{text}': {e}",
                line=line_number,
                column=column,
                reason=str(e)
            )

    def _decode_extra(self, values: dict[str, str], line_number: Optional[int]) -> None:
        """Hook for formats with additional columns that must decode."""
        pass


class CSIFormatAdapter(FormatAdapter):
    """CSI futures export: YYYYMMDD,open,high,low,close,volume[,open_interest]."""

    code = 1
    name = "CSI"
    columns = ("date", "open", "high", "low", "close", "volume", "open_interest")
    required_columns = 6


class CSIExtendedFormatAdapter(FormatAdapter):
    """CSI extended futures export with open interest, roll date and unadjusted close."""

    code = 2
    name = "CSI Extended"
    columns = ("date", "open", "high", "low", "close", "volume",
               "open_interest", "roll_date", "unadjusted_close")
    required_columns = 9

    def _decode_extra(self, values: dict[str, str], line_number: Optional[int]) -> None:
        for column in ("open_interest", "roll_date", "unadjusted_close"):
            self._decode_number(column, values[column], line_number)

    def _format_column(self, column: str, entry: OHLCEntry) -> str:
        if column in ("open_interest", "roll_date"):
            return "0"
        if column == "unadjusted_close":
            return format_decimal(entry.close, self.scale)
        return super()._format_column(column, entry)


class TradeStationFormatAdapter(FormatAdapter):
    """TradeStation text export with a quoted header row and MM/DD/YYYY dates."""

    code = 3
    name = "TradeStation"
    columns = ("date", "time", "open", "high", "low", "close", "volume", "open_interest")
    required_columns = 7
    header = '"Date","Time","Open","High","Low","Close","Vol","OI"'
    parse_date = staticmethod(parse_us_date)
    format_date = staticmethod(format_us_date)

    def _format_column(self, column: str, entry: OHLCEntry) -> str:
        if column == "time":
            return "0000"
        return super()._format_column(column, entry)

    def format_entry(self, entry: OHLCEntry) -> str:
        fields = [self._format_column(column, entry) for column in self.columns[:self.required_columns]]
        fields.append("0")
        return self.delimiter.join(fields)


class PinnacleFormatAdapter(FormatAdapter):
    """Pinnacle Data export: MM/DD/YYYY,open,high,low,close,volume[,open_interest]."""

    code = 4
    name = "Pinnacle"
    columns = ("date", "open", "high", "low", "close", "volume", "open_interest")
    required_columns = 6
    parse_date = staticmethod(parse_us_date)
    format_date = staticmethod(format_us_date)


class PALFormatAdapter(FormatAdapter):
    """Price Action Lab layout: date,open,high,low,close with no volume."""

    code = 5
    name = "PAL"
    columns = ("date", "open", "high", "low", "close")
    required_columns = 5
    parse_date = staticmethod(first_matching(parse_compact_date, parse_iso_date))


FORMAT_ADAPTERS: dict[int, type[FormatAdapter]] = {
    adapter.code: adapter
    for adapter in (
        CSIFormatAdapter,
        CSIExtendedFormatAdapter,
        TradeStationFormatAdapter,
        PinnacleFormatAdapter,
        PALFormatAdapter,
    )
}


def get_format_adapter(code: int, scale: int = DEFAULT_SCALE) -> FormatAdapter:
    """
    Create the adapter registered for a vendor format code.

    Raises:
        UnsupportedFormatError: If the code is unknown
    """
    adapter_class = FORMAT_ADAPTERS.get(code)
    if adapter_class is None:
        choices = sorted(FORMAT_ADAPTERS)
        raise UnsupportedFormatError(
            f"Unknown file type {code}; expected one of "
            + ", ".join(f"{c} = {FORMAT_ADAPTERS[c].name}" for c in choices),
            value=code,
            choices=choices
        )
    return adapter_class(scale=scale)


def describe_formats() -> str:
    """One-line summary of format codes for usage messages."""
    return ", ".join(f"{code} = {adapter.name}" for code, adapter in sorted(FORMAT_ADAPTERS.items()))
