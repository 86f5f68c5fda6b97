"""
Validating reader that builds a time series from a vendor file.

The reader drives a format adapter line by line, validates every bar and
assembles the accepted bars into an ``OHLCTimeSeries``. It fails fast on the
first bad row; nothing is dropped or repaired except through the explicit
tick policy.
"""

from decimal import Decimal
from pathlib import Path
from typing import Iterable, Iterator, Optional, Union

from ..errors import EmptyInputError, FieldParseError
from ..logging.config import get_logger
from ..utils.numeric import DEFAULT_SCALE
from .models import TimeFrame, VolumeUnit
from .parsers import FormatAdapter
from .series import OHLCTimeSeries
from .validators import BarValidator, TickPolicy

logger = get_logger(__name__)


class ValidatingReader:
    """
    Reads one vendor file into a validated, frozen OHLCTimeSeries.

    Time frame and volume unit are supplied by the caller and apply to the
    whole read.
    """

    def __init__(self, adapter: FormatAdapter, time_frame: TimeFrame = TimeFrame.DAILY,
                 volume_unit: VolumeUnit = VolumeUnit.CONTRACTS,
                 tick: Optional[Decimal] = None,
                 tick_policy: TickPolicy = TickPolicy.ROUND,
                 scale: int = DEFAULT_SCALE):
        self.adapter = adapter
        self.time_frame = time_frame
        self.volume_unit = volume_unit
        self.validator = BarValidator(tick=tick, tick_policy=tick_policy, scale=scale)

    def read_file(self, path: Union[str, Path]) -> OHLCTimeSeries:
        """
        Read and validate a whole file.

        Raises:
            FileNotFoundError: If the file does not exist
            FieldParseError: If a field cannot be decoded
            InvalidBarError: If a bar breaks the OHLC or tick rules
            OutOfOrderError: If dates are not strictly increasing
            EmptyInputError: If the file holds no data rows
            FieldParseError: If a line is not valid UTF-8
        """
        path = Path(path)
        with open(path, "rb") as f:
            data = f.read()
        return self.read_lines(_decode_lines(data), source=str(path))

    def read_lines(self, lines: Iterable[str], source: str = "<lines>") -> OHLCTimeSeries:
        """Read and validate lines from any iterable of strings."""
        series = OHLCTimeSeries(self.time_frame, self.volume_unit)
        previous_date = None
        skipped_headers = 0
        seen_data = False

        for line_number, line in enumerate(lines, start=1):
            text = line.rstrip("\r\n")
            if not text.strip():
                continue

            if not seen_data and self.adapter.is_header(text, line_number):
                skipped_headers += 1
                continue

            raw = self.adapter.parse_line(text, line_number)
            entry = self.validator.validate_bar(raw, previous_date)
            series.add_entry(entry)
            previous_date = entry.date
            seen_data = True

        if not seen_data:
            raise EmptyInputError(f"No data rows found in {source}", source=source)

        logger.info(
            "Time series read",
            source=source,
            format=self.adapter.name,
            entries=len(series),
            headers_skipped=skipped_headers,
            first_date=series.first_date.isoformat(),
            last_date=series.last_date.isoformat()
        )

        return series.freeze()


def _decode_lines(data: bytes) -> Iterator[str]:
    """Decode raw file content line by line, stripping a leading BOM."""
    for line_number, raw in enumerate(data.splitlines(), start=1):
        encoding = "utf-8-sig" if line_number == 1 else "utf-8"
        try:
            yield raw.decode(encoding)
        except UnicodeDecodeError as e:
            raise FieldParseError(
                f"Line {line_number}: not valid UTF-8 ({e.reason} at byte {e.start})",
                line=line_number,
                reason=f"invalid UTF-8: {e.reason}"
            )
