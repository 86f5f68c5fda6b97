"""Stop/target threshold files and the PAL configuration record."""

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Union

from ..models.calibration import DateRange
from ..utils.dates import format_compact_date
from ..utils.numeric import DEFAULT_SCALE, format_decimal
from .base import BaseWriter

PAL_DATA_FORMAT = "PAL"


class StopTargetWriter(BaseWriter):
    """
    Writes a profit target and a stop, one Decimal per line.

    The half variant pairs a half-stop target with the full stop; the full
    variant uses the full stop for both.
    """

    def __init__(self, output_path: Union[str, Path], target: Decimal, stop: Decimal,
                 scale: int = DEFAULT_SCALE, name: str = "stop_target"):
        super().__init__(name, output_path)
        self.target = target
        self.stop = stop
        self.scale = scale

    def render(self) -> list[str]:
        return [format_decimal(self.target, self.scale), format_decimal(self.stop, self.scale)]


@dataclass(frozen=True)
class ConfigRecord:
    """One line of the PAL validation configuration file."""
    symbol: str
    indicator_path: str
    data_path: str
    in_sample: DateRange
    out_of_sample: DateRange
    time_frame_name: str
    data_format: str = PAL_DATA_FORMAT

    def to_fields(self) -> list[str]:
        return [
            self.symbol,
            self.indicator_path,
            self.data_path,
            self.data_format,
            format_compact_date(self.in_sample.first),
            format_compact_date(self.in_sample.last),
            format_compact_date(self.out_of_sample.first),
            format_compact_date(self.out_of_sample.last),
            self.time_frame_name,
        ]


class ConfigRecordWriter(BaseWriter):
    """Writes the single-line configuration record."""

    def __init__(self, output_path: Union[str, Path], record: ConfigRecord,
                 name: str = "config_record"):
        super().__init__(name, output_path)
        self.record = record

    def render(self) -> list[str]:
        return [",".join(self.record.to_fields())]
