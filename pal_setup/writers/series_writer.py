"""Time series dump in a vendor text layout."""

from pathlib import Path
from typing import Optional, Union

from ..data.parsers import FormatAdapter, PALFormatAdapter
from ..data.series import OHLCTimeSeries
from .base import BaseWriter


class TimeSeriesWriter(BaseWriter):
    """
    Writes every entry of a series through a format adapter.

    Reading the file back with the same adapter reproduces the entries.
    """

    def __init__(self, output_path: Union[str, Path], series: OHLCTimeSeries,
                 adapter: Optional[FormatAdapter] = None, name: str = "time_series"):
        super().__init__(name, output_path)
        self.series = series
        self.adapter = adapter or PALFormatAdapter()

    def render(self) -> list[str]:
        lines = []
        header = self.adapter.format_header()
        if header is not None:
            lines.append(header)
        lines.extend(self.adapter.format_entry(entry) for entry in self.series)
        return lines
