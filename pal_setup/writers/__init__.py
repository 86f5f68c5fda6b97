"""
Output writers for the artifacts consumed by Price Action Lab.

Series dumps in a vendor layout, stop/target threshold files and the
single-line configuration record.
"""

from .base import BaseWriter, WriteResult
from .calibration_writer import ConfigRecord, ConfigRecordWriter, StopTargetWriter
from .series_writer import TimeSeriesWriter

__all__ = [
    "BaseWriter",
    "WriteResult",
    "TimeSeriesWriter",
    "StopTargetWriter",
    "ConfigRecord",
    "ConfigRecordWriter",
]
