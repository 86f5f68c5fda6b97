"""
Data quality error classifications for price data ingestion and statistics.

These exceptions carry enough context (line number, column, date) to
diagnose a bad input file without re-running it.
"""

import datetime
from typing import Optional, Dict, Any


class DataQualityError(Exception):
    """Base class for problems with input data or computation inputs."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = False


class NumericFormatError(DataQualityError):
    """Text could not be converted to a fixed-point decimal."""

    def __init__(self, message: str, text: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.text = text


class FieldParseError(DataQualityError):
    """A single field of an input line could not be decoded."""

    def __init__(self, message: str, line: Optional[int] = None,
                 column: Optional[str] = None, reason: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.line = line
        self.column = column
        self.reason = reason


class InvalidBarError(DataQualityError):
    """An OHLC bar violates the price ordering or volume rules."""

    def __init__(self, message: str, date: Optional[datetime.date] = None,
                 reason: Optional[str] = None, line: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.date = date
        self.reason = reason
        self.line = line


class OutOfOrderError(DataQualityError):
    """A bar date is not strictly after the previously accepted date."""

    def __init__(self, message: str, date: Optional[datetime.date] = None,
                 previous_date: Optional[datetime.date] = None, line: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.date = date
        self.previous_date = previous_date
        self.line = line


class EmptyInputError(DataQualityError):
    """No usable rows in a file, or a statistic requested over no values."""

    def __init__(self, message: str, source: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.source = source


class InsufficientDataError(DataQualityError):
    """Not enough data points for a calculation."""

    def __init__(self, message: str, required_count: Optional[int] = None,
                 available_count: Optional[int] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.required_count = required_count
        self.available_count = available_count
