"""
Calendar date codecs for vendor files and config artifacts.

Vendor exports encode bar dates as ``YYYYMMDD``, ``MM/DD/YYYY`` or
``YYYY-MM-DD``. Each codec parses strictly: the text must match the layout
exactly and name a real calendar day.
"""

import re
from datetime import date
from typing import Callable

_COMPACT = re.compile(r"^(\d{4})(\d{2})(\d{2})$")
_US = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def _build(year: str, month: str, day: str, text: str) -> date:
    try:
        return date(int(year), int(month), int(day))
    except ValueError as e:
        raise ValueError(f"'{text}' is not a calendar date: {e}")


def parse_compact_date(text: str) -> date:
    """Parse ``YYYYMMDD``."""
    match = _COMPACT.match(text.strip())
    if not match:
        raise ValueError(f"'{text}' does not match YYYYMMDD")
    return _build(*match.groups(), text)


def parse_us_date(text: str) -> date:
    """Parse ``MM/DD/YYYY`` (leading zeros optional)."""
    match = _US.match(text.strip())
    if not match:
        raise ValueError(f"'{text}' does not match MM/DD/YYYY")
    month, day, year = match.groups()
    return _build(year, month, day, text)


def parse_iso_date(text: str) -> date:
    """Parse ``YYYY-MM-DD``."""
    match = _ISO.match(text.strip())
    if not match:
        raise ValueError(f"'{text}' does not match YYYY-MM-DD")
    return _build(*match.groups(), text)


def format_compact_date(value: date) -> str:
    """Format as ``YYYYMMDD``, the form used in config records."""
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


def format_us_date(value: date) -> str:
    """Format as zero-padded ``MM/DD/YYYY``."""
    return f"{value.month:02d}/{value.day:02d}/{value.year:04d}"


def first_matching(*parsers: Callable[[str], date]) -> Callable[[str], date]:
    """Combine codecs, returning the first that accepts the text."""
    def parse(text: str) -> date:
        errors = []
        for parser in parsers:
            try:
                return parser(text)
            except ValueError as e:
                errors.append(str(e))
        raise ValueError("; ".join(errors))
    return parse
