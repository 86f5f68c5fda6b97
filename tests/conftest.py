"""Pytest configuration and shared fixtures."""

from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path
from typing import Callable, List

import pytest

from pal_setup.data.models import OHLCEntry, TimeFrame, VolumeUnit
from pal_setup.data.series import OHLCTimeSeries

# In-sample closes whose one-bar changes are exactly 1..9
CALIBRATION_CLOSES = ["100", "101", "103", "106", "110", "115", "121", "128", "136", "145"]
OUT_OF_SAMPLE_CLOSES = ["150", "148", "152"]


def make_entry(day: date, close: str, spread: str = "1") -> OHLCEntry:
    """Bar opening and closing at ``close`` with a symmetric high/low spread."""
    price = Decimal(close)
    return OHLCEntry(
        date=day,
        open=price,
        high=price + Decimal(spread),
        low=price - Decimal(spread),
        close=price,
        volume=Decimal(1000)
    )


def make_series(closes: List[str], start: date = date(2020, 1, 1),
                time_frame: TimeFrame = TimeFrame.DAILY) -> OHLCTimeSeries:
    """Series with one bar per calendar day starting at ``start``."""
    return OHLCTimeSeries(
        time_frame,
        VolumeUnit.CONTRACTS,
        (make_entry(start + timedelta(days=i), close) for i, close in enumerate(closes))
    )


def pal_lines(closes: List[str], start: date = date(2020, 1, 1)) -> List[str]:
    """PAL layout lines (YYYYMMDD,open,high,low,close) for the given closes."""
    lines = []
    for i, close in enumerate(closes):
        day = start + timedelta(days=i)
        price = Decimal(close)
        lines.append(f"{day:%Y%m%d},{price},{price + 1},{price - 1},{price}")
    return lines


@pytest.fixture
def write_lines(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing text lines to a file under tmp_path."""
    def write(lines: List[str], name: str = "data.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines))
        return path
    return write


@pytest.fixture
def calibration_series() -> OHLCTimeSeries:
    """Ten daily bars whose closing-price changes are 1, 2, ..., 9."""
    return make_series(CALIBRATION_CLOSES)


@pytest.fixture
def calibration_file_lines() -> List[str]:
    """Thirteen PAL lines: ten in-sample bars followed by three out-of-sample bars."""
    return pal_lines(CALIBRATION_CLOSES + OUT_OF_SAMPLE_CLOSES)


@pytest.fixture
def csi_lines() -> List[str]:
    """CSI export lines with and without open interest."""
    return [
        "20230103,4000.25,4025.50,3990.00,4010.75,125000,2500000",
        "20230104,4010.75,4050.00,4005.25,4045.00,130500",
        "20230105,4045.00,4046.00,4000.00,4001.50,98000,2501000",
    ]


@pytest.fixture
def tradestation_lines() -> List[str]:
    """TradeStation export with its quoted header row."""
    return [
        '"Date","Time","Open","High","Low","Close","Vol","OI"',
        "01/03/2023,0000,4000.25,4025.50,3990.00,4010.75,125000,2500000",
        "01/04/2023,0000,4010.75,4050.00,4005.25,4045.00,130500,2501000",
    ]


@pytest.fixture
def series_factory() -> Callable[..., OHLCTimeSeries]:
    """Factory building a daily series from a list of closing prices."""
    return make_series


@pytest.fixture
def pal_lines_factory() -> Callable[..., List[str]]:
    """Factory rendering closing prices as PAL layout lines."""
    return pal_lines
