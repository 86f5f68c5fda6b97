"""Rate-of-change transform and robust statistics engine"""

from .calculator import CalibrationCalculator, summarize
from .qn import RobustQn, qn
from .roc import RocMode, roc_series
from .statistics import mad, median, std_dev

__all__ = [
    "CalibrationCalculator",
    "RobustQn",
    "RocMode",
    "qn",
    "roc_series",
    "median",
    "mad",
    "std_dev",
    "summarize",
]
