"""
PalSetup - Price Action Lab data preparation

Reads vendor OHLC exports into a validated time series, splits it into
in-sample and out-of-sample segments and calibrates stop/target thresholds
from robust statistics of the in-sample rate of change.
"""

__version__ = "0.1.0"
__author__ = "PalSetup Team"
