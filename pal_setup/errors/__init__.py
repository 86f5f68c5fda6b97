"""
Error classification for the PalSetup pipeline.

Every error below is fatal to the current run. Data quality errors describe
a problem with the input or with the data handed to a computation; system
failures describe a problem with the invocation, configuration or output.
"""

from .data_quality import (
    DataQualityError,
    NumericFormatError,
    FieldParseError,
    InvalidBarError,
    OutOfOrderError,
    EmptyInputError,
    InsufficientDataError,
)
from .system_failures import (
    SystemFailureError,
    UnsupportedFormatError,
    ConfigurationError,
    PersistenceError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "NumericFormatError",
    "FieldParseError",
    "InvalidBarError",
    "OutOfOrderError",
    "EmptyInputError",
    "InsufficientDataError",
    # System Failures
    "SystemFailureError",
    "UnsupportedFormatError",
    "ConfigurationError",
    "PersistenceError",
]
