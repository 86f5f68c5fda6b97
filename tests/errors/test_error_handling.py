"""
Error handling tests for the PalSetup pipeline.

Tests cover the error hierarchy, the context carried by each error and the
propagation of failures from malformed input to the caller.
"""

from datetime import date

import pytest

from pal_setup.data.parsers import get_format_adapter
from pal_setup.data.reader import ValidatingReader
from pal_setup.errors import (
    ConfigurationError,
    DataQualityError,
    EmptyInputError,
    FieldParseError,
    InsufficientDataError,
    InvalidBarError,
    NumericFormatError,
    OutOfOrderError,
    PersistenceError,
    SystemFailureError,
    UnsupportedFormatError,
)


class TestErrorClassification:
    """Test error classification system."""

    def test_data_quality_error_hierarchy(self):
        """Test that data quality errors have proper hierarchy."""
        base_error = DataQualityError("base error")
        assert base_error.recoverable is False
        assert base_error.context == {}

        numeric_error = NumericFormatError("bad number", text="1.2.3")
        assert isinstance(numeric_error, DataQualityError)
        assert numeric_error.text == "1.2.3"

        field_error = FieldParseError("bad field", line=4, column="close", reason="empty")
        assert isinstance(field_error, DataQualityError)
        assert (field_error.line, field_error.column, field_error.reason) == (4, "close", "empty")

        bar_error = InvalidBarError("bad bar", date=date(2023, 1, 3), reason="high below low", line=9)
        assert isinstance(bar_error, DataQualityError)
        assert bar_error.date == date(2023, 1, 3)
        assert bar_error.line == 9

        order_error = OutOfOrderError("late", date=date(2023, 1, 2), previous_date=date(2023, 1, 3))
        assert isinstance(order_error, DataQualityError)
        assert order_error.previous_date == date(2023, 1, 3)

        empty_error = EmptyInputError("nothing", source="file.txt")
        assert isinstance(empty_error, DataQualityError)
        assert empty_error.source == "file.txt"

        insufficient_error = InsufficientDataError("short", required_count=3, available_count=1)
        assert isinstance(insufficient_error, DataQualityError)
        assert insufficient_error.required_count == 3

    def test_system_failure_error_hierarchy(self):
        """Test that system failure errors have proper hierarchy."""
        format_error = UnsupportedFormatError("bad code", value=9, choices=(1, 2))
        assert isinstance(format_error, SystemFailureError)
        assert format_error.recoverable is False
        assert format_error.choices == [1, 2]

        config_error = ConfigurationError("bad config", field="reader.tick")
        assert isinstance(config_error, SystemFailureError)
        assert config_error.field == "reader.tick"
        assert config_error.errors == []

        persistence_error = PersistenceError("disk full", operation="write", target="/tmp/x")
        assert isinstance(persistence_error, SystemFailureError)
        assert persistence_error.target == "/tmp/x"

    def test_categories_are_disjoint(self):
        """Test that no error belongs to both categories."""
        assert not issubclass(DataQualityError, SystemFailureError)
        assert not issubclass(SystemFailureError, DataQualityError)

    def test_context_is_kept(self):
        """Test that keyword context reaches the base class."""
        error = InsufficientDataError("short", required_count=2, context={"period": 1})
        assert error.context == {"period": 1}


class TestMalformedInput:
    """Test that malformed rows fail the read with a diagnosable error."""

    @pytest.mark.parametrize("code,line,error_type", [
        (1, "20230103,1,2,0.5", FieldParseError),
        (1, "20230103,1,2,0.5,1.5,-10", InvalidBarError),
        (2, "20230103,1,2,0.5,1.5,10,0,0,", FieldParseError),
        (3, "2023-01-03,0000,1,2,0.5,1.5,10,0", FieldParseError),
        (4, "01/03/2023,1,2,0.5,abc,10", FieldParseError),
        (5, "20230103,1,0.9,0.5,0.8", InvalidBarError),
        (5, '20230103,"1,2,0.5,1.5', FieldParseError),
    ])
    def test_malformed_rows(self, code, line, error_type):
        """Test each format rejects its malformed rows."""
        reader = ValidatingReader(get_format_adapter(code))
        with pytest.raises(error_type) as exc_info:
            reader.read_lines(["", line])
        assert exc_info.value.line == 2
        assert "Line 2" in str(exc_info.value)

    def test_errors_are_not_swallowed(self):
        """Test that the first bad row aborts the whole read."""
        reader = ValidatingReader(get_format_adapter(5))
        lines = ["20230103,1,2,0.5,1.5", "20230104,1,2,0.5,bad", "20230105,1,2,0.5,1.5"]
        with pytest.raises(DataQualityError):
            reader.read_lines(lines)
