"""Configuration validation utilities."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

TICK_POLICIES = ("round", "reject", "ignore")
VOLUME_UNITS = ("contracts", "shares")
ROC_MODES = ("absolute", "percent")
FORMAT_CODES = (1, 2, 3, 4, 5)


@dataclass(frozen=True)
class ValidationError:
    """Represents a configuration validation error."""
    field: str
    message: str
    value: Any


def _as_number(value: Any) -> Optional[Decimal]:
    """Numeric value of an int, float, Decimal or numeric string; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, (float, str)):
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            return None
        return number if number.is_finite() else None
    return None


class ConfigValidator:
    """Validates configuration parameters."""

    @staticmethod
    def validate_reader_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate reader parameters."""
        errors = []

        # tick may be disabled with null
        if "tick" in params and params["tick"] is not None:
            value = params["tick"]
            number = _as_number(value)
            if number is None or number <= 0:
                errors.append(ValidationError(
                    field="reader.tick",
                    message="Must be a positive number or null",
                    value=value
                ))

        if "tick_policy" in params:
            value = params["tick_policy"]
            if value not in TICK_POLICIES:
                errors.append(ValidationError(
                    field="reader.tick_policy",
                    message=f"Must be one of {', '.join(TICK_POLICIES)}",
                    value=value
                ))

        if "volume_unit" in params:
            value = params["volume_unit"]
            if value not in VOLUME_UNITS:
                errors.append(ValidationError(
                    field="reader.volume_unit",
                    message=f"Must be one of {', '.join(VOLUME_UNITS)}",
                    value=value
                ))

        if "scale" in params:
            value = params["scale"]
            if not isinstance(value, int) or isinstance(value, bool) or not 0 <= value <= 12:
                errors.append(ValidationError(
                    field="reader.scale",
                    message="Must be an integer between 0 and 12",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_split_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate split parameters."""
        errors = []

        if "in_sample_ratio" in params:
            value = params["in_sample_ratio"]
            number = _as_number(value)
            if number is None or not 0 < number < 1:
                errors.append(ValidationError(
                    field="split.in_sample_ratio",
                    message="Must be a number strictly between 0 and 1",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_statistics_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate statistics parameters."""
        errors = []

        if "roc_period" in params:
            value = params["roc_period"]
            if not isinstance(value, int) or isinstance(value, bool) or value < 1:
                errors.append(ValidationError(
                    field="statistics.roc_period",
                    message="Must be a positive integer",
                    value=value
                ))

        if "roc_mode" in params:
            value = params["roc_mode"]
            if value not in ROC_MODES:
                errors.append(ValidationError(
                    field="statistics.roc_mode",
                    message=f"Must be one of {', '.join(ROC_MODES)}",
                    value=value
                ))

        if "mad_normal_consistency" in params:
            value = params["mad_normal_consistency"]
            if not isinstance(value, bool):
                errors.append(ValidationError(
                    field="statistics.mad_normal_consistency",
                    message="Must be a boolean",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_output_params(params: dict[str, Any]) -> list[ValidationError]:
        """Validate output parameters."""
        errors = []

        if "output_dir" in params:
            value = params["output_dir"]
            if not isinstance(value, str) or not value:
                errors.append(ValidationError(
                    field="output.output_dir",
                    message="Must be a non-empty path",
                    value=value
                ))

        if "directory_suffix" in params:
            value = params["directory_suffix"]
            if not isinstance(value, str) or "/" in value:
                errors.append(ValidationError(
                    field="output.directory_suffix",
                    message="Must be a string without path separators",
                    value=value
                ))

        if "data_format" in params:
            value = params["data_format"]
            if value not in FORMAT_CODES or isinstance(value, bool):
                errors.append(ValidationError(
                    field="output.data_format",
                    message=f"Must be one of {', '.join(str(c) for c in FORMAT_CODES)}",
                    value=value
                ))

        return errors

    @staticmethod
    def validate_config(config: dict[str, Any]) -> list[ValidationError]:
        """Validate complete configuration."""
        errors = []

        if "reader" in config:
            errors.extend(ConfigValidator.validate_reader_params(config["reader"]))

        if "split" in config:
            errors.extend(ConfigValidator.validate_split_params(config["split"]))

        if "statistics" in config:
            errors.extend(ConfigValidator.validate_statistics_params(config["statistics"]))

        if "output" in config:
            errors.extend(ConfigValidator.validate_output_params(config["output"]))

        return errors
