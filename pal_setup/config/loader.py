"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import ConfigurationError, NumericFormatError
from ..utils.numeric import to_decimal
from .defaults import (
    DefaultConfig,
    OutputParams,
    ReaderParams,
    SplitParams,
    StatisticsParams,
    get_default_config,
)
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_instrument_config(self, symbol: str) -> dict[str, Any]:
        """Load symbol-specific configuration overrides."""
        instruments_file = self.config_dir / "instruments.yaml"

        if not instruments_file.exists():
            return {}

        with open(instruments_file) as f:
            instruments_config = yaml.safe_load(f) or {}

        return instruments_config.get("instruments", {}).get(symbol, {})  # type: ignore[no-any-return]

    def merge_config(
        self,
        symbol: str,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Command-line overrides (highest priority)
        2. Symbol-specific overrides from instruments.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        instrument_config = self.load_instrument_config(symbol)
        config = self._deep_merge(config, instrument_config)

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def load(self, symbol: str, overrides: Optional[dict[str, Any]] = None) -> DefaultConfig:
        """
        Merge, validate and build the typed configuration for a symbol.

        Raises:
            ConfigurationError: If any merged value fails validation
        """
        merged = self.merge_config(symbol, overrides)
        errors = ConfigValidator.validate_config(merged)
        if errors:
            summary = "; ".join(f"{e.field}: {e.message} (value: {e.value!r})" for e in errors)
            raise ConfigurationError(
                f"Invalid configuration for {symbol}: {summary}",
                field=errors[0].field,
                errors=errors
            )
        return build_config(merged)

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name, _field in obj.__dataclass_fields__.items():
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def _optional_decimal(value: Any, scale: int) -> Optional[Decimal]:
    if value is None:
        return None
    try:
        tick = to_decimal(value, scale)
    except NumericFormatError as e:
        raise ConfigurationError(str(e), field="reader.tick")
    if tick <= 0:
        raise ConfigurationError(
            f"reader.tick: {value} rounds to {tick} at scale {scale}; tick must be positive",
            field="reader.tick",
            context={"value": value}
        )
    return tick


def build_config(merged: dict[str, Any]) -> DefaultConfig:
    """Build the typed configuration from a merged (and validated) dictionary."""
    reader = merged["reader"]
    split = merged["split"]
    statistics = merged["statistics"]
    output = merged["output"]

    return DefaultConfig(
        reader=ReaderParams(
            tick=_optional_decimal(reader["tick"], reader["scale"]),
            tick_policy=reader["tick_policy"],
            volume_unit=reader["volume_unit"],
            scale=reader["scale"],
        ),
        split=SplitParams(in_sample_ratio=to_decimal(split["in_sample_ratio"])),
        statistics=StatisticsParams(
            roc_period=statistics["roc_period"],
            roc_mode=statistics["roc_mode"],
            mad_normal_consistency=statistics["mad_normal_consistency"],
        ),
        output=OutputParams(
            output_dir=str(output["output_dir"]),
            directory_suffix=output["directory_suffix"],
            data_format=output["data_format"],
        ),
    )
