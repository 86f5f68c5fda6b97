"""Default configuration parameters for the PalSetup pipeline."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..utils.numeric import DEFAULT_SCALE, EQUITY_TICK


@dataclass(frozen=True)
class ReaderParams:
    """Input reading parameters."""
    tick: Optional[Decimal] = EQUITY_TICK    # None disables tick alignment
    tick_policy: str = "round"               # round, reject or ignore
    volume_unit: str = "contracts"           # contracts or shares
    scale: int = DEFAULT_SCALE               # Fractional digits of every Decimal


@dataclass(frozen=True)
class SplitParams:
    """In-sample / out-of-sample partition parameters."""
    in_sample_ratio: Decimal = Decimal("0.8")


@dataclass(frozen=True)
class StatisticsParams:
    """Rate-of-change and dispersion parameters."""
    roc_period: int = 1
    roc_mode: str = "absolute"               # absolute or percent
    mad_normal_consistency: bool = False     # Multiply MAD by 1.4826


@dataclass(frozen=True)
class OutputParams:
    """Artifact output parameters."""
    output_dir: str = "."
    directory_suffix: str = "_Validation"
    data_format: int = 5                     # Format code of the series dumps (5 = PAL)


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    reader: ReaderParams
    split: SplitParams
    statistics: StatisticsParams
    output: OutputParams


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        reader=ReaderParams(),
        split=SplitParams(),
        statistics=StatisticsParams(),
        output=OutputParams(),
    )
