"""
Main PalSetup pipeline coordinator.

Orchestrates one batch run: configuration, reading and validating the
vendor file, the in-sample / out-of-sample split, calibration from the
in-sample rate of change, and writing the artifacts Price Action Lab reads.
Every step completes before any file is written.
"""

from pathlib import Path
from typing import Any, Optional, Union

from .config.defaults import DefaultConfig
from .config.loader import ConfigLoader
from .data.models import TimeFrame, VolumeUnit
from .data.parsers import get_format_adapter
from .data.reader import ValidatingReader
from .data.series import OHLCTimeSeries, split_in_sample
from .data.validators import TickPolicy
from .errors import InsufficientDataError
from .logging.config import get_pipeline_logger
from .metrics.calculator import CalibrationCalculator
from .models.calibration import CalibrationResult, DateRange, PalSetupResult
from .writers import ConfigRecord, ConfigRecordWriter, StopTargetWriter, TimeSeriesWriter


class PalSetupEngine:
    """
    Coordinator for a single PalSetup run.

    Manages the pipeline:
    Vendor file → Validating Reader → Split → ROC → Statistics → Artifacts

    An engine holds no state between runs; each ``run`` call is an
    independent pipeline instance.
    """

    def __init__(self, config_dir: Optional[Union[str, Path]] = None,
                 overrides: Optional[dict[str, Any]] = None) -> None:
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.overrides = overrides or {}

    def load_config(self, symbol: str) -> DefaultConfig:
        """Merged and validated configuration for a symbol."""
        return self.config_loader.load(symbol, self.overrides)

    def read_series(self, data_path: Union[str, Path], file_type: int,
                    time_frame: TimeFrame, config: DefaultConfig) -> OHLCTimeSeries:
        """Read and validate the input file with the adapter for ``file_type``."""
        adapter = get_format_adapter(file_type, scale=config.reader.scale)
        reader = ValidatingReader(
            adapter,
            time_frame=time_frame,
            volume_unit=VolumeUnit(config.reader.volume_unit),
            tick=config.reader.tick,
            tick_policy=TickPolicy(config.reader.tick_policy),
            scale=config.reader.scale
        )
        return reader.read_file(data_path)

    def split(self, series: OHLCTimeSeries,
              config: DefaultConfig) -> tuple[OHLCTimeSeries, OHLCTimeSeries]:
        """
        Partition into in-sample and out-of-sample series.

        Raises:
            InsufficientDataError: If either segment would be empty
        """
        in_sample, out_of_sample = split_in_sample(series, config.split.in_sample_ratio)

        if len(in_sample) == 0 or len(out_of_sample) == 0:
            raise InsufficientDataError(
                f"{len(series)} bars cannot be split into non-empty in-sample and "
                f"out-of-sample segments at ratio {config.split.in_sample_ratio}",
                required_count=2,
                available_count=len(series)
            )

        return in_sample, out_of_sample

    def run(self, data_path: Union[str, Path], file_type: int, symbol: str,
            time_frame: TimeFrame = TimeFrame.DAILY) -> PalSetupResult:
        """
        Execute the full pipeline for one file.

        Args:
            data_path: Vendor data file
            file_type: Vendor format code (1-5)
            symbol: Ticker symbol used in file names and the config record
            time_frame: Bar granularity of the file

        Returns:
            PalSetupResult describing the calibration and written files

        Raises:
            DataQualityError: On any input validation or statistics failure
            SystemFailureError: On unsupported format, bad configuration or write failure
        """
        logger = get_pipeline_logger(__name__, symbol=symbol, source=str(data_path))
        logger.info("PalSetup run started", file_type=file_type, time_frame=time_frame.value)

        config = self.load_config(symbol)
        series = self.read_series(data_path, file_type, time_frame, config)
        in_sample, out_of_sample = self.split(series, config)

        logger.info(
            "Series split",
            total_entries=len(series),
            in_sample_entries=len(in_sample),
            out_of_sample_entries=len(out_of_sample)
        )

        calibration = CalibrationCalculator(config).calibrate(in_sample)

        logger.info(
            "Calibration complete",
            median=str(calibration.median),
            qn=str(calibration.qn),
            stop=str(calibration.stop),
            half_stop=str(calibration.half_stop)
        )

        output_files = self.write_artifacts(
            symbol, time_frame, series, in_sample, out_of_sample, calibration, config
        )

        logger.info("PalSetup run finished", files_written=len(output_files))

        return PalSetupResult(
            symbol=symbol,
            time_frame_name=time_frame.value,
            total_entries=len(series),
            in_sample=DateRange(in_sample.first_date, in_sample.last_date),
            out_of_sample=DateRange(out_of_sample.first_date, out_of_sample.last_date),
            in_sample_entries=len(in_sample),
            out_of_sample_entries=len(out_of_sample),
            calibration=calibration,
            output_files=output_files
        )

    def output_directory(self, symbol: str, config: DefaultConfig) -> Path:
        return Path(config.output.output_dir) / f"{symbol}{config.output.directory_suffix}"

    def write_artifacts(self, symbol: str, time_frame: TimeFrame, series: OHLCTimeSeries,
                        in_sample: OHLCTimeSeries, out_of_sample: OHLCTimeSeries,
                        calibration: CalibrationResult, config: DefaultConfig) -> dict[str, str]:
        """
        Write series dumps, stop/target files and the config record.

        Returns:
            Mapping of artifact name to written path
        """
        directory = self.output_directory(symbol, config)
        scale = config.reader.scale
        adapter = get_format_adapter(config.output.data_format, scale=scale)

        all_path = directory / f"{symbol}_ALL.txt"
        is_path = directory / f"{symbol}_IS.txt"
        oos_path = directory / f"{symbol}_OOS.txt"

        writers = [
            TimeSeriesWriter(all_path, series, adapter, name="all_data"),
            TimeSeriesWriter(is_path, in_sample, adapter, name="in_sample"),
            TimeSeriesWriter(oos_path, out_of_sample, adapter, name="out_of_sample"),
            StopTargetWriter(directory / f"{symbol}_0_5_.txt",
                             target=calibration.half_stop, stop=calibration.stop,
                             scale=scale, name="half_stop"),
            StopTargetWriter(directory / f"{symbol}_1_0_.txt",
                             target=calibration.stop, stop=calibration.stop,
                             scale=scale, name="full_stop"),
            ConfigRecordWriter(
                directory / f"{symbol}_config.csv",
                ConfigRecord(
                    symbol=symbol,
                    indicator_path=str(directory / f"{symbol}_IR.txt"),
                    data_path=str(is_path),
                    in_sample=DateRange(in_sample.first_date, in_sample.last_date),
                    out_of_sample=DateRange(out_of_sample.first_date, out_of_sample.last_date),
                    time_frame_name=time_frame.value
                )
            ),
        ]

        return {writer.name: str(writer.write().path) for writer in writers}
