"""
Command-line entry point.

Usage: pal-setup DATAFILE FILE_TYPE [TICK] [options]

Reads DATAFILE in the vendor format FILE_TYPE, calibrates stop/target values
from the in-sample rate of change and writes the Price Action Lab artifacts
to ``<output-dir>/<symbol>_Validation``. The ticker symbol and time frame
are prompted for when not passed as options.
"""

import argparse
import sys
from typing import Callable, Optional, Sequence

from .data.models import TimeFrame
from .data.parsers import describe_formats
from .engine import PalSetupEngine
from .errors import DataQualityError, SystemFailureError, UnsupportedFormatError
from .logging.config import configure_logging, get_logger
from .utils.numeric import format_decimal

logger = get_logger(__name__)

InputFunc = Callable[[str], str]


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that answers a malformed invocation with usage and exit status 0."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stdout)
        self.exit(0, f"{self.prog}: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(
        prog="pal-setup",
        description="Prepare Price Action Lab validation data and stop/target calibration.",
        epilog=f"File types: {describe_formats()}"
    )
    parser.add_argument("datafile", help="Historical OHLC data file")
    parser.add_argument("file_type", type=int, help=f"Vendor format ({describe_formats()})")
    parser.add_argument("tick", nargs="?", default=None,
                        help="Tick size override (default: instrument or equity tick)")
    parser.add_argument("--symbol", help="Ticker symbol (prompted when omitted)")
    parser.add_argument("--time-frame", choices=[tf.value for tf in TimeFrame],
                        help="Bar time frame (prompted when omitted)")
    parser.add_argument("--output-dir", help="Directory receiving <symbol>_Validation")
    parser.add_argument("--config-dir", help="Directory holding instruments.yaml")
    parser.add_argument("--tick-policy", choices=["round", "reject", "ignore"],
                        help="Handling of prices that are not a multiple of the tick")
    parser.add_argument("--volume-unit", choices=["contracts", "shares"],
                        help="Unit of the volume column")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON")
    return parser


def prompt_symbol(input_func: InputFunc = input) -> str:
    """Ask for a ticker symbol until a non-blank one is entered."""
    while True:
        symbol = input_func("Enter ticker symbol: ").strip()
        if symbol:
            return symbol
        print("Ticker symbol cannot be empty")


def prompt_time_frame(input_func: InputFunc = input) -> TimeFrame:
    """Ask for a time frame name until it matches one exactly."""
    names = ", ".join(tf.value for tf in TimeFrame)
    while True:
        answer = input_func(f"Enter time frame ({names}): ").strip()
        try:
            return TimeFrame.from_name(answer)
        except UnsupportedFormatError as e:
            print(e)


def build_overrides(args: argparse.Namespace) -> dict:
    """Configuration overrides from command-line arguments."""
    overrides: dict = {}
    reader = {}
    if args.tick is not None:
        reader["tick"] = args.tick
    if args.tick_policy:
        reader["tick_policy"] = args.tick_policy
    if args.volume_unit:
        reader["volume_unit"] = args.volume_unit
    if reader:
        overrides["reader"] = reader
    if args.output_dir:
        overrides["output"] = {"output_dir": args.output_dir}
    return overrides


def main(argv: Optional[Sequence[str]] = None, input_func: InputFunc = input) -> int:
    """
    Run the command line tool.

    Returns:
        Process exit status (0 on success or usage, 1 on a failed run)
    """
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, format_json=args.json_logs)

    symbol = args.symbol or prompt_symbol(input_func)
    time_frame = TimeFrame.from_name(args.time_frame) if args.time_frame else prompt_time_frame(input_func)

    engine = PalSetupEngine(config_dir=args.config_dir, overrides=build_overrides(args))

    try:
        result = engine.run(args.datafile, args.file_type, symbol, time_frame)
    except (DataQualityError, SystemFailureError, FileNotFoundError) as e:
        logger.error("PalSetup run failed", error_type=type(e).__name__, error=str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    calibration = result.calibration
    print(f"Median of roc of close = {format_decimal(calibration.median)}")
    print(f"Qn of roc of close = {format_decimal(calibration.qn)}")
    print(f"MAD of roc of close = {format_decimal(calibration.statistics.mad)}")
    print(f"Std dev of roc of close = {format_decimal(calibration.statistics.std_dev)}")
    print(f"Stop = {format_decimal(calibration.stop)}")
    for name, path in result.output_files.items():
        print(f"{name}: {path}")
    return 0


def run() -> None:
    sys.exit(main())
