"""Unit tests for the command-line entry point."""

from argparse import Namespace
from pathlib import Path

import pytest

from pal_setup.cli import build_overrides, build_parser, main, prompt_symbol, prompt_time_frame
from pal_setup.data.models import TimeFrame


def answers(*replies):
    """input() replacement returning canned replies in order."""
    iterator = iter(replies)
    return lambda prompt: next(iterator)


@pytest.fixture
def data_file(write_lines, calibration_file_lines) -> Path:
    return write_lines(calibration_file_lines, "es.txt")


class TestUsage:
    """Test handling of malformed invocations."""

    @pytest.mark.parametrize("argv", [[], ["data.txt"], ["data.txt", "5", "0.01", "extra"]])
    def test_wrong_argument_count(self, argv, capsys) -> None:
        """Test that usage is printed and the exit status is 0."""
        with pytest.raises(SystemExit) as exc_info:
            main(argv)
        assert exc_info.value.code == 0
        assert "usage: pal-setup" in capsys.readouterr().out

    def test_file_types_listed_in_help(self) -> None:
        """Test that the help text names every format code."""
        help_text = build_parser().format_help()
        assert "1 = CSI" in help_text
        assert "5 = PAL" in help_text


class TestPrompts:
    """Test interactive prompting."""

    def test_symbol_reprompted_when_blank(self, capsys) -> None:
        assert prompt_symbol(answers("", "  ", " ES ")) == "ES"
        assert capsys.readouterr().out.count("cannot be empty") == 2

    def test_time_frame_reprompted_when_unknown(self, capsys) -> None:
        assert prompt_time_frame(answers("daily", "Hourly", "Weekly")) is TimeFrame.WEEKLY
        assert capsys.readouterr().out.count("Unknown time frame") == 2


class TestOverrides:
    """Test mapping of arguments to configuration overrides."""

    def test_no_overrides(self) -> None:
        args = Namespace(tick=None, tick_policy=None, volume_unit=None, output_dir=None)
        assert build_overrides(args) == {}

    def test_all_overrides(self) -> None:
        args = Namespace(tick="0.25", tick_policy="reject", volume_unit="shares", output_dir="/tmp/out")
        assert build_overrides(args) == {
            "reader": {"tick": "0.25", "tick_policy": "reject", "volume_unit": "shares"},
            "output": {"output_dir": "/tmp/out"},
        }


class TestMain:
    """Test complete command-line runs."""

    def test_run_with_options(self, data_file, tmp_path, capsys) -> None:
        """Test a non-interactive run."""
        status = main([
            str(data_file), "5",
            "--symbol", "ES",
            "--time-frame", "Daily",
            "--output-dir", str(tmp_path / "out"),
            "--config-dir", str(tmp_path),
        ])

        assert status == 0
        out = capsys.readouterr().out
        assert "Median of roc of close = 5.0000000" in out
        assert "Qn of roc of close = 3.8749936" in out
        assert "Stop = 8.8749936" in out
        assert (tmp_path / "out" / "ES_Validation" / "ES_1_0_.txt").read_text() == "8.8749936\n8.8749936\n"

    def test_interactive_run(self, data_file, tmp_path, capsys) -> None:
        """Test that symbol and time frame are prompted for."""
        status = main(
            [str(data_file), "5", "0.01", "--output-dir", str(tmp_path / "out"), "--config-dir", str(tmp_path)],
            input_func=answers("NQ", "weekly", "Weekly"),
        )

        assert status == 0
        record = (tmp_path / "out" / "NQ_Validation" / "NQ_config.csv").read_text().strip()
        assert record.startswith("NQ,")
        assert record.endswith(",Weekly")

    def test_missing_file(self, tmp_path, capsys) -> None:
        """Test that a missing data file exits with status 1."""
        status = main([str(tmp_path / "missing.txt"), "5", "--symbol", "ES", "--time-frame", "Daily",
                       "--config-dir", str(tmp_path)])
        assert status == 1
        assert "Error:" in capsys.readouterr().err

    def test_unknown_file_type(self, data_file, tmp_path, capsys) -> None:
        """Test that an unknown format code exits with status 1."""
        status = main([str(data_file), "7", "--symbol", "ES", "--time-frame", "Daily",
                       "--config-dir", str(tmp_path)])
        assert status == 1
        assert "Unknown file type 7" in capsys.readouterr().err

    def test_invalid_tick(self, data_file, tmp_path, capsys) -> None:
        """Test that a non-numeric tick exits with status 1."""
        status = main([str(data_file), "5", "abc", "--symbol", "ES", "--time-frame", "Daily",
                       "--config-dir", str(tmp_path)])
        assert status == 1
        assert "reader.tick" in capsys.readouterr().err

    def test_tick_below_price_resolution(self, data_file, tmp_path, capsys) -> None:
        """Test that a tick rounding to zero at the working scale exits with status 1."""
        status = main([str(data_file), "5", "0.00000001", "--symbol", "X", "--time-frame", "Daily",
                       "--config-dir", str(tmp_path)])
        assert status == 1
        assert "reader.tick" in capsys.readouterr().err

    def test_oversized_price(self, write_lines, tmp_path, capsys) -> None:
        """Test that a price too large for the working scale exits with status 1."""
        path = write_lines(["20200101,100,123456789012345678901234,99,100"], "huge.txt")
        status = main([str(path), "5", "--symbol", "X", "--time-frame", "Daily",
                       "--config-dir", str(tmp_path)])
        assert status == 1
        assert "Error:" in capsys.readouterr().err

    def test_invalid_utf8(self, tmp_path, capsys) -> None:
        """Test that undecodable bytes exit with status 1."""
        path = tmp_path / "binary.txt"
        path.write_bytes(b"20200101,100,101,99,100\n20200102,100,10\xff0,99,100\n")
        status = main([str(path), "5", "--symbol", "X", "--time-frame", "Daily",
                       "--config-dir", str(tmp_path)])
        assert status == 1
        assert "Line 2" in capsys.readouterr().err
