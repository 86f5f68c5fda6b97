"""
Integration tests for the complete PalSetup pipeline.

Each test runs the engine end to end on a vendor file written to a
temporary directory and checks the artifacts Price Action Lab reads.
"""

from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

import pytest

from pal_setup.data.models import TimeFrame
from pal_setup.data.parsers import PALFormatAdapter, get_format_adapter
from pal_setup.data.reader import ValidatingReader
from pal_setup.engine import PalSetupEngine


def csi_lines(count: int, start: date = date(2015, 1, 5)) -> list:
    """Weekday CSI rows with a saw-tooth close around 2000."""
    lines = []
    day = start
    for i in range(count):
        while day.weekday() >= 5:
            day += timedelta(days=1)
        close = Decimal(2000) + Decimal(i % 7) * Decimal("2.25") - Decimal(i % 3) * Decimal("1.5")
        low = close - Decimal("2.5")
        lines.append(f"{day:%Y%m%d},{close - 1},{close + 3},{low},{close},{1000 + i},{50000 + i}")
        day += timedelta(days=1)
    return lines


@pytest.fixture
def engine(tmp_path: Path) -> PalSetupEngine:
    return PalSetupEngine(config_dir=tmp_path, overrides={"output": {"output_dir": str(tmp_path / "out")}})


class TestFullPipeline:
    """End-to-end runs"""

    def test_hundred_entry_split(self, engine, write_lines, tmp_path):
        source = write_lines(csi_lines(100), "es_csi.txt")
        result = engine.run(source, 1, "ES", TimeFrame.DAILY)

        assert result.total_entries == 100
        assert result.in_sample_entries == 80
        assert result.out_of_sample_entries == 20

        directory = tmp_path / "out" / "ES_Validation"
        reader = ValidatingReader(PALFormatAdapter())
        everything = reader.read_file(directory / "ES_ALL.txt")
        in_sample = reader.read_file(directory / "ES_IS.txt")
        out_of_sample = reader.read_file(directory / "ES_OOS.txt")

        assert len(everything) == 100
        assert list(in_sample) + list(out_of_sample) == list(everything)
        assert in_sample.last_date < out_of_sample.first_date
        assert result.in_sample.last == in_sample.last_date
        assert result.out_of_sample.first == out_of_sample.first_date

    def test_dump_reproduces_source_prices(self, engine, write_lines, tmp_path):
        lines = csi_lines(30)
        source = write_lines(lines, "es_csi.txt")
        engine.run(source, 1, "ES")

        original = ValidatingReader(get_format_adapter(1)).read_file(source)
        dumped = ValidatingReader(PALFormatAdapter()).read_file(tmp_path / "out" / "ES_Validation" / "ES_ALL.txt")

        assert dumped.dates() == original.dates()
        for before, after in zip(original, dumped):
            assert (before.open, before.high, before.low, before.close) == \
                   (after.open, after.high, after.low, after.close)

    def test_artifact_contents(self, engine, write_lines, calibration_file_lines, tmp_path):
        source = write_lines(calibration_file_lines, "gc.txt")
        result = engine.run(source, 5, "GC", TimeFrame.DAILY)

        directory = tmp_path / "out" / "GC_Validation"
        assert sorted(p.name for p in directory.iterdir()) == [
            "GC_0_5_.txt", "GC_1_0_.txt", "GC_ALL.txt", "GC_IS.txt", "GC_OOS.txt", "GC_config.csv",
        ]

        assert (directory / "GC_0_5_.txt").read_text() == "4.4374968\n8.8749936\n"
        assert (directory / "GC_1_0_.txt").read_text() == "8.8749936\n8.8749936\n"

        record = (directory / "GC_config.csv").read_text()
        assert record == (
            f"GC,{directory / 'GC_IR.txt'},{directory / 'GC_IS.txt'},PAL,"
            "20200101,20200110,20200111,20200113,Daily\n"
        )
        assert result.output_files["in_sample"] == str(directory / "GC_IS.txt")

    def test_tradestation_source_with_tick(self, tmp_path, write_lines):
        lines = ['"Date","Time","Open","High","Low","Close","Vol","OI"']
        day = date(2021, 3, 1)
        for i in range(20):
            close = Decimal("4100.00") + Decimal(i) * Decimal("0.30")
            lines.append(f"{day + timedelta(days=i):%m/%d/%Y},0000,{close},{close + 2},{close - 2},{close},{900 + i},0")
        source = write_lines(lines, "es_ts.txt")

        engine = PalSetupEngine(
            config_dir=tmp_path,
            overrides={"reader": {"tick": "0.25"}, "output": {"output_dir": str(tmp_path / "out")}}
        )
        result = engine.run(source, 3, "ES", TimeFrame.DAILY)

        dumped = ValidatingReader(PALFormatAdapter()).read_file(tmp_path / "out" / "ES_Validation" / "ES_ALL.txt")
        for entry in dumped:
            assert entry.close % Decimal("0.25") == 0
        assert result.in_sample_entries == 16

    def test_runs_are_independent(self, engine, write_lines, calibration_file_lines, tmp_path):
        source = write_lines(calibration_file_lines)
        first = engine.run(source, 5, "ES")
        second = engine.run(source, 5, "ES")
        assert first == second
