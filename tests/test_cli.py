"""Tests for the stream-select command line."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from stream_select.cli import build_parser, main, write_histogram, write_records
from stream_select.types import Bucket, HistogramReport, Record, SampleSlot


@pytest.fixture
def data_file(tmp_path: Path) -> Path:
    path = tmp_path / "data.txt"
    path.write_text(
        "http://a.com 5\nhttp://b.com 1\nhttp://c.com 9\nhttp://d.com 3\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture(autouse=True)
def _quiet_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("MODE", "RESULT_COUNT", "SORT_ORDER", "LOG_LEVEL"):
        monkeypatch.delenv(f"STREAM_SELECT_{name}", raising=False)
    monkeypatch.setenv("STREAM_SELECT_LOG_LEVEL", "none")


def run(argv: list[str]) -> tuple[int, str]:
    out = io.StringIO()
    status = main(argv, out=out)
    return status, out.getvalue()


class TestParser:
    def test_unset_flags_are_none(self) -> None:
        args = build_parser().parse_args(["-i", "x.txt"])
        assert args.result_count is None
        assert args.mode is None
        assert args.seed is None
        assert args.verbose is False

    def test_mode_choices(self) -> None:
        with pytest.raises(SystemExit):
            build_parser().parse_args(["-m", "fastest"])


class TestMain:
    def test_top_k_keys_only(self, data_file: Path) -> None:
        status, output = run(["-i", str(data_file), "-n", "2"])
        assert status == 0
        assert output.splitlines() == ["http://c.com", "http://a.com"]

    def test_ascending(self, data_file: Path) -> None:
        status, output = run(["-i", str(data_file), "-n", "2", "-s", "1"])
        assert status == 0
        assert output.splitlines() == ["http://b.com", "http://d.com"]

    def test_verbose_listing(self, data_file: Path) -> None:
        status, output = run(["-i", str(data_file), "-n", "3", "-v"])
        assert status == 0
        lines = output.splitlines()
        assert lines[0] == "Top 3 of 4 items"
        assert lines[1] == "[0]  URL = http://c.com, LongValue = 9  (Delta = 0)"
        assert lines[2] == "[1]  URL = http://a.com, LongValue = 5  (Delta = -4)"
        assert lines[3] == "[2]  URL = http://d.com, LongValue = 3  (Delta = -2)"

    def test_random_mode_with_histogram(self, data_file: Path) -> None:
        status, output = run(
            ["-i", str(data_file), "-m", "random", "-n", "2", "--buckets", "2", "--seed", "4", "-v"]
        )
        assert status == 0
        lines = output.splitlines()
        assert lines[0] == "Sampled 2 of 4 items"
        assert "Arrival histogram: 4 read, bucket width 2" in lines
        counts = [int(line.rsplit(":", 1)[1]) for line in lines if line.startswith("  <= ")]
        assert sum(counts) == 2

    def test_random_mode_seed_reproducible(self, data_file: Path) -> None:
        argv = ["-i", str(data_file), "-m", "random", "-n", "2", "--seed", "11"]
        assert run(argv) == run(argv)

    def test_zero_count_fails(self, data_file: Path) -> None:
        status, output = run(["-i", str(data_file), "-n", "0"])
        assert status == 1
        assert output == ""

    def test_bad_sort_order_fails(self, data_file: Path) -> None:
        assert run(["-i", str(data_file), "-s", "sideways"])[0] == 1

    def test_missing_input_flag(self) -> None:
        assert run([])[0] == 1

    def test_missing_input_file(self, tmp_path: Path) -> None:
        assert run(["-i", str(tmp_path / "nope.txt")])[0] == 1

    def test_malformed_line_stops(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("http://a 1\nnot-a-url 2\n", encoding="utf-8")
        assert run(["-i", str(path)])[0] == 1

    def test_skip_invalid(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.txt"
        path.write_text("http://a 1\nnot-a-url 2\nhttp://b 3\n", encoding="utf-8")
        status, output = run(["-i", str(path), "--skip-invalid"])
        assert status == 0
        assert output.splitlines() == ["http://b", "http://a"]

    def test_generate_only(self, tmp_path: Path) -> None:
        path = tmp_path / "gen.txt"
        status, output = run(["-g", "30", "-o", str(path), "--seed", "1"])
        assert status == 0
        assert output == ""
        assert len(path.read_text(encoding="utf-8").splitlines()) == 30

    def test_generate_then_select(self, tmp_path: Path) -> None:
        path = tmp_path / "gen.txt"
        status, output = run(["-g", "100", "-o", str(path), "-i", str(path), "-n", "5"])
        assert status == 0
        assert len(output.splitlines()) == 5

    def test_generate_negative_count_keeps_output(self, tmp_path: Path) -> None:
        path = tmp_path / "data.txt"
        path.write_text("http://keep 1\n", encoding="utf-8")
        status, _ = run(["-g", "-5", "-o", str(path)])
        assert status == 1
        assert path.read_text(encoding="utf-8") == "http://keep 1\n"

    def test_generate_needs_output(self) -> None:
        assert run(["-g", "10"])[0] == 1


class TestWriters:
    def test_write_records_empty(self) -> None:
        out = io.StringIO()
        write_records([], verbose=True, out=out)
        assert out.getvalue() == ""

    def test_write_records_plain(self) -> None:
        out = io.StringIO()
        write_records([Record("http://a", 1), Record("http://b", 2)], verbose=False, out=out)
        assert out.getvalue() == "http://a\nhttp://b\n"

    def test_write_histogram(self) -> None:
        report = HistogramReport(
            buckets=(Bucket(count=1, upper_bound=4), Bucket(count=2, upper_bound=10)),
            bucket_width=5,
            total_read=11,
            unassigned=(SampleSlot(Record("http://z", 0), 99),),
        )
        out = io.StringIO()
        write_histogram(report, out)
        assert out.getvalue().splitlines() == [
            "Arrival histogram: 11 read, bucket width 5",
            "  <= 4: 1",
            "  <= 10: 2",
            "  unassigned: 1",
        ]
