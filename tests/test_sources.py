"""Tests for the text record reader and the test-data generator."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from stream_select.entropy.seeded import SeededEntropySource
from stream_select.exceptions import InvalidConfigurationError, RecordFormatError
from stream_select.sources import (
    TEST_DATA_URL_PREFIX,
    format_record,
    generate_records,
    parse_line,
    read_records,
    write_test_data,
)
from stream_select.types import SCORE_MAX, SCORE_MIN, Record


class TestParseLine:
    def test_space_separated(self) -> None:
        assert parse_line("http://a.com/1 42\n") == Record("http://a.com/1", 42)

    def test_tab_and_extra_whitespace(self) -> None:
        assert parse_line("  https://b.org\t\t-7  ") == Record("https://b.org", -7)

    def test_explicit_plus_sign(self) -> None:
        assert parse_line("http://c +15").score == 15

    def test_key_match_is_case_insensitive(self) -> None:
        assert parse_line("HTTP://UPPER.COM 1").key == "HTTP://UPPER.COM"

    def test_score_range_limits(self) -> None:
        assert parse_line(f"http://x {SCORE_MIN}").score == SCORE_MIN
        assert parse_line(f"http://x {SCORE_MAX}").score == SCORE_MAX

    @pytest.mark.parametrize("score", [str(SCORE_MAX + 1), str(SCORE_MIN - 1)])
    def test_score_out_of_range(self, score: str) -> None:
        with pytest.raises(RecordFormatError, match="64-bit range"):
            parse_line(f"http://x {score}")

    @pytest.mark.parametrize("score", ["1.5", "abc", "0x10", "1e3", "--1"])
    def test_score_not_integer(self, score: str) -> None:
        with pytest.raises(RecordFormatError, match="base-10 integer"):
            parse_line(f"http://x {score}")

    def test_key_not_url(self) -> None:
        with pytest.raises(RecordFormatError, match="not a URL"):
            parse_line("ftp-only 5")

    def test_missing_score(self) -> None:
        with pytest.raises(RecordFormatError, match="Missing score"):
            parse_line("http://lonely")

    def test_empty_line(self) -> None:
        with pytest.raises(RecordFormatError, match="Empty line"):
            parse_line("   \n")

    def test_extra_columns_warned(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="stream_select"):
            record = parse_line("http://x 3 trailing junk")
        assert record == Record("http://x", 3)
        assert "extra column" in caplog.text


class TestReadRecords:
    def test_iterable_of_lines(self) -> None:
        lines = ["http://a 5\n", "\n", "http://b 1\n"]
        assert list(read_records(lines)) == [Record("http://a", 5), Record("http://b", 1)]

    def test_is_lazy(self) -> None:
        def lines():
            yield "http://a 1\n"
            raise AssertionError("read too far")

        it = read_records(lines())
        assert next(it) == Record("http://a", 1)

    def test_raise_reports_line_number(self) -> None:
        lines = ["http://a 5", "", "http://b nope"]
        with pytest.raises(RecordFormatError, match="line 3"):
            list(read_records(lines))

    def test_skip_mode(self, caplog: pytest.LogCaptureFixture) -> None:
        lines = ["http://a 5", "garbage", "http://b 1", "http://c 1.0"]
        with caplog.at_level(logging.WARNING, logger="stream_select"):
            records = list(read_records(lines, on_error="skip"))
        assert [r.key for r in records] == ["http://a", "http://b"]
        assert "Skipping line 2" in caplog.text
        assert "Skipping line 4" in caplog.text

    def test_unknown_on_error_mode(self) -> None:
        with pytest.raises(InvalidConfigurationError, match="on_error"):
            read_records([], on_error="ignore")

    def test_reads_file_path(self, tmp_path: Path) -> None:
        path = tmp_path / "data.txt"
        path.write_text("http://a 5\nhttp://b -2\n", encoding="utf-8")
        assert list(read_records(path)) == [Record("http://a", 5), Record("http://b", -2)]
        assert list(read_records(str(path)))[1].score == -2

    def test_missing_file_raises_on_iteration(self, tmp_path: Path) -> None:
        records = read_records(tmp_path / "missing.txt")
        with pytest.raises(FileNotFoundError):
            next(records)


class TestGenerator:
    def test_count_and_format(self) -> None:
        records = list(generate_records(50, SeededEntropySource(seed=1)))
        assert len(records) == 50
        for record in records:
            assert record.key.startswith(TEST_DATA_URL_PREFIX)
            int(record.key[len(TEST_DATA_URL_PREFIX):])
            assert SCORE_MIN <= record.score <= SCORE_MAX

    def test_reproducible(self) -> None:
        a = list(generate_records(10, SeededEntropySource(seed=5)))
        b = list(generate_records(10, SeededEntropySource(seed=5)))
        assert a == b

    def test_scores_cover_both_signs(self) -> None:
        scores = [r.score for r in generate_records(200, SeededEntropySource(seed=2))]
        assert min(scores) < 0 < max(scores)

    def test_zero_records(self) -> None:
        assert list(generate_records(0)) == []

    def test_negative_rejected(self) -> None:
        with pytest.raises(InvalidConfigurationError):
            generate_records(-1)

    def test_format_record(self) -> None:
        assert format_record(Record("http://a", -3)) == "http://a -3"

    def test_write_then_read(self, tmp_path: Path) -> None:
        path = tmp_path / "generated.txt"
        written = write_test_data(path, 25, SeededEntropySource(seed=3))
        assert written == 25
        expected = list(generate_records(25, SeededEntropySource(seed=3)))
        assert list(read_records(path)) == expected

    def test_negative_count_leaves_existing_file(self, tmp_path: Path) -> None:
        path = tmp_path / "generated.txt"
        path.write_text("http://keep 1\n", encoding="utf-8")
        with pytest.raises(InvalidConfigurationError):
            write_test_data(path, -5, SeededEntropySource(seed=3))
        assert path.read_text(encoding="utf-8") == "http://keep 1\n"

    def test_negative_count_creates_no_file(self, tmp_path: Path) -> None:
        path = tmp_path / "never.txt"
        with pytest.raises(InvalidConfigurationError):
            write_test_data(path, -1)
        assert not path.exists()

    def test_write_replaces_existing(self, tmp_path: Path) -> None:
        path = tmp_path / "generated.txt"
        path.write_text("old contents\n" * 100, encoding="utf-8")
        write_test_data(path, 2, SeededEntropySource(seed=3))
        assert len(path.read_text(encoding="utf-8").splitlines()) == 2
