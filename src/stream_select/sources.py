"""Record sources for the ``<URL><whitespace><Long>`` text format.

Each line holds a URL-like key and a signed 64-bit integer score separated by
whitespace::

    http://api.tech.com/item/1234 -98765

The reader validates lines before they reach the selection core: a line
either becomes a :class:`~stream_select.types.Record`, is skipped, or stops
the read with :class:`~stream_select.exceptions.RecordFormatError`. The
generator produces synthetic files in the same format.
"""

from __future__ import annotations

import logging
import os
import re
from typing import TYPE_CHECKING

from stream_select.entropy.system import SystemEntropySource
from stream_select.exceptions import InvalidConfigurationError, RecordFormatError
from stream_select.types import SCORE_MAX, SCORE_MIN, Record

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from stream_select.entropy.base import EntropySource

logger = logging.getLogger("stream_select")

_INTEGER_RE = re.compile(r"[+-]?\d+")
_ON_ERROR_MODES = frozenset({"raise", "skip"})

# Key template used by the test-data generator.
TEST_DATA_URL_PREFIX = "http://api.tech.com/item/"


def parse_line(line: str) -> Record:
    """Parse one text line into a record.

    Args:
        line: ``<key> <score>`` separated by any whitespace. The key must
            contain ``http`` (case-insensitive). Columns past the second
            are ignored with a warning.

    Returns:
        The parsed Record.

    Raises:
        RecordFormatError: If the key or score is missing or invalid, or
            the score is outside the signed 64-bit range.
    """
    tokens = line.split()
    if not tokens:
        raise RecordFormatError("Empty line")
    key = tokens[0]
    if "http" not in key.lower():
        raise RecordFormatError(f"Key is not a URL: {key!r}")
    if len(tokens) < 2:
        raise RecordFormatError(f"Missing score for key {key!r}")

    raw_score = tokens[1]
    if not _INTEGER_RE.fullmatch(raw_score):
        raise RecordFormatError(f"Score is not a base-10 integer: {raw_score!r}")
    score = int(raw_score)
    if not SCORE_MIN <= score <= SCORE_MAX:
        raise RecordFormatError(f"Score out of 64-bit range: {raw_score}")

    if len(tokens) > 2:
        logger.warning("Ignoring %d extra column(s) after %r", len(tokens) - 2, key)
    return Record(key=key, score=score)


def read_records(
    source: str | os.PathLike[str] | Iterable[str],
    on_error: str = "raise",
) -> Iterator[Record]:
    """Lazily parse records from a file path or an iterable of lines.

    Blank lines are skipped silently.

    Args:
        source: Path to a text file, or any iterable of lines.
        on_error: ``'raise'`` stops at the first bad line; ``'skip'`` logs
            and drops it.

    Returns:
        An iterator over parsed records.

    Raises:
        InvalidConfigurationError: If *on_error* is unknown (raised
            immediately, before the source is opened).
        RecordFormatError: While iterating, for a bad line under
            ``on_error='raise'``. The message carries the line number.
    """
    if on_error not in _ON_ERROR_MODES:
        raise InvalidConfigurationError(
            f"Unknown on_error mode: {on_error!r}. Expected one of {sorted(_ON_ERROR_MODES)}"
        )
    if isinstance(source, (str, os.PathLike)):
        return _read_file(os.fspath(source), on_error)
    return _parse_lines(source, on_error)


def _read_file(path: str, on_error: str) -> Iterator[Record]:
    logger.info("Loading data from input file: %s", path)
    with open(path, encoding="utf-8") as fh:
        yield from _parse_lines(fh, on_error)


def _parse_lines(lines: Iterable[str], on_error: str) -> Iterator[Record]:
    skipped = 0
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        try:
            record = parse_line(line)
        except RecordFormatError as exc:
            if on_error == "raise":
                raise RecordFormatError(f"line {lineno}: {exc}") from exc
            skipped += 1
            logger.warning("Skipping line %d: %s", lineno, exc)
            continue
        yield record
    if skipped:
        logger.info("Skipped %d malformed line(s)", skipped)


def _random_int64(entropy_source: EntropySource) -> int:
    return entropy_source.get_random_below(2**64) + SCORE_MIN


def generate_records(
    n: int,
    entropy_source: EntropySource | None = None,
) -> Iterator[Record]:
    """Yield *n* synthetic records with random 64-bit keys and scores.

    Keys look like ``http://api.tech.com/item/<int64>``; scores span the
    full signed 64-bit range.

    Raises:
        InvalidConfigurationError: If *n* is negative.
    """
    if n < 0:
        raise InvalidConfigurationError(f"Number of records must be >= 0, got {n}")
    source = entropy_source if entropy_source is not None else SystemEntropySource()
    return (
        Record(
            key=f"{TEST_DATA_URL_PREFIX}{_random_int64(source)}",
            score=_random_int64(source),
        )
        for _ in range(n)
    )


def format_record(record: Record) -> str:
    """Render a record as one line of the text format (no newline)."""
    return f"{record.key} {record.score}"


def write_test_data(
    path: str | os.PathLike[str],
    n: int,
    entropy_source: EntropySource | None = None,
) -> int:
    """Write *n* synthetic records to *path*, replacing any existing file.

    Returns:
        Number of lines written.

    Raises:
        InvalidConfigurationError: If *n* is negative. *path* is left
            untouched.
    """
    records = generate_records(n, entropy_source)
    written = 0
    with open(path, "w", encoding="utf-8") as fh:
        for record in records:
            fh.write(format_record(record) + "\n")
            written += 1
    logger.info("Generated %d lines of random data to file: %s", written, os.fspath(path))
    return written
