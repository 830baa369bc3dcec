"""Command-line interface: ``stream-select``.

Usage:
    # Top 10 highest scores from a file:
    stream-select -i data.txt

    # Lowest 25 scores, verbose listing with score deltas:
    stream-select -i data.txt -n 25 -s 1 -v

    # Uniform random sample of 100 lines plus an arrival histogram:
    stream-select -i data.txt -m random -n 100 --buckets 20 -v

    # Generate 50,000 lines of test data, then select from them:
    stream-select -g 50000 -o data.txt -i data.txt

Options not given on the command line fall back to STREAM_SELECT_*
environment variables, then to the built-in defaults.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

from stream_select.config import StreamSelectConfig, resolve_config
from stream_select.engine import SelectionEngine
from stream_select.entropy.registry import EntropySourceRegistry
from stream_select.exceptions import StreamSelectError
from stream_select.sources import read_records, write_test_data

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stream_select.engine import RunOutcome
    from stream_select.types import HistogramReport, Record

logger = logging.getLogger("stream_select")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for ``stream-select``."""
    parser = argparse.ArgumentParser(
        prog="stream-select",
        description="Report the top-K or a uniform random sample of <URL> <score> lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  stream-select -i data.txt -n 10 -s 0
  stream-select -i data.txt -m random -n 100 --buckets 20 -v
  stream-select -g 50000 -o data.txt
""",
    )
    parser.add_argument(
        "-i", "--input",
        help="Input file of '<URL> <score>' lines",
    )
    parser.add_argument(
        "-n", "--count",
        type=int,
        dest="result_count",
        help="Number of records to report (default: 10)",
    )
    parser.add_argument(
        "-s", "--sort-order",
        help="0/descending (default) or 1/ascending",
    )
    parser.add_argument(
        "-m", "--mode",
        choices=["normal", "random"],
        help="normal: exact top-K; random: uniform reservoir sample (default: normal)",
    )
    parser.add_argument(
        "-b", "--batch-size",
        type=int,
        help="Records per batch in normal mode (default: 1000)",
    )
    parser.add_argument(
        "--buckets",
        type=int,
        dest="bucket_count",
        help="Histogram buckets in random mode (default: 10)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Use the seeded entropy source with this seed",
    )
    parser.add_argument(
        "--skip-invalid",
        action="store_true",
        help="Skip malformed input lines instead of stopping",
    )
    parser.add_argument(
        "-g", "--generate",
        type=int,
        metavar="LINES",
        help="Generate a test data file with this many random lines (needs -o)",
    )
    parser.add_argument(
        "-o", "--output",
        help="Test data output file for -g",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print index, score and delta per record, and the histogram",
    )
    return parser


def _overrides(args: argparse.Namespace) -> dict[str, Any]:
    return {
        "mode": args.mode,
        "result_count": args.result_count,
        "sort_order": args.sort_order,
        "batch_size": args.batch_size,
        "bucket_count": args.bucket_count,
        "seed": args.seed,
        "entropy_source_type": "seeded" if args.seed is not None else None,
    }


def write_records(records: Sequence[Record], verbose: bool, out: TextIO) -> None:
    """Print reported records, one per line.

    Non-verbose output is the key only. Verbose output adds the index,
    score and the difference to the previous record's score.
    """
    previous = records[0].score if records else 0
    for index, record in enumerate(records):
        if verbose:
            out.write(
                f"[{index}]  URL = {record.key}, LongValue = {record.score}"
                f"  (Delta = {record.score - previous})\n"
            )
        else:
            out.write(f"{record.key}\n")
        previous = record.score


def write_histogram(report: HistogramReport, out: TextIO) -> None:
    """Print the arrival-position histogram of a random-mode run."""
    out.write(
        f"Arrival histogram: {report.total_read} read, "
        f"bucket width {report.bucket_width}\n"
    )
    for bucket in report.buckets:
        out.write(f"  <= {bucket.upper_bound}: {bucket.count}\n")
    if report.unassigned:
        out.write(f"  unassigned: {len(report.unassigned)}\n")


def _report(outcome: RunOutcome, verbose: bool, out: TextIO) -> None:
    record = outcome.run_record
    if verbose:
        label = "Sampled" if outcome.reservoir is not None else "Top"
        out.write(f"{label} {record.effective_count} of {record.total_read} items\n")
    write_records(outcome.records, verbose, out)
    if verbose and outcome.histogram is not None:
        write_histogram(outcome.histogram, out)


def main(argv: Sequence[str] | None = None, out: TextIO | None = None) -> int:
    """Entry point. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    out = out if out is not None else sys.stdout

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        config = resolve_config(StreamSelectConfig(), _overrides(args))

        if args.generate is not None:
            if not args.output:
                logger.error("Please specify an output file (-o) for generating test data")
                return 1
            source = EntropySourceRegistry.build(config.entropy_source_type, seed=config.seed)
            try:
                write_test_data(args.output, args.generate, source)
            finally:
                source.close()

        if not args.input:
            if args.generate is not None:
                return 0
            logger.error("If you want to load an input file, please specify: -i <Filename>")
            return 1

        with SelectionEngine(config) as engine:
            records = read_records(args.input, on_error="skip" if args.skip_invalid else "raise")
            outcome = engine.run(records)
    except (StreamSelectError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    _report(outcome, args.verbose, out)
    return 0


if __name__ == "__main__":
    sys.exit(main())
