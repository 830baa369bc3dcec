"""Diagnostic logger for selection runs.

Uses the standard ``logging`` module with the ``"stream_select"`` logger.
No ``print()`` statements. Supports three verbosity levels and an
in-memory diagnostic mode for post-hoc analysis.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from stream_select.config import StreamSelectConfig
    from stream_select.logging.types import RunRecord

logger = logging.getLogger("stream_select")


class RunLogger:
    """Per-run diagnostic logger.

    Log levels:
        ``"none"``: No logging output. Records are still stored if
        ``diagnostic_mode=True``.

        ``"summary"``: One line per run with the key counters.

        ``"full"``: Full JSON dump of the record.
    """

    def __init__(self, config: StreamSelectConfig) -> None:
        self._log_level = config.log_level
        self._diagnostic_mode = config.diagnostic_mode
        self._records: list[RunRecord] = []

    def log_run(self, record: RunRecord) -> None:
        """Log one finished run.

        Args:
            record: Immutable summary of the run.
        """
        if self._diagnostic_mode:
            self._records.append(record)

        if self._log_level == "none":
            return

        if self._log_level == "summary":
            logger.info(
                "mode=%s order=%s k=%d reported=%d read=%d batches=%d "
                "replacements=%d%s elapsed=%.2fms",
                record.mode,
                record.sort_order,
                record.result_count,
                record.effective_count,
                record.total_read,
                record.batches,
                record.replacements,
                f" source={record.entropy_source_used}" if record.entropy_source_used else "",
                record.elapsed_ms,
            )
        elif self._log_level == "full":
            logger.info("run_record: %s", json.dumps(asdict(record), default=str))

    def get_diagnostic_data(self) -> list[RunRecord]:
        """Return all stored records (requires ``diagnostic_mode=True``)."""
        return list(self._records)

    def get_summary_stats(self) -> dict[str, Any]:
        """Aggregate statistics over stored records, or ``{}`` if none."""
        if not self._records:
            return {}

        n = len(self._records)
        total_read = sum(r.total_read for r in self._records)
        elapsed = [r.elapsed_ms for r in self._records]
        return {
            "total_runs": n,
            "total_read": total_read,
            "mean_elapsed_ms": sum(elapsed) / n,
            "max_elapsed_ms": max(elapsed),
            "random_runs": sum(1 for r in self._records if r.mode == "random"),
            "short_stream_runs": sum(
                1 for r in self._records if r.effective_count < r.result_count
            ),
        }
