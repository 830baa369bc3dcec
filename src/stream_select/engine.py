"""Selection engine, the integration layer for stream-select.

Runs one of the two selection modes over a record source:

    normal: source -> batches -> BatchTopKSelector -> sorted top-K
    random: source -> ReservoirSampler -> sample -> HistogramReporter

:class:`SelectionEngine` builds its components from a
:class:`~stream_select.config.StreamSelectConfig`, times each run and logs a
:class:`~stream_select.logging.types.RunRecord`. The module-level functions
``run_batch_top_k()``, ``run_reservoir_sample()`` and ``summarize()`` expose
the core operations without any configuration object.

All parameters are validated before the first record is pulled. A run that
raises returns nothing; whatever it had retained is dropped with it.
"""

from __future__ import annotations

import hashlib
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from stream_select.config import StreamSelectConfig, validate_config
from stream_select.entropy.fallback import FallbackEntropySource
from stream_select.entropy.registry import EntropySourceRegistry
from stream_select.entropy.seeded import SeededEntropySource
from stream_select.logging.logger import RunLogger
from stream_select.logging.types import RunRecord
from stream_select.ordering import SortOrder
from stream_select.reporting.histogram import HistogramReporter, summarize
from stream_select.sampling.reservoir import ReservoirSampler
from stream_select.selection.batch_topk import DEFAULT_BATCH_SIZE, BatchTopKSelector
from stream_select.types import ReservoirResult

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType

    from stream_select.entropy.base import EntropySource
    from stream_select.types import HistogramReport, Record, SampleSlot

logger = logging.getLogger("stream_select")

DEFAULT_RESULT_COUNT = 10

__all__ = [
    "RunOutcome",
    "SelectionEngine",
    "run_batch_top_k",
    "run_reservoir_sample",
    "summarize",
]


def _config_hash(config: StreamSelectConfig) -> str:
    """First 16 hex characters of the SHA-256 digest of the config dump."""
    raw = config.model_dump_json().encode("utf-8")
    return hashlib.sha256(raw).hexdigest()[:16]


def _build_entropy_source(config: StreamSelectConfig) -> EntropySource:
    """Build the entropy source from config, wrapping with fallback if needed.

    Args:
        config: Configuration specifying source type, seed and fallback mode.

    Returns:
        An EntropySource, potentially wrapped in FallbackEntropySource.

    Raises:
        InvalidConfigurationError: If the source type is unknown.
    """
    primary = EntropySourceRegistry.build(config.entropy_source_type, seed=config.seed)

    # A seeded generator never runs dry, and wrapping it would bypass its
    # own get_random_below().
    if isinstance(primary, SeededEntropySource):
        return primary
    if config.fallback_mode == "error" or config.fallback_mode == primary.name:
        return primary

    fallback = EntropySourceRegistry.build(config.fallback_mode, seed=config.seed)
    return FallbackEntropySource(primary, fallback)


def _display_order(slots: Iterable[SampleSlot], order: SortOrder) -> tuple[SampleSlot, ...]:
    # Stable sort: equal scores stay in slot order.
    return tuple(sorted(slots, key=lambda s: s.record.score, reverse=order.reverse))


def run_batch_top_k(
    source: Iterable[Record],
    batch_size: int = DEFAULT_BATCH_SIZE,
    k: int = DEFAULT_RESULT_COUNT,
    order: SortOrder | str = SortOrder.DESCENDING,
) -> list[Record]:
    """Return the *k* best records of *source*, best first.

    Args:
        source: Finite iterable of records.
        batch_size: Records pulled per batch. Must be positive.
        k: Number of records to report. Must be positive.
        order: ``'descending'`` for highest scores, ``'ascending'`` for lowest.

    Returns:
        At most *k* records sorted by *order*; the whole stream if it is
        shorter than *k*.

    Raises:
        InvalidConfigurationError: If *k* or *batch_size* is not positive or
            *order* is unknown. Raised before *source* is read.
    """
    return BatchTopKSelector(k, order).run(source, batch_size)


def run_reservoir_sample(
    source: Iterable[Record],
    k: int = DEFAULT_RESULT_COUNT,
    order: SortOrder | str = SortOrder.DESCENDING,
    entropy_source: EntropySource | None = None,
) -> ReservoirResult:
    """Draw a uniform random sample of *k* records from *source*.

    Args:
        source: Finite iterable of records.
        k: Sample size. Must be positive.
        order: Only affects the order of the returned slots, never which
            records are retained.
        entropy_source: Source of random draws (system entropy by default).

    Returns:
        ReservoirResult whose slots are sorted by score per *order*.

    Raises:
        InvalidConfigurationError: If *k* is not positive or *order* is
            unknown. Raised before *source* is read.
    """
    sort_order = SortOrder.parse(order)
    result = ReservoirSampler(k, entropy_source).run(source)
    return ReservoirResult(
        slots=_display_order(result.slots, sort_order),
        total_read=result.total_read,
    )


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """Result of :meth:`SelectionEngine.run`.

    Attributes:
        records: Reported records, sorted by the configured order.
        reservoir: Reservoir state (random mode only).
        histogram: Arrival-position histogram (random mode only).
        run_record: The record that was logged for this run.
    """

    records: tuple[Record, ...]
    reservoir: ReservoirResult | None
    histogram: HistogramReport | None
    run_record: RunRecord


class SelectionEngine:
    """Config-driven runner for both selection modes.

    Usage::

        with SelectionEngine(StreamSelectConfig(mode="random")) as engine:
            outcome = engine.run(records)

    Args:
        config: Run configuration. Defaults to ``StreamSelectConfig()``
            (environment variables and ``.env`` apply).

    Raises:
        InvalidConfigurationError: If *config* fails validation.
    """

    def __init__(self, config: StreamSelectConfig | None = None) -> None:
        self._config = config if config is not None else StreamSelectConfig()
        validate_config(self._config)

        self._order = SortOrder.parse(self._config.sort_order)
        self._config_hash = _config_hash(self._config)
        self._logger = RunLogger(self._config)
        self._reporter = HistogramReporter()
        self._entropy_source: EntropySource | None = None
        if self._config.mode == "random":
            self._entropy_source = _build_entropy_source(self._config)

        logger.debug(
            "SelectionEngine initialized: mode=%s k=%d order=%s batch_size=%d",
            self._config.mode,
            self._config.result_count,
            self._order.value,
            self._config.batch_size,
        )

    @property
    def config(self) -> StreamSelectConfig:
        return self._config

    @property
    def run_logger(self) -> RunLogger:
        """The diagnostic logger for this engine."""
        return self._logger

    @property
    def entropy_source(self) -> EntropySource:
        """The random source used in random mode, built on first use."""
        if self._entropy_source is None:
            self._entropy_source = _build_entropy_source(self._config)
        return self._entropy_source

    def run(self, source: Iterable[Record]) -> RunOutcome:
        """Run the configured mode over *source*."""
        if self._config.mode == "random":
            return self.run_reservoir_sample(source)
        return self.run_batch_top_k(source)

    def run_batch_top_k(self, source: Iterable[Record]) -> RunOutcome:
        """Batched top-K over *source* (mode ``normal``)."""
        start_ns = time.time_ns()
        t0 = time.perf_counter_ns()

        selector = BatchTopKSelector(self._config.result_count, self._order)
        selector.run(source, self._config.batch_size)
        records = tuple(selector.results)

        record = self._make_record(
            start_ns=start_ns,
            t0=t0,
            mode="normal",
            effective_count=len(records),
            total_read=selector.total_read,
            batches=selector.batches,
            replacements=0,
            entropy_source_used="",
        )
        return RunOutcome(records=records, reservoir=None, histogram=None, run_record=record)

    def run_reservoir_sample(self, source: Iterable[Record]) -> RunOutcome:
        """Reservoir sample over *source* plus its histogram (mode ``random``)."""
        start_ns = time.time_ns()
        t0 = time.perf_counter_ns()

        entropy = self.entropy_source
        sampler = ReservoirSampler(self._config.result_count, entropy)
        raw = sampler.run(source)
        reservoir = ReservoirResult(
            slots=_display_order(raw.slots, self._order),
            total_read=raw.total_read,
        )
        histogram = self.summarize(reservoir)

        if isinstance(entropy, FallbackEntropySource) and entropy.fallback_count:
            source_used = f"{entropy.primary.name}->{entropy.last_source_used}"
        else:
            source_used = entropy.name

        record = self._make_record(
            start_ns=start_ns,
            t0=t0,
            mode="random",
            effective_count=len(reservoir.slots),
            total_read=reservoir.total_read,
            batches=0,
            replacements=sampler.replacements,
            entropy_source_used=source_used,
        )
        return RunOutcome(
            records=tuple(slot.record for slot in reservoir.slots),
            reservoir=reservoir,
            histogram=histogram,
            run_record=record,
        )

    def summarize(self, reservoir: ReservoirResult) -> HistogramReport:
        """Histogram of *reservoir* using the configured bucket count."""
        report = self._reporter.summarize(
            reservoir.slots, reservoir.total_read, self._config.bucket_count
        )
        if report.unassigned:
            logger.warning(
                "%d sample(s) fell outside the histogram range [0, %d)",
                len(report.unassigned),
                reservoir.total_read,
            )
        return report

    def _make_record(
        self,
        *,
        start_ns: int,
        t0: int,
        mode: str,
        effective_count: int,
        total_read: int,
        batches: int,
        replacements: int,
        entropy_source_used: str,
    ) -> RunRecord:
        elapsed_ms = (time.perf_counter_ns() - t0) / 1_000_000.0
        record = RunRecord(
            timestamp_ns=start_ns,
            elapsed_ms=elapsed_ms,
            mode=mode,
            sort_order=self._order.value,
            result_count=self._config.result_count,
            effective_count=effective_count,
            total_read=total_read,
            batches=batches,
            replacements=replacements,
            entropy_source_used=entropy_source_used,
            config_hash=self._config_hash,
        )
        self._logger.log_run(record)
        return record

    def close(self) -> None:
        """Release the entropy source, if one was built."""
        if self._entropy_source is not None:
            self._entropy_source.close()
            self._entropy_source = None

    def __enter__(self) -> SelectionEngine:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()
