"""stream-select: top-K and uniform random selection over record streams.

Reports the K highest- or lowest-scoring (key, score) records of a stream
without holding the stream in memory, either exactly (batched top-K) or as
a uniform random sample (reservoir sampling) with an arrival-position
histogram to check the sample for bias.
"""

from __future__ import annotations

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("stream-select")
except PackageNotFoundError:
    __version__ = "0.0.0"

from stream_select.config import StreamSelectConfig, resolve_config, validate_config
from stream_select.engine import (
    RunOutcome,
    SelectionEngine,
    run_batch_top_k,
    run_reservoir_sample,
    summarize,
)
from stream_select.exceptions import (
    EntropyUnavailableError,
    InvalidConfigurationError,
    RecordFormatError,
    StreamSelectError,
)
from stream_select.ordering import SortOrder
from stream_select.types import Bucket, HistogramReport, Record, ReservoirResult, SampleSlot

__all__ = [
    "Bucket",
    "EntropyUnavailableError",
    "HistogramReport",
    "InvalidConfigurationError",
    "Record",
    "RecordFormatError",
    "ReservoirResult",
    "RunOutcome",
    "SampleSlot",
    "SelectionEngine",
    "SortOrder",
    "StreamSelectConfig",
    "StreamSelectError",
    "__version__",
    "resolve_config",
    "run_batch_top_k",
    "run_reservoir_sample",
    "summarize",
    "validate_config",
]
