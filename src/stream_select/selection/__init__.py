"""Deterministic top-K selection subsystem for stream-select.

Batched selection over sorted chunks, bounded by ``k + batch_size`` records.
"""

from stream_select.selection.batch_topk import (
    DEFAULT_BATCH_SIZE,
    BatchTopKSelector,
    iter_batches,
)

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "BatchTopKSelector",
    "iter_batches",
]
