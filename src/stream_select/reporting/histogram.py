"""Arrival-position histogram for reservoir samples.

Splits the arrival-index domain ``[0, total_read)`` into equal-width
contiguous buckets and counts how many retained samples fall into each. An
unbiased sampler yields roughly equal counts per bucket.

Boundary rule:
    effective_buckets = min(bucket_count, total_read)
    bucket_width      = total_read // effective_buckets
    upper_bound[j]    = (j + 1) * bucket_width - 1     for j < last
    upper_bound[last] = total_read - 1                 (absorbs the remainder)

A sample goes to the bucket with the smallest upper bound >= its arrival
index, so every index in ``[0, total_read)`` lands in exactly one bucket.
Samples outside that range are reported as unassigned, never dropped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from stream_select.exceptions import InvalidConfigurationError
from stream_select.types import Bucket, HistogramReport

if TYPE_CHECKING:
    from collections.abc import Sequence

    from stream_select.types import SampleSlot


class HistogramReporter:
    """Stateless bucketer over reservoir arrival indices."""

    def summarize(
        self,
        reservoir: Sequence[SampleSlot],
        total_read: int,
        bucket_count: int,
    ) -> HistogramReport:
        """Count retained samples per arrival-index bucket.

        Args:
            reservoir: Retained samples from a reservoir run.
            total_read: Number of records the run read.
            bucket_count: Requested number of buckets. Fewer are produced
                when the stream is shorter than *bucket_count*.

        Returns:
            HistogramReport with dense buckets in ascending bound order.

        Raises:
            InvalidConfigurationError: If *bucket_count* is not positive or
                *total_read* is negative.
        """
        if bucket_count <= 0:
            raise InvalidConfigurationError(f"bucket_count must be > 0, got {bucket_count}")
        if total_read < 0:
            raise InvalidConfigurationError(f"total_read must be >= 0, got {total_read}")

        if total_read == 0:
            return HistogramReport(
                buckets=(),
                bucket_width=0,
                total_read=0,
                unassigned=tuple(reservoir),
            )

        upper_bounds, width = self._upper_bounds(total_read, bucket_count)

        indices = np.fromiter(
            (slot.arrival_index for slot in reservoir), dtype=np.int64, count=len(reservoir)
        )
        in_range = (indices >= 0) & (indices < total_read)

        # Smallest upper bound >= index.
        positions = np.searchsorted(upper_bounds, indices[in_range], side="left")
        counts = np.bincount(positions, minlength=len(upper_bounds))

        buckets = tuple(
            Bucket(count=int(c), upper_bound=int(b))
            for c, b in zip(counts, upper_bounds)
        )
        unassigned = tuple(slot for slot, ok in zip(reservoir, in_range) if not ok)
        return HistogramReport(
            buckets=buckets,
            bucket_width=width,
            total_read=total_read,
            unassigned=unassigned,
        )

    @staticmethod
    def _upper_bounds(total_read: int, bucket_count: int) -> tuple[np.ndarray, int]:
        """Compute inclusive bucket upper bounds per the module boundary rule.

        Args:
            total_read: Stream length (> 0).
            bucket_count: Requested bucket count (> 0).

        Returns:
            Tuple of (ascending upper bounds, nominal bucket width).
        """
        effective = min(bucket_count, total_read)
        width = total_read // effective
        bounds = np.arange(1, effective + 1, dtype=np.int64) * width - 1
        bounds[-1] = total_read - 1
        return bounds, width


def summarize(
    reservoir: Sequence[SampleSlot],
    total_read: int,
    bucket_count: int,
) -> HistogramReport:
    """Module-level shortcut for :meth:`HistogramReporter.summarize`."""
    return HistogramReporter().summarize(reservoir, total_read, bucket_count)
