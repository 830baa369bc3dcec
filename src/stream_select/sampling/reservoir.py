"""Uniform reservoir sampling (Algorithm R).

Selects *k* records uniformly at random from a stream of unknown length in
a single pass with O(k) memory:

    1. The first k records fill the reservoir (arrival indices 0..k-1).
    2. Record i (i >= k) draws r uniformly from [0, i]. If r < k it replaces
       slot r, otherwise it is read and dropped.

Record i is therefore retained with probability k / (i + 1) when it
arrives, and every record of an N-record stream ends up in the sample with
probability k / N. This only holds if r is exactly uniform over [0, i] and
arrivals are processed strictly in order, so draws come from
:meth:`EntropySource.get_random_below` and the sampler is single-writer.

References:
    Vitter, J. S. (1985). Random sampling with a reservoir.
    ACM Transactions on Mathematical Software, 11(1), 37-57.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from stream_select.entropy.system import SystemEntropySource
from stream_select.exceptions import InvalidConfigurationError
from stream_select.types import ReservoirResult, SampleSlot

if TYPE_CHECKING:
    from collections.abc import Iterable

    from stream_select.entropy.base import EntropySource
    from stream_select.types import Record

logger = logging.getLogger("stream_select")


class ReservoirSampler:
    """Fixed-size uniform sample over a stream.

    Records can be pushed one at a time with :meth:`offer` or a whole
    source can be pulled with :meth:`run`.

    Args:
        k: Reservoir size. Must be positive.
        entropy_source: Source of uniform integer draws. Defaults to
            :class:`SystemEntropySource`.

    Raises:
        InvalidConfigurationError: If *k* is not positive.
    """

    def __init__(self, k: int, entropy_source: EntropySource | None = None) -> None:
        if k <= 0:
            raise InvalidConfigurationError(f"reservoir size must be > 0, got {k}")
        self._k = k
        self._entropy = entropy_source if entropy_source is not None else SystemEntropySource()
        self._slots: list[SampleSlot] = []
        self._total_read = 0
        self._replacements = 0

    @property
    def k(self) -> int:
        return self._k

    @property
    def total_read(self) -> int:
        """Records seen so far, including the ones that filled the reservoir."""
        return self._total_read

    @property
    def replacements(self) -> int:
        """How many times a retained slot was overwritten."""
        return self._replacements

    @property
    def entropy_source(self) -> EntropySource:
        return self._entropy

    def offer(self, record: Record) -> bool:
        """Present the next stream record to the reservoir.

        Args:
            record: The record at arrival index ``total_read``.

        Returns:
            ``True`` if the record was retained.
        """
        index = self._total_read
        self._total_read += 1

        if index < self._k:
            self._slots.append(SampleSlot(record, index))
            return True

        r = self._entropy.get_random_below(index + 1)
        if r < self._k:
            self._slots[r] = SampleSlot(record, index)
            self._replacements += 1
            return True
        return False

    def run(self, source: Iterable[Record]) -> ReservoirResult:
        """Sample every record of *source* and return the final reservoir.

        A source shorter than *k* is retained in full.
        """
        for record in source:
            self.offer(record)

        if self._total_read < self._k:
            logger.debug(
                "Stream ended after %d records (< k=%d); keeping all of them",
                self._total_read,
                self._k,
            )
        return self.result()

    def result(self) -> ReservoirResult:
        """Snapshot of the current reservoir, in slot order."""
        return ReservoirResult(slots=tuple(self._slots), total_read=self._total_read)
