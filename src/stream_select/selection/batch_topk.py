"""Batched top-K selection.

Keeps the best K records seen so far. Each batch is appended to the
candidates, the candidates are re-sorted and then cut back to K:

    candidates = sort(candidates + batch)[:k]

Re-sorting everything per batch is simpler than a heap and costs little,
since the candidate set never exceeds ``k + batch_size`` records. Memory is
O(k + batch_size) however long the stream is.
"""

from __future__ import annotations

from itertools import islice
from typing import TYPE_CHECKING

from stream_select.exceptions import InvalidConfigurationError
from stream_select.ordering import SortOrder

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from stream_select.types import Record

DEFAULT_BATCH_SIZE = 1000


def iter_batches(source: Iterable[Record], batch_size: int) -> Iterator[list[Record]]:
    """Pull *source* in lists of *batch_size* records.

    The last batch may be shorter. An exhausted source yields one final
    empty list, which is the end-of-stream signal for
    :meth:`BatchTopKSelector.ingest_batch`.

    Raises:
        InvalidConfigurationError: If *batch_size* is not positive.
    """
    if batch_size <= 0:
        raise InvalidConfigurationError(f"batch_size must be > 0, got {batch_size}")
    return _batches(iter(source), batch_size)


def _batches(it: Iterator[Record], batch_size: int) -> Iterator[list[Record]]:
    while True:
        batch = list(islice(it, batch_size))
        yield batch
        if not batch:
            return


class BatchTopKSelector:
    """Maintains the best *k* records across repeatedly ingested batches.

    Args:
        k: Number of records to keep. Must be positive.
        order: Comparator policy, fixed for the lifetime of the selector.

    Raises:
        InvalidConfigurationError: If *k* is not positive.
    """

    def __init__(self, k: int, order: SortOrder | str = SortOrder.DESCENDING) -> None:
        if k <= 0:
            raise InvalidConfigurationError(f"result count must be > 0, got {k}")
        self._k = k
        self._order = SortOrder.parse(order)
        self._candidates: list[Record] = []
        self._batches = 0
        self._total_read = 0
        self._finished = False

    @property
    def k(self) -> int:
        """Current result count; lowered once at end-of-stream if fewer records arrived."""
        return self._k

    @property
    def order(self) -> SortOrder:
        return self._order

    @property
    def total_read(self) -> int:
        """Number of records ingested so far."""
        return self._total_read

    @property
    def batches(self) -> int:
        """Number of non-empty batches ingested so far."""
        return self._batches

    @property
    def finished(self) -> bool:
        """Whether the end-of-stream batch has been seen."""
        return self._finished

    @property
    def results(self) -> list[Record]:
        """Current best records, best first."""
        return list(self._candidates)

    def ingest_batch(self, records: Sequence[Record]) -> bool:
        """Merge one batch into the running selection.

        Args:
            records: The next chunk pulled from the source.

        Returns:
            ``True`` if the caller should keep feeding batches, ``False``
            once an empty batch signalled end-of-stream.
        """
        if not records:
            # End of stream: the result count can only ever shrink from here.
            self._k = min(self._k, len(self._candidates))
            self._finished = True
            return False

        self._batches += 1
        self._total_read += len(records)
        candidates = self._candidates + list(records)
        self._candidates = self._order.sort(candidates)[: self._k]
        return True

    def run(self, source: Iterable[Record], batch_size: int = DEFAULT_BATCH_SIZE) -> list[Record]:
        """Feed *source* through the selector in batches and return the result.

        Raises:
            InvalidConfigurationError: If *batch_size* is not positive.
        """
        for batch in iter_batches(source, batch_size):
            if not self.ingest_batch(batch):
                break
        return self.results
