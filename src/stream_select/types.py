"""Data types shared by the selection, sampling and reporting subsystems."""

from __future__ import annotations

from dataclasses import dataclass

# Scores are signed 64-bit integers.
SCORE_MIN: int = -(2**63)
SCORE_MAX: int = 2**63 - 1


@dataclass(frozen=True, slots=True)
class Record:
    """A single (key, score) record produced by a record source.

    Attributes:
        key: Non-empty identifier (e.g. a URL). Format is validated by
            the source, not by the core.
        score: Signed 64-bit integer used for ordering.
    """

    key: str
    score: int


@dataclass(frozen=True, slots=True)
class SampleSlot:
    """A record retained by the reservoir, tagged with its stream position.

    Attributes:
        record: The retained record.
        arrival_index: 0-based position at which the record was read.
    """

    record: Record
    arrival_index: int


@dataclass(frozen=True, slots=True)
class ReservoirResult:
    """Final state of a reservoir sampling run.

    Attributes:
        slots: Retained samples, at most ``k`` of them.
        total_read: Number of records read from the source, including
            the ones used to fill the reservoir.
    """

    slots: tuple[SampleSlot, ...]
    total_read: int


@dataclass(frozen=True, slots=True)
class Bucket:
    """Count of retained samples in one arrival-index range.

    The range is the half-open interval ``(upper_bound - bucket_width,
    upper_bound]``; the last bucket of a report may be wider.

    Attributes:
        count: Number of samples whose arrival index falls in the range.
        upper_bound: Inclusive upper arrival index of the range.
    """

    count: int
    upper_bound: int


@dataclass(frozen=True, slots=True)
class HistogramReport:
    """Distribution of retained arrival indices over the whole stream.

    Attributes:
        buckets: Dense buckets in ascending ``upper_bound`` order.
        bucket_width: Nominal width of each bucket.
        total_read: Length of the stream the report covers.
        unassigned: Samples that no bucket accepted.
    """

    buckets: tuple[Bucket, ...]
    bucket_width: int
    total_read: int
    unassigned: tuple[SampleSlot, ...]

    @property
    def total_count(self) -> int:
        """Sum of all bucket counts."""
        return sum(b.count for b in self.buckets)
