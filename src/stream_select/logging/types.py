"""Data types for the diagnostic logging subsystem."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RunRecord:
    """Immutable record of one selection run.

    Attributes:
        timestamp_ns: Wall-clock start of the run (nanoseconds since epoch).
        elapsed_ms: Time spent pulling and selecting (milliseconds).
        mode: ``'normal'`` or ``'random'``.
        sort_order: Comparator policy used for the results.
        result_count: Requested K.
        effective_count: Records actually reported (< K for short streams).
        total_read: Records pulled from the source.
        batches: Non-empty batches ingested (normal mode, else 0).
        replacements: Reservoir slot overwrites (random mode, else 0).
        entropy_source_used: Source of random draws, or ``''`` in normal mode.
        config_hash: 16-char SHA-256 prefix of the active config.
    """

    # Timing
    timestamp_ns: int
    elapsed_ms: float

    # Selection
    mode: str
    sort_order: str
    result_count: int
    effective_count: int
    total_read: int
    batches: int
    replacements: int

    # Randomness
    entropy_source_used: str

    # Config snapshot
    config_hash: str
