"""Shared pytest fixtures for stream-select tests.

Provides reusable configuration objects, seeded entropy sources, and small
record streams used across multiple test modules.
"""

from __future__ import annotations

import pytest

from stream_select.config import StreamSelectConfig
from stream_select.entropy.seeded import SeededEntropySource
from stream_select.types import Record


@pytest.fixture
def default_config() -> StreamSelectConfig:
    """Return a StreamSelectConfig with all default values."""
    return StreamSelectConfig()


@pytest.fixture
def silent_config() -> StreamSelectConfig:
    """Return a config with no logging for noise-free tests."""
    return StreamSelectConfig(log_level="none")


@pytest.fixture
def random_config() -> StreamSelectConfig:
    """Return a silent random-mode config on a seeded source."""
    return StreamSelectConfig(
        mode="random",
        result_count=5,
        bucket_count=4,
        entropy_source_type="seeded",
        seed=42,
        log_level="none",
    )


@pytest.fixture
def seeded_source() -> SeededEntropySource:
    """Return a SeededEntropySource with a fixed seed for reproducibility."""
    return SeededEntropySource(seed=42)


@pytest.fixture
def scenario_records() -> list[Record]:
    """The four-record stream [(a,5),(b,1),(c,9),(d,3)]."""
    return [
        Record("a", 5),
        Record("b", 1),
        Record("c", 9),
        Record("d", 3),
    ]
