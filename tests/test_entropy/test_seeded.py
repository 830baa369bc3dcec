"""Tests for SeededEntropySource."""

from __future__ import annotations

import numpy as np

from stream_select.entropy.seeded import SeededEntropySource


class TestSeededEntropySource:
    """Tests for the numpy-backed seeded source."""

    def test_name(self) -> None:
        assert SeededEntropySource().name == "seeded"

    def test_is_always_available(self) -> None:
        assert SeededEntropySource().is_available is True

    def test_seed_property(self) -> None:
        assert SeededEntropySource(seed=9).seed == 9
        assert SeededEntropySource().seed is None

    def test_returns_correct_byte_count(self) -> None:
        source = SeededEntropySource(seed=42)
        for n in (0, 1, 10, 1024):
            data = source.get_random_bytes(n)
            assert isinstance(data, bytes)
            assert len(data) == n

    def test_seeded_reproducibility(self) -> None:
        """Same seed must produce identical output."""
        a = SeededEntropySource(seed=123)
        b = SeededEntropySource(seed=123)
        assert a.get_random_bytes(100) == b.get_random_bytes(100)
        assert [a.get_random_below(1000) for _ in range(50)] == [
            b.get_random_below(1000) for _ in range(50)
        ]

    def test_different_seeds_differ(self) -> None:
        a = SeededEntropySource(seed=1).get_random_bytes(100)
        b = SeededEntropySource(seed=2).get_random_bytes(100)
        assert a != b

    def test_bytes_roughly_uniform(self) -> None:
        data = SeededEntropySource(seed=42).get_random_bytes(100_000)
        arr = np.frombuffer(data, dtype=np.uint8)
        assert abs(arr.mean() - 127.5) < 1.5
        assert arr.min() == 0
        assert arr.max() == 255

    def test_random_below_in_range(self) -> None:
        source = SeededEntropySource(seed=5)
        for bound in (1, 2, 7, 2**32, 2**63, 2**63 + 1, 2**64, 2**80):
            for _ in range(50):
                assert 0 <= source.get_random_below(bound) < bound

    def test_random_below_returns_python_int(self) -> None:
        value = SeededEntropySource(seed=5).get_random_below(10)
        assert type(value) is int

    def test_random_below_wide_bound_reaches_high_values(self) -> None:
        """Draws over [0, 2**62) must not be confined to a 31-bit range."""
        source = SeededEntropySource(seed=3)
        draws = [source.get_random_below(2**62) for _ in range(100)]
        assert max(draws) > 2**40

    def test_health_check(self) -> None:
        health = SeededEntropySource(seed=1).health_check()
        assert health["source"] == "seeded"
        assert health["healthy"] is True
