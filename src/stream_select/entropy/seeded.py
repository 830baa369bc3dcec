"""Seeded pseudo-random entropy source for tests and repeatable local runs.

Backed by numpy's ``Generator`` (PCG64). Output is repeatable for a given
seed on one numpy version; no promise is made across platforms or releases.
"""

from __future__ import annotations

import numpy as np

from stream_select.entropy.base import EntropySource
from stream_select.entropy.registry import register_entropy_source

# Bounds from here up go through the byte-level sampler.
_NUMPY_INT64_LIMIT = 2**63


@register_entropy_source("seeded")
class SeededEntropySource(EntropySource):
    """Uniform pseudo-random bytes from ``numpy.random.default_rng(seed)``.

    Args:
        seed: Optional RNG seed. ``None`` seeds from fresh OS entropy.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._seed = seed
        self._rng = np.random.default_rng(seed)

    @property
    def name(self) -> str:
        """Return ``'seeded'``."""
        return "seeded"

    @property
    def is_available(self) -> bool:
        """Always returns ``True``."""
        return True

    @property
    def seed(self) -> int | None:
        """The seed this source was created with."""
        return self._seed

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* uniformly distributed pseudo-random bytes.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes.
        """
        return self._rng.bytes(n)

    def get_random_below(self, bound: int) -> int:
        """Uniform integer in ``[0, bound)`` via ``Generator.integers``.

        numpy's bounded integer generation is unbiased; bounds past the
        int64 range go through the byte-level rejection sampler.
        """
        if 0 < bound < _NUMPY_INT64_LIMIT:
            return int(self._rng.integers(bound))
        return super().get_random_below(bound)

    def close(self) -> None:
        """No-op; nothing to release."""
