"""Abstract base class for all entropy sources.

Every entropy source, whether OS randomness, a seeded generator or a test
double, implements this interface. The ABC provides a default
``get_random_below()`` built on ``get_random_bytes()`` and a concrete
``health_check()`` method. Subclasses must implement the four abstract
members: ``name``, ``is_available``, ``get_random_bytes()``, and ``close()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class EntropySource(ABC):
    """Abstract base for all entropy sources.

    Implementations must provide uniformly distributed random bytes on
    demand. Integer draws derived from them are exactly uniform for any
    bound, which reservoir sampling relies on for streams of billions of
    records.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable source identifier (e.g., ``'system'``, ``'seeded'``)."""

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the source can currently provide entropy."""

    @abstractmethod
    def get_random_bytes(self, n: int) -> bytes:
        """Return exactly *n* random bytes.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes of entropy.

        Raises:
            EntropyUnavailableError: If the source cannot provide bytes.
        """

    def get_random_below(self, bound: int) -> int:
        """Return a uniformly distributed integer in ``[0, bound)``.

        The default implementation draws just enough whole bytes to cover
        ``bound - 1``, masks the surplus high bits and rejects values
        outside the range. Each attempt succeeds with probability above
        one half, and no value is favoured (no modulo bias) regardless of
        how large *bound* is.

        Args:
            bound: Exclusive upper limit; must be positive.

        Returns:
            An integer ``r`` with ``0 <= r < bound``.

        Raises:
            ValueError: If *bound* is not positive.
            EntropyUnavailableError: If the source cannot provide bytes.
        """
        if bound <= 0:
            raise ValueError(f"bound must be positive, got {bound}")
        if bound == 1:
            return 0

        num_bits = (bound - 1).bit_length()
        num_bytes = (num_bits + 7) // 8
        surplus = num_bytes * 8 - num_bits
        while True:
            value = int.from_bytes(self.get_random_bytes(num_bytes), "big") >> surplus
            if value < bound:
                return value

    @abstractmethod
    def close(self) -> None:
        """Release resources (generators, file handles)."""

    def health_check(self) -> dict[str, Any]:
        """Return a status dictionary for this source.

        Returns:
            Dictionary with at least ``'source'`` and ``'healthy'`` keys.
        """
        return {"source": self.name, "healthy": self.is_available}
