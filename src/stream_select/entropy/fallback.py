"""Fallback entropy source: a composition wrapper with transparent failover.

``FallbackEntropySource`` wraps a *primary* and a *fallback* source. When the
primary raises :class:`~stream_select.exceptions.EntropyUnavailableError`,
the wrapper delegates to the fallback. All other exceptions propagate
unchanged; only entropy unavailability is recoverable.
"""

from __future__ import annotations

import logging
from typing import Any

from stream_select.entropy.base import EntropySource
from stream_select.exceptions import EntropyUnavailableError

logger = logging.getLogger("stream_select")


class FallbackEntropySource(EntropySource):
    """Tries the primary source, falls back on ``EntropyUnavailableError``.

    Integer draws go through the inherited byte-level rejection sampler,
    so a single draw may mix bytes from both sources if the primary fails
    mid-draw. Both sources are uniform, so the draw stays uniform.

    Args:
        primary: The preferred entropy source.
        fallback: The source to use when the primary is unavailable.
    """

    def __init__(self, primary: EntropySource, fallback: EntropySource) -> None:
        self._primary = primary
        self._fallback = fallback
        self._last_source_used: str = primary.name
        self._fallback_count = 0

    @property
    def name(self) -> str:
        """Return a compound name: ``'<primary>+<fallback>'``."""
        return f"{self._primary.name}+{self._fallback.name}"

    @property
    def primary(self) -> EntropySource:
        """The preferred source."""
        return self._primary

    @property
    def is_available(self) -> bool:
        """``True`` if either the primary or the fallback is available."""
        return self._primary.is_available or self._fallback.is_available

    @property
    def last_source_used(self) -> str:
        """Name of the source that provided bytes on the last call."""
        return self._last_source_used

    @property
    def fallback_count(self) -> int:
        """Number of calls that were served by the fallback."""
        return self._fallback_count

    def get_random_bytes(self, n: int) -> bytes:
        """Fetch bytes from the primary source, falling back if unavailable.

        Raises:
            EntropyUnavailableError: If both primary and fallback fail.
        """
        try:
            data = self._primary.get_random_bytes(n)
        except EntropyUnavailableError:
            if self._fallback_count == 0:
                logger.warning(
                    "Primary entropy source %r unavailable, falling back to %r",
                    self._primary.name,
                    self._fallback.name,
                )
            data = self._fallback.get_random_bytes(n)
            self._last_source_used = self._fallback.name
            self._fallback_count += 1
            return data
        self._last_source_used = self._primary.name
        return data

    def close(self) -> None:
        """Close both primary and fallback sources."""
        self._primary.close()
        self._fallback.close()

    def health_check(self) -> dict[str, Any]:
        """Return health status for both sources."""
        return {
            "source": self.name,
            "healthy": self.is_available,
            "primary": self._primary.health_check(),
            "fallback": self._fallback.health_check(),
            "last_source_used": self._last_source_used,
            "fallback_count": self._fallback_count,
        }
