"""System entropy source using ``os.urandom()``.

This is the default source and the default fallback. It is cryptographically
secure and always available on all platforms.
"""

from __future__ import annotations

import os

from stream_select.entropy.base import EntropySource
from stream_select.entropy.registry import register_entropy_source


@register_entropy_source("system")
class SystemEntropySource(EntropySource):
    """``os.urandom()`` wrapper, always available."""

    @property
    def name(self) -> str:
        """Return ``'system'``."""
        return "system"

    @property
    def is_available(self) -> bool:
        """Always returns ``True``; ``os.urandom()`` does not fail."""
        return True

    def get_random_bytes(self, n: int) -> bytes:
        """Return *n* bytes from the OS CSPRNG.

        Args:
            n: Number of random bytes to generate.

        Returns:
            Exactly *n* bytes of entropy from ``os.urandom()``.
        """
        return os.urandom(n)

    def close(self) -> None:
        """No-op; nothing to release."""
