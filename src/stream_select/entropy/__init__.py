"""Entropy source subsystem for stream-select.

Re-exports the ABC, registry, and all built-in source implementations
for convenient access::

    from stream_select.entropy import EntropySource, EntropySourceRegistry
    from stream_select.entropy import SystemEntropySource, SeededEntropySource
"""

from stream_select.entropy.base import EntropySource
from stream_select.entropy.fallback import FallbackEntropySource
from stream_select.entropy.registry import EntropySourceRegistry, register_entropy_source
from stream_select.entropy.seeded import SeededEntropySource
from stream_select.entropy.system import SystemEntropySource

__all__ = [
    "EntropySource",
    "EntropySourceRegistry",
    "FallbackEntropySource",
    "SeededEntropySource",
    "SystemEntropySource",
    "register_entropy_source",
]
