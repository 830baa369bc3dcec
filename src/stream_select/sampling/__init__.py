"""Random sampling subsystem for stream-select.

Single-pass uniform reservoir sampling (Algorithm R) driven by a pluggable
entropy source.
"""

from stream_select.sampling.reservoir import ReservoirSampler

__all__ = [
    "ReservoirSampler",
]
