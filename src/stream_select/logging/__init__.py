"""Diagnostic logging subsystem for stream-select.

Provides immutable per-run records and a configurable logger that supports
none/summary/full verbosity and in-memory diagnostic mode.
"""

from stream_select.logging.logger import RunLogger
from stream_select.logging.types import RunRecord

__all__ = [
    "RunLogger",
    "RunRecord",
]
