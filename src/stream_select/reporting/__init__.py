"""Sampling-quality reporting for stream-select."""

from stream_select.reporting.histogram import HistogramReporter, summarize

__all__ = [
    "HistogramReporter",
    "summarize",
]
