"""Exception hierarchy for stream-select.

All exceptions derive from StreamSelectError, enabling broad catch patterns
at the application boundary while allowing fine-grained handling internally.
Running out of records is never an exception: sources signal end-of-stream
by exhaustion.
"""


class StreamSelectError(Exception):
    """Base exception for all stream-select errors."""


class InvalidConfigurationError(StreamSelectError):
    """A selection run was configured with invalid parameters.

    Raised before any record is pulled from the source, e.g. for a result
    count, batch size or bucket count that is not positive, or an unknown
    sort order, mode or entropy source.
    """


class EntropyUnavailableError(StreamSelectError):
    """No entropy source can provide bytes.

    Raised when the primary entropy source fails and either no fallback
    is configured or the fallback also fails.
    """


class RecordFormatError(StreamSelectError):
    """A text line could not be parsed into a record.

    Raised by the line reader before the record reaches the selection core.
    The core itself never receives malformed records.
    """
