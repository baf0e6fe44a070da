"""
gzstream.base - errors and stream enumerations

(c) 2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from enum import Enum


class StreamError(Exception):
    """Base class for gzstream errors."""


class CodecError(StreamError):
    """
    Compressed data could not be produced or consumed.
    Raised for malformed or truncated input, checksum mismatches,
    trailing garbage and use of a codec after its terminal frame.
    """


class StreamIOError(StreamError, OSError):
    """The underlying sink or source failed."""


class Ownership(Enum):
    """Whether closing a stream also closes the handle it wraps."""

    OWNS = 'owns'
    BORROWS = 'borrows'


class StreamState(Enum):
    """Life cycle of a compressing or decompressing stream."""

    OPEN = 'open'
    FLUSHING = 'flushing'
    CLOSED = 'closed'
