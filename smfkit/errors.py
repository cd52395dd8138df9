"""
Exceptions raised by the Standard MIDI File codec.

Every error is locally recoverable: decoding functions raise as soon as a
constraint is violated and leave the decision to abort or resynchronise to
the caller.
"""

from typing import Optional


class SMFError(Exception):
    """Base class for all codec errors."""

    def __init__(self, message: str, offset: Optional[int] = None):
        self.offset = offset
        if offset is not None:
            message = f"{message} (at offset 0x{offset:X})"
        super().__init__(message)


class UnexpectedEof(SMFError):
    """Raised when the byte source runs out in the middle of a structure."""

    pass


class InvalidHeaderChunk(SMFError):
    """Raised when a header chunk has the wrong tag or length."""

    pass


class InvalidFormat(SMFError):
    """Raised when the header format field is not 0, 1 or 2."""

    pass


class MalformedQuantity(SMFError):
    """Raised when a variable-length quantity exceeds 4 bytes / 28 bits."""

    pass


class TruncatedQuantity(MalformedQuantity, UnexpectedEof):
    """A variable-length quantity cut off by the end of the data."""

    pass


class NoRunningStatus(SMFError):
    """Raised when a data byte appears with no channel status in scope."""

    pass


class TrackLengthMismatch(SMFError):
    """Raised when an event runs past the end of its track payload."""

    pass


class TruncatedTrack(SMFError):
    """Raised when trailing track bytes cannot form a complete event."""

    pass


class InvalidStatusByte(SMFError):
    """
    Raised for a status byte in a data byte position, or for a system
    status byte inside a track in strict mode.
    """

    pass


class InvalidMetaEvent(SMFError):
    """Raised when a meta event payload does not match its declared type."""

    pass


class ValidationError(SMFError):
    """Raised when a model is built with out-of-range field values."""

    pass
