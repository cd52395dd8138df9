"""
Chunk level data models.
"""

from dataclasses import dataclass
from typing import Any, Dict, Union

from smfkit.errors import ValidationError
from smfkit.models.header import HeaderChunk
from smfkit.models.track import TrackChunk
from smfkit.utils.validation import validate_chunk_tag, validate_u32

HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"
CHUNK_HEADER_SIZE = 8


def tag_to_str(tag: bytes) -> str:
    """Render a chunk tag for display; non-printable bytes become escapes."""
    return "".join(chr(b) if 32 <= b < 127 else f"\\x{b:02x}" for b in tag)


@dataclass(frozen=True)
class Chunk:
    """
    Framing header of a chunk.

    Attributes:
        tag: 4 raw tag bytes
        length: Number of payload bytes that follow the header
    """

    tag: bytes
    length: int

    def __post_init__(self):
        validate_chunk_tag(self.tag)
        object.__setattr__(self, "tag", bytes(self.tag))
        validate_u32(self.length, "length")

    @property
    def name(self) -> str:
        return tag_to_str(self.tag)

    @property
    def total_size(self) -> int:
        return CHUNK_HEADER_SIZE + self.length

    def __str__(self) -> str:
        return f"{self.name} ({self.length} bytes)"


@dataclass(frozen=True)
class UnknownChunk:
    """
    A chunk whose tag the codec does not interpret.

    The payload is kept as-is and re-encoded unchanged.
    """

    tag: bytes
    data: bytes = b""

    def __post_init__(self):
        validate_chunk_tag(self.tag)
        object.__setattr__(self, "tag", bytes(self.tag))
        if self.tag in (HEADER_TAG, TRACK_TAG):
            raise ValidationError(f"{tag_to_str(self.tag)} is a reserved chunk tag")
        object.__setattr__(self, "data", bytes(self.data))
        validate_u32(len(self.data), "length")

    @property
    def name(self) -> str:
        return tag_to_str(self.tag)

    def to_dict(self) -> Dict[str, Any]:
        return {"chunk": "unknown", "tag": self.name, "data": self.data.hex()}


ParsedChunk = Union[HeaderChunk, TrackChunk, UnknownChunk]
