"""
SMF chunk framing.

Every chunk starts with an 8-byte header:

    TT TT TT TT  LL LL LL LL  [payload...]

Where:
    - TT: 4 tag bytes ("MThd", "MTrk", or anything else)
    - LL: payload length, big-endian unsigned 32-bit
"""

import struct
from typing import Optional, Tuple

from smfkit.errors import UnexpectedEof
from smfkit.formats.smf.cursor import ByteCursor, ByteSource
from smfkit.models.chunk import CHUNK_HEADER_SIZE, Chunk
from smfkit.utils.validation import validate_chunk_tag, validate_u32

_LENGTH = struct.Struct(">I")


def read_chunk_header(source: ByteSource) -> Chunk:
    """
    Read the 8-byte framing header.

    Args:
        source: Byte source positioned at a chunk boundary

    Returns:
        Chunk with tag and declared length

    Raises:
        UnexpectedEof: If fewer than 8 bytes remain
    """
    if source.remaining() < CHUNK_HEADER_SIZE:
        raise UnexpectedEof(
            f"Chunk header needs {CHUNK_HEADER_SIZE} bytes, only {source.remaining()} remain",
            getattr(source, "position", None),
        )
    raw = source.read_exact(CHUNK_HEADER_SIZE)
    (length,) = _LENGTH.unpack(raw[4:])
    return Chunk(tag=raw[:4], length=length)


def read_chunk(source: ByteSource) -> Optional[Tuple[Chunk, ByteCursor]]:
    """
    Frame the next chunk off a byte source.

    Args:
        source: Byte source positioned at a chunk boundary

    Returns:
        Tuple of (chunk header, cursor over exactly ``length`` payload
        bytes), or None when the source is exhausted

    Raises:
        UnexpectedEof: If the header or payload is cut short
    """
    if source.remaining() == 0:
        return None

    chunk = read_chunk_header(source)
    if chunk.length > source.remaining():
        raise UnexpectedEof(
            f"{chunk.name} chunk declares {chunk.length} bytes, "
            f"only {source.remaining()} remain",
            getattr(source, "position", None),
        )

    if hasattr(source, "window"):
        payload = source.window(chunk.length)
    else:
        payload = ByteCursor(source.read_exact(chunk.length))
    return chunk, payload


def write_chunk(tag: bytes, payload: bytes) -> bytes:
    """
    Frame a payload as a chunk.

    The length field is always computed from the payload itself.

    Args:
        tag: 4 tag bytes
        payload: Chunk payload

    Returns:
        Header followed by payload
    """
    validate_chunk_tag(tag)
    validate_u32(len(payload), "chunk length")
    return bytes(tag) + _LENGTH.pack(len(payload)) + bytes(payload)


def encode_chunk_header(chunk: Chunk) -> bytes:
    """Encode a framing header on its own."""
    return chunk.tag + _LENGTH.pack(chunk.length)
