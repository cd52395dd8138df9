"""
MThd header chunk codec.

Header payload (6 bytes, big-endian):
    0x00-0x01: format (0, 1 or 2)
    0x02-0x03: number of track chunks
    0x04-0x05: division
"""

import struct

from smfkit.errors import InvalidHeaderChunk
from smfkit.formats.smf.cursor import ByteSource
from smfkit.models.chunk import HEADER_TAG, Chunk
from smfkit.models.header import Format, HeaderChunk, division_from_raw

HEADER_LENGTH = 6

_HEADER = struct.Struct(">HHH")


def decode_header(chunk: Chunk, payload: ByteSource) -> HeaderChunk:
    """
    Decode a header chunk payload.

    Args:
        chunk: Framing header (must be MThd with length 6)
        payload: The chunk's payload window

    Returns:
        Decoded HeaderChunk

    Raises:
        InvalidHeaderChunk: If tag or length is wrong
        InvalidFormat: If the format field is not 0, 1 or 2
    """
    if chunk.tag != HEADER_TAG:
        raise InvalidHeaderChunk(f"Expected MThd chunk, got {chunk.name}")
    if chunk.length != HEADER_LENGTH:
        raise InvalidHeaderChunk(
            f"MThd chunk must be {HEADER_LENGTH} bytes, declared {chunk.length}"
        )

    fmt, track_count, division = _HEADER.unpack(payload.read_exact(HEADER_LENGTH))

    return HeaderChunk(
        format=Format.from_raw(fmt),
        track_count=track_count,
        division=division_from_raw(division),
    )


def encode_header(header: HeaderChunk) -> bytes:
    """
    Encode the 6-byte header payload.

    Args:
        header: Header to encode

    Returns:
        Payload bytes (without the chunk framing)
    """
    return _HEADER.pack(int(header.format), header.track_count, header.division.to_raw())
