"""
ParsedChunk assembler.

Frames a chunk and dispatches on its tag:

    MThd -> HeaderChunk
    MTrk -> TrackChunk
    other -> UnknownChunk (payload kept opaque)
"""

import logging
from typing import Iterator, Optional

from smfkit.formats.smf.chunk import read_chunk, write_chunk
from smfkit.formats.smf.cursor import ByteSource
from smfkit.formats.smf.events import RunningStatus
from smfkit.formats.smf.header import decode_header, encode_header
from smfkit.formats.smf.track import decode_track, encode_track
from smfkit.models.chunk import HEADER_TAG, TRACK_TAG, Chunk, ParsedChunk, UnknownChunk
from smfkit.models.header import HeaderChunk
from smfkit.models.track import TrackChunk

logger = logging.getLogger(__name__)


def parse_chunk(chunk: Chunk, payload: ByteSource, strict: bool = False) -> ParsedChunk:
    """
    Interpret an already framed chunk payload.

    Args:
        chunk: Framing header
        payload: Cursor over exactly ``chunk.length`` bytes
        strict: Passed to the track codec

    Returns:
        HeaderChunk, TrackChunk or UnknownChunk
    """
    if chunk.tag == HEADER_TAG:
        return decode_header(chunk, payload)
    if chunk.tag == TRACK_TAG:
        return decode_track(payload, strict=strict)
    return UnknownChunk(chunk.tag, payload.read_exact(chunk.length))


def decode_chunk(source: ByteSource, strict: bool = False) -> Optional[ParsedChunk]:
    """
    Decode the next chunk from a byte source.

    Args:
        source: Byte source positioned at a chunk boundary
        strict: Reject system common/real-time bytes inside tracks

    Returns:
        Decoded chunk, or None when the source is exhausted

    Raises:
        UnexpectedEof: If a chunk header or payload is cut short
        SMFError: Any header or track decoding error
    """
    framed = read_chunk(source)
    if framed is None:
        return None

    chunk, payload = framed
    logger.debug("Framed %s", chunk)
    return parse_chunk(chunk, payload, strict=strict)


def iter_chunks(source: ByteSource, strict: bool = False) -> Iterator[ParsedChunk]:
    """Yield decoded chunks until the source is exhausted."""
    while True:
        parsed = decode_chunk(source, strict=strict)
        if parsed is None:
            return
        yield parsed


def encode_chunk(
    parsed: ParsedChunk, running_status: RunningStatus = RunningStatus.EXPLICIT
) -> bytes:
    """
    Encode a chunk including its 8-byte framing header.

    Args:
        parsed: HeaderChunk, TrackChunk or UnknownChunk
        running_status: Status byte policy for track chunks

    Returns:
        Framed chunk bytes
    """
    if isinstance(parsed, HeaderChunk):
        return write_chunk(HEADER_TAG, encode_header(parsed))
    if isinstance(parsed, TrackChunk):
        return write_chunk(TRACK_TAG, encode_track(parsed, running_status))
    if isinstance(parsed, UnknownChunk):
        return write_chunk(parsed.tag, parsed.data)
    raise TypeError(f"Cannot encode {type(parsed).__name__} as a chunk")
