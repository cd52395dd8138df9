"""
MTrk track chunk codec.
"""

from typing import List

from smfkit.errors import TrackLengthMismatch, TruncatedTrack, UnexpectedEof
from smfkit.formats.smf.cursor import ByteSource
from smfkit.formats.smf.events import EventDecoder, EventEncoder, RunningStatus
from smfkit.models.event import TrackEvent
from smfkit.models.track import TrackChunk


def decode_track(payload: ByteSource, strict: bool = False) -> TrackChunk:
    """
    Decode every event in a track payload window.

    The window must be consumed exactly: each event either ends inside it
    or the whole track is rejected.

    Args:
        payload: Cursor over exactly the chunk's declared payload
        strict: Reject system common/real-time status bytes

    Returns:
        Decoded TrackChunk

    Raises:
        TruncatedTrack: If trailing bytes cannot form a delta-time and status
        TrackLengthMismatch: If an event runs past the end of the payload
        NoRunningStatus: If a data byte appears before any channel status
        InvalidStatusByte: For status bytes in data positions (or system
            bytes in strict mode)
    """
    decoder = EventDecoder(strict=strict)
    events: List[TrackEvent] = []

    while payload.remaining() > 0:
        start = getattr(payload, "position", None)
        left = payload.remaining()

        try:
            delta_time = decoder.read_delta_time(payload)
            payload.peek(1)
        except UnexpectedEof as exc:
            raise TruncatedTrack(
                f"{left} trailing byte(s) after event {len(events)} "
                "do not form an event",
                start,
            ) from exc

        try:
            message = decoder.read_message(payload)
        except UnexpectedEof as exc:
            raise TrackLengthMismatch(
                f"Event {len(events)} runs past the end of the track payload", start
            ) from exc

        events.append(TrackEvent(delta_time, message))

    return TrackChunk(tuple(events))


def encode_track(
    track: TrackChunk, running_status: RunningStatus = RunningStatus.EXPLICIT
) -> bytes:
    """
    Encode a track's events into an MTrk payload.

    Args:
        track: Track to encode
        running_status: Status byte policy for channel messages

    Returns:
        Payload bytes (without the chunk framing)
    """
    encoder = EventEncoder(running_status)
    return b"".join(encoder.encode_event(event) for event in track.events)
