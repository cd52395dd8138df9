"""
Track event codec.

Each track event is a VLQ delta-time followed by one message:

    Channel:  [status] data1 [data2]    status 0x80-0xEF
    Meta:     FF type <vlq length> data
    SysEx:    F0 <vlq length> data      (F7 for continuation/escape)

A channel message may omit its status byte ("running status"), in which
case the status of the previous channel message in the same track applies.
The register holding that status lives on an EventDecoder/EventEncoder
instance and must not be shared between tracks.
"""

from enum import Enum
from typing import Optional

from smfkit.errors import InvalidStatusByte, NoRunningStatus
from smfkit.formats.smf.cursor import ByteSource
from smfkit.models.event import (
    DATA_LENGTHS,
    SYSEX_ESCAPE,
    SYSEX_START,
    SYSTEM_DATA_LENGTHS,
    ChannelMessage,
    EventType,
    MidiMessage,
    SysExMessage,
    SystemMessage,
    TrackEvent,
)
from smfkit.models.meta import META_STATUS, MetaMessage
from smfkit.utils.vlq import encode_vlq, read_vlq


class RunningStatus(str, Enum):
    """Policy for emitting channel status bytes when encoding."""

    EXPLICIT = "explicit"  # always write the status byte
    COMPACT = "compact"  # omit every repeated status byte
    PRESERVE = "preserve"  # omit only where the decoded input omitted it


def _position(source: ByteSource) -> Optional[int]:
    return getattr(source, "position", None)


class EventDecoder:
    """
    Decoder for the events of one track.

    Example:
        decoder = EventDecoder()
        while payload.remaining():
            event = decoder.decode_event(payload)
    """

    def __init__(self, strict: bool = False):
        """
        Initialize decoder.

        Args:
            strict: Reject system common/real-time status bytes instead of
                decoding them as SystemMessage
        """
        self.strict = strict
        self.running_status: Optional[int] = None

    def decode_event(self, source: ByteSource) -> TrackEvent:
        """Decode one delta-time + message pair."""
        delta_time = self.read_delta_time(source)
        return TrackEvent(delta_time, self.read_message(source))

    def read_delta_time(self, source: ByteSource) -> int:
        return read_vlq(source)

    def read_message(self, source: ByteSource) -> MidiMessage:
        """
        Decode one message, updating the running status register.

        Raises:
            NoRunningStatus: If a data byte appears with no status in scope
            InvalidStatusByte: For unexpected status bytes
            UnexpectedEof: If the source runs out mid-message
        """
        offset = _position(source)
        first = source.peek(1)[0]

        if first < 0x80:
            if self.running_status is None:
                raise NoRunningStatus(
                    f"Data byte 0x{first:02X} with no running status", offset
                )
            return self._read_channel(source, self.running_status, implicit=True)

        source.read_exact(1)

        if first <= 0xEF:
            self.running_status = first
            return self._read_channel(source, first, implicit=False)

        if first == META_STATUS:
            return self._read_meta(source)

        if first in (SYSEX_START, SYSEX_ESCAPE):
            self.running_status = None
            return self._read_sysex(source, first)

        return self._read_system(source, first, offset)

    def _read_data_bytes(self, source: ByteSource, count: int) -> bytes:
        offset = _position(source)
        data = source.read_exact(count)
        for byte in data:
            if byte & 0x80:
                raise InvalidStatusByte(
                    f"Status byte 0x{byte:02X} where a data byte was expected", offset
                )
        return data

    def _read_channel(self, source: ByteSource, status: int, implicit: bool) -> ChannelMessage:
        event_type = EventType(status & 0xF0)
        data = self._read_data_bytes(source, DATA_LENGTHS[event_type])

        return ChannelMessage(
            event_type=event_type,
            channel=status & 0x0F,
            data1=data[0],
            data2=data[1] if len(data) > 1 else 0,
            implicit_status=implicit,
        )

    def _read_meta(self, source: ByteSource) -> MetaMessage:
        meta_type = source.read_exact(1)[0]
        length = read_vlq(source)
        return MetaMessage(meta_type, source.read_exact(length))

    def _read_sysex(self, source: ByteSource, status: int) -> SysExMessage:
        length = read_vlq(source)
        return SysExMessage(data=source.read_exact(length), status=status)

    def _read_system(self, source: ByteSource, status: int, offset: Optional[int]) -> SystemMessage:
        if self.strict:
            raise InvalidStatusByte(f"Unexpected status byte 0x{status:02X} in track", offset)

        data = self._read_data_bytes(source, SYSTEM_DATA_LENGTHS[status])
        message = SystemMessage(status, data)
        if not message.is_realtime:
            self.running_status = None
        return message


class EventEncoder:
    """
    Encoder for the events of one track.

    Example:
        encoder = EventEncoder(RunningStatus.COMPACT)
        data = b"".join(encoder.encode_event(e) for e in track.events)
    """

    def __init__(self, running_status: RunningStatus = RunningStatus.EXPLICIT):
        """
        Initialize encoder.

        Args:
            running_status: Status byte policy for channel messages
        """
        self.policy = RunningStatus(running_status)
        self.running_status: Optional[int] = None

    def encode_event(self, event: TrackEvent) -> bytes:
        return encode_vlq(event.delta_time) + self.encode_message(event.message)

    def encode_message(self, message: MidiMessage) -> bytes:
        if isinstance(message, ChannelMessage):
            omit = self.running_status == message.status and (
                self.policy == RunningStatus.COMPACT
                or (self.policy == RunningStatus.PRESERVE and message.implicit_status)
            )
            self.running_status = message.status
            return message.to_bytes(include_status=not omit)

        if isinstance(message, SysExMessage):
            self.running_status = None
        elif isinstance(message, SystemMessage) and not message.is_realtime:
            self.running_status = None

        return message.to_bytes()


def encode_event(event: TrackEvent) -> bytes:
    """Encode a single event with an explicit status byte."""
    return EventEncoder().encode_event(event)
