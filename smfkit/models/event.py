"""
MIDI track event data models.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any, Dict, Tuple, Union

from smfkit.errors import ValidationError
from smfkit.models.meta import MetaMessage
from smfkit.utils.validation import validate_channel, validate_data_byte
from smfkit.utils.vlq import MAX_VLQ_VALUE, encode_vlq


class EventType(IntEnum):
    """Channel voice message types (high nibble of the status byte)."""

    NOTE_OFF = 0x80
    NOTE_ON = 0x90
    POLY_PRESSURE = 0xA0
    CONTROL_CHANGE = 0xB0
    PROGRAM_CHANGE = 0xC0
    CHANNEL_PRESSURE = 0xD0
    PITCH_BEND = 0xE0


# Program Change and Channel Pressure carry one data byte, the rest two
DATA_LENGTHS = {
    EventType.NOTE_OFF: 2,
    EventType.NOTE_ON: 2,
    EventType.POLY_PRESSURE: 2,
    EventType.CONTROL_CHANGE: 2,
    EventType.PROGRAM_CHANGE: 1,
    EventType.CHANNEL_PRESSURE: 1,
    EventType.PITCH_BEND: 2,
}

SYSEX_START = 0xF0
SYSEX_ESCAPE = 0xF7

# Data byte counts for system common and real-time status bytes
SYSTEM_DATA_LENGTHS = {
    0xF1: 1,  # MTC quarter frame
    0xF2: 2,  # Song position pointer
    0xF3: 1,  # Song select
    0xF4: 0,
    0xF5: 0,
    0xF6: 0,  # Tune request
    0xF8: 0,
    0xF9: 0,
    0xFA: 0,
    0xFB: 0,
    0xFC: 0,
    0xFD: 0,
    0xFE: 0,
}


@dataclass(frozen=True)
class ChannelMessage:
    """
    A channel voice message.

    Attributes:
        event_type: Type of message (status high nibble)
        channel: MIDI channel (0-15)
        data1: First data byte (note number, CC number, program, ...)
        data2: Second data byte (velocity, CC value, ...); 0 for one-byte types
        implicit_status: True when decoded without a status byte (running
            status). Not part of equality.
    """

    event_type: EventType
    channel: int = 0
    data1: int = 0
    data2: int = 0
    implicit_status: bool = field(default=False, compare=False)

    def __post_init__(self):
        try:
            object.__setattr__(self, "event_type", EventType(self.event_type))
        except ValueError:
            raise ValidationError(
                f"0x{self.event_type:02X} is not a channel message type"
            ) from None
        validate_channel(self.channel)
        validate_data_byte(self.data1, "data1")
        validate_data_byte(self.data2, "data2")
        if self.data_length == 1 and self.data2:
            raise ValidationError(f"{self.event_type.name} carries a single data byte")

    @property
    def status(self) -> int:
        """Full status byte (type | channel)."""
        return self.event_type | self.channel

    @property
    def data_length(self) -> int:
        return DATA_LENGTHS[self.event_type]

    @property
    def data(self) -> Tuple[int, ...]:
        return (self.data1, self.data2)[: self.data_length]

    @property
    def is_note_on(self) -> bool:
        """Check if this is a note-on event with velocity > 0."""
        return self.event_type == EventType.NOTE_ON and self.data2 > 0

    @property
    def is_note_off(self) -> bool:
        """Check if this is a note-off event (or note-on with velocity 0)."""
        return self.event_type == EventType.NOTE_OFF or (
            self.event_type == EventType.NOTE_ON and self.data2 == 0
        )

    @property
    def note(self) -> int:
        """Get note number for note events."""
        return self.data1

    @property
    def velocity(self) -> int:
        """Get velocity for note events."""
        return self.data2

    @property
    def pitch(self) -> int:
        """Signed 14-bit pitch bend value (-8192..8191)."""
        return ((self.data2 << 7) | self.data1) - 8192

    def to_bytes(self, include_status: bool = True) -> bytes:
        """
        Convert message to raw MIDI bytes (without delta time).

        Args:
            include_status: Emit the status byte; False produces the running
                status form (data bytes only)
        """
        if include_status:
            return bytes((self.status,) + self.data)
        return bytes(self.data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "channel",
            "type": self.event_type.name.lower(),
            "channel": self.channel,
            "data": list(self.data),
        }

    @classmethod
    def note_on(cls, channel: int, note: int, velocity: int) -> "ChannelMessage":
        """Create a note-on message."""
        return cls(EventType.NOTE_ON, channel, note, velocity)

    @classmethod
    def note_off(cls, channel: int, note: int, velocity: int = 0) -> "ChannelMessage":
        """Create a note-off message."""
        return cls(EventType.NOTE_OFF, channel, note, velocity)

    @classmethod
    def control_change(cls, channel: int, cc: int, value: int) -> "ChannelMessage":
        """Create a control change message."""
        return cls(EventType.CONTROL_CHANGE, channel, cc, value)

    @classmethod
    def program_change(cls, channel: int, program: int) -> "ChannelMessage":
        """Create a program change message."""
        return cls(EventType.PROGRAM_CHANGE, channel, program)

    @classmethod
    def channel_pressure(cls, channel: int, pressure: int) -> "ChannelMessage":
        return cls(EventType.CHANNEL_PRESSURE, channel, pressure)

    @classmethod
    def poly_pressure(cls, channel: int, note: int, pressure: int) -> "ChannelMessage":
        return cls(EventType.POLY_PRESSURE, channel, note, pressure)

    @classmethod
    def pitch_bend(cls, channel: int, pitch: int) -> "ChannelMessage":
        """Create a pitch bend message from a signed value (-8192..8191)."""
        if not -8192 <= pitch <= 8191:
            raise ValidationError(f"Pitch bend must be -8192..8191, got {pitch}")
        value = pitch + 8192
        return cls(EventType.PITCH_BEND, channel, value & 0x7F, value >> 7)


@dataclass(frozen=True)
class SysExMessage:
    """
    A system exclusive event.

    In a track the message is stored as <status> <vlq length> <data>. The
    data of a complete 0xF0 message normally ends with 0xF7; a 0xF7 status
    marks a continuation packet or an escaped sequence of arbitrary bytes.

    Attributes:
        data: Raw bytes following the length
        status: 0xF0 or 0xF7
    """

    data: bytes = b""
    status: int = SYSEX_START

    def __post_init__(self):
        if self.status not in (SYSEX_START, SYSEX_ESCAPE):
            raise ValidationError(f"SysEx status must be 0xF0 or 0xF7, got 0x{self.status:02X}")
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @property
    def is_continuation(self) -> bool:
        return self.status == SYSEX_ESCAPE

    @property
    def is_terminated(self) -> bool:
        """Check if the packet ends the exclusive message with 0xF7."""
        return self.data.endswith(bytes([SYSEX_ESCAPE]))

    @property
    def manufacturer_id(self) -> bytes:
        """
        Manufacturer ID of a 0xF0 message.

        One byte, or three bytes when the first byte is 0x00. Empty for
        continuation packets and empty messages.
        """
        if self.is_continuation or not self.data:
            return b""
        if self.data[0] == 0x00:
            return self.data[:3]
        return self.data[:1]

    def to_bytes(self) -> bytes:
        return bytes([self.status]) + encode_vlq(len(self.data)) + self.data

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": "sysex",
            "status": self.status,
            "data": self.data.hex(),
        }


@dataclass(frozen=True)
class SystemMessage:
    """
    A system common or real-time message found inside a track.

    These are not legal in Standard MIDI Files but show up in files written
    by some sequencers; they are only produced by the lenient decoder.
    """

    status: int
    data: bytes = b""

    def __post_init__(self):
        if self.status not in SYSTEM_DATA_LENGTHS:
            raise ValidationError(f"0x{self.status:02X} is not a system message status")
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        if len(self.data) != SYSTEM_DATA_LENGTHS[self.status]:
            raise ValidationError(
                f"System message 0x{self.status:02X} takes "
                f"{SYSTEM_DATA_LENGTHS[self.status]} data bytes, got {len(self.data)}"
            )

    @property
    def is_realtime(self) -> bool:
        return self.status >= 0xF8

    def to_bytes(self) -> bytes:
        return bytes([self.status]) + self.data

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": "system", "status": self.status, "data": self.data.hex()}


MidiMessage = Union[ChannelMessage, MetaMessage, SysExMessage, SystemMessage]


@dataclass(frozen=True)
class TrackEvent:
    """
    A delta-timed event in a track.

    Attributes:
        delta_time: Ticks since the previous event (0-0x0FFFFFFF)
        message: The message that happens after the delta time
    """

    delta_time: int
    message: MidiMessage

    def __post_init__(self):
        if not 0 <= self.delta_time <= MAX_VLQ_VALUE:
            raise ValidationError(f"Delta time must be 0-{MAX_VLQ_VALUE}, got {self.delta_time}")

    @property
    def kind(self) -> str:
        return self.message.to_dict()["kind"]

    def to_dict(self) -> Dict[str, Any]:
        return {"delta_time": self.delta_time, "message": self.message.to_dict()}
