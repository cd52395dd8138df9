"""
Meta event data models.

Meta events (status 0xFF) carry non-MIDI information such as tempo, time
signature and track names. The raw data bytes are the canonical content of
a ``MetaMessage`` so that any meta event, known or not, re-encodes to the
exact bytes it was decoded from. Typed values are available through
``MetaMessage.value`` and the constructor classmethods.
"""

from dataclasses import asdict, dataclass
from enum import IntEnum
from typing import Any, Dict, Union

from smfkit.errors import InvalidMetaEvent, ValidationError
from smfkit.utils.validation import validate_byte, validate_u16
from smfkit.utils.vlq import encode_vlq

META_STATUS = 0xFF


class MetaType(IntEnum):
    """Standard meta event types."""

    SEQUENCE_NUMBER = 0x00
    TEXT = 0x01
    COPYRIGHT = 0x02
    TRACK_NAME = 0x03
    INSTRUMENT_NAME = 0x04
    LYRIC = 0x05
    MARKER = 0x06
    CUE_POINT = 0x07
    CHANNEL_PREFIX = 0x20
    PORT = 0x21
    END_OF_TRACK = 0x2F
    SET_TEMPO = 0x51
    SMPTE_OFFSET = 0x54
    TIME_SIGNATURE = 0x58
    KEY_SIGNATURE = 0x59
    SEQUENCER_SPECIFIC = 0x7F


TEXT_TYPES = (
    MetaType.TEXT,
    MetaType.COPYRIGHT,
    MetaType.TRACK_NAME,
    MetaType.INSTRUMENT_NAME,
    MetaType.LYRIC,
    MetaType.MARKER,
    MetaType.CUE_POINT,
)

# Fixed payload sizes for types whose layout is defined
FIXED_LENGTHS = {
    MetaType.SEQUENCE_NUMBER: 2,
    MetaType.CHANNEL_PREFIX: 1,
    MetaType.PORT: 1,
    MetaType.END_OF_TRACK: 0,
    MetaType.SET_TEMPO: 3,
    MetaType.SMPTE_OFFSET: 5,
    MetaType.TIME_SIGNATURE: 4,
    MetaType.KEY_SIGNATURE: 2,
}

# Text meta events are conventionally latin-1; it maps every byte value
TEXT_ENCODING = "latin-1"


@dataclass(frozen=True)
class TimeSignature:
    """
    Time signature meta payload.

    Attributes:
        numerator: Beats per measure
        denominator: Beat unit as a note value (4 = quarter note)
        clocks_per_click: MIDI clocks per metronome click
        notated_32nds_per_beat: Notated 32nd notes per MIDI quarter note
    """

    numerator: int
    denominator: int
    clocks_per_click: int = 24
    notated_32nds_per_beat: int = 8

    def __str__(self) -> str:
        return f"{self.numerator}/{self.denominator}"

    def to_bytes(self) -> bytes:
        if self.denominator <= 0 or self.denominator & (self.denominator - 1):
            raise ValidationError(
                f"Time signature denominator must be a power of two, got {self.denominator}"
            )
        exponent = self.denominator.bit_length() - 1
        return bytes(
            [self.numerator, exponent, self.clocks_per_click, self.notated_32nds_per_beat]
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> "TimeSignature":
        return cls(
            numerator=data[0],
            denominator=2 ** data[1],
            clocks_per_click=data[2],
            notated_32nds_per_beat=data[3],
        )


@dataclass(frozen=True)
class KeySignature:
    """
    Key signature meta payload.

    Attributes:
        sharps_flats: Number of sharps (positive) or flats (negative), -7..7
        minor: True for a minor key
    """

    sharps_flats: int
    minor: bool = False

    def __str__(self) -> str:
        count = abs(self.sharps_flats)
        accidental = "#" if self.sharps_flats > 0 else "b"
        mode = "minor" if self.minor else "major"
        return f"{count}{accidental} {mode}" if count else f"0 {mode}"

    def to_bytes(self) -> bytes:
        if not -7 <= self.sharps_flats <= 7:
            raise ValidationError(f"sharps_flats must be -7..7, got {self.sharps_flats}")
        return bytes([self.sharps_flats & 0xFF, 1 if self.minor else 0])

    @classmethod
    def from_bytes(cls, data: bytes) -> "KeySignature":
        sf = data[0] - 256 if data[0] > 127 else data[0]
        return cls(sharps_flats=sf, minor=data[1] != 0)


@dataclass(frozen=True)
class SmpteOffset:
    """SMPTE start time of a track."""

    hours: int
    minutes: int
    seconds: int
    frames: int
    subframes: int = 0

    def to_bytes(self) -> bytes:
        return bytes([self.hours, self.minutes, self.seconds, self.frames, self.subframes])

    @classmethod
    def from_bytes(cls, data: bytes) -> "SmpteOffset":
        return cls(*data[:5])


MetaValue = Union[None, int, str, bytes, TimeSignature, KeySignature, SmpteOffset]


@dataclass(frozen=True)
class MetaMessage:
    """
    A meta event.

    Attributes:
        meta_type: Meta type byte (see MetaType); unknown types are allowed
        data: Raw payload bytes
    """

    meta_type: int
    data: bytes = b""

    def __post_init__(self):
        validate_byte(self.meta_type, "meta_type")
        if not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))
        try:
            object.__setattr__(self, "meta_type", MetaType(self.meta_type))
        except ValueError:
            pass

    @property
    def status(self) -> int:
        return META_STATUS

    @property
    def is_known(self) -> bool:
        return isinstance(self.meta_type, MetaType)

    @property
    def is_end_of_track(self) -> bool:
        return self.meta_type == MetaType.END_OF_TRACK

    @property
    def is_text(self) -> bool:
        return self.meta_type in TEXT_TYPES

    @property
    def type_name(self) -> str:
        if self.is_known:
            return self.meta_type.name.lower()
        return f"unknown_0x{self.meta_type:02x}"

    @property
    def value(self) -> MetaValue:
        """
        Decode the payload according to the meta type.

        Returns:
            int for sequence number, channel prefix, port and tempo;
            str for text types; a dataclass for time/key signature and
            SMPTE offset; None for end of track; raw bytes otherwise.

        Raises:
            InvalidMetaEvent: If the payload length does not match the type
        """
        expected = FIXED_LENGTHS.get(self.meta_type)
        if expected is not None and len(self.data) != expected:
            raise InvalidMetaEvent(
                f"{self.type_name} payload must be {expected} bytes, got {len(self.data)}"
            )

        if self.meta_type == MetaType.SEQUENCE_NUMBER:
            return int.from_bytes(self.data, "big")
        if self.is_text:
            return self.data.decode(TEXT_ENCODING)
        if self.meta_type in (MetaType.CHANNEL_PREFIX, MetaType.PORT):
            return self.data[0]
        if self.meta_type == MetaType.END_OF_TRACK:
            return None
        if self.meta_type == MetaType.SET_TEMPO:
            return int.from_bytes(self.data, "big")
        if self.meta_type == MetaType.SMPTE_OFFSET:
            return SmpteOffset.from_bytes(self.data)
        if self.meta_type == MetaType.TIME_SIGNATURE:
            return TimeSignature.from_bytes(self.data)
        if self.meta_type == MetaType.KEY_SIGNATURE:
            return KeySignature.from_bytes(self.data)
        return self.data

    @property
    def bpm(self) -> float:
        """Tempo in beats per minute (SET_TEMPO only)."""
        if self.meta_type != MetaType.SET_TEMPO:
            raise InvalidMetaEvent(f"{self.type_name} has no tempo")
        tempo = self.value
        if not tempo:
            raise InvalidMetaEvent("Tempo of zero microseconds per quarter note")
        return 60_000_000 / tempo

    def to_bytes(self) -> bytes:
        """Encode as FF <type> <vlq length> <data>."""
        return bytes([META_STATUS, int(self.meta_type)]) + encode_vlq(len(self.data)) + self.data

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {
            "kind": "meta",
            "type": int(self.meta_type),
            "name": self.type_name,
            "data": self.data.hex(),
        }
        try:
            value = self.value
        except InvalidMetaEvent:
            return result
        if isinstance(value, (TimeSignature, KeySignature, SmpteOffset)):
            result["value"] = asdict(value)
        elif isinstance(value, (int, str)):
            result["value"] = value
        return result

    @classmethod
    def sequence_number(cls, number: int) -> "MetaMessage":
        validate_u16(number, "sequence number")
        return cls(MetaType.SEQUENCE_NUMBER, number.to_bytes(2, "big"))

    @classmethod
    def text(cls, text: str, meta_type: int = MetaType.TEXT) -> "MetaMessage":
        """Create a text-like meta event (text, copyright, track name, ...)."""
        if meta_type not in TEXT_TYPES:
            raise ValidationError(f"0x{meta_type:02X} is not a text meta type")
        return cls(meta_type, text.encode(TEXT_ENCODING))

    @classmethod
    def track_name(cls, name: str) -> "MetaMessage":
        return cls.text(name, MetaType.TRACK_NAME)

    @classmethod
    def channel_prefix(cls, channel: int) -> "MetaMessage":
        return cls(MetaType.CHANNEL_PREFIX, bytes([channel]))

    @classmethod
    def end_of_track(cls) -> "MetaMessage":
        return cls(MetaType.END_OF_TRACK)

    @classmethod
    def tempo(cls, microseconds_per_quarter: int) -> "MetaMessage":
        """Create a set-tempo event (500000 = 120 BPM)."""
        if not 0 < microseconds_per_quarter <= 0xFFFFFF:
            raise ValidationError(
                f"Tempo must be 1-16777215 microseconds, got {microseconds_per_quarter}"
            )
        return cls(MetaType.SET_TEMPO, microseconds_per_quarter.to_bytes(3, "big"))

    @classmethod
    def smpte_offset(cls, offset: SmpteOffset) -> "MetaMessage":
        return cls(MetaType.SMPTE_OFFSET, offset.to_bytes())

    @classmethod
    def time_signature(
        cls,
        numerator: int,
        denominator: int,
        clocks_per_click: int = 24,
        notated_32nds_per_beat: int = 8,
    ) -> "MetaMessage":
        signature = TimeSignature(numerator, denominator, clocks_per_click, notated_32nds_per_beat)
        return cls(MetaType.TIME_SIGNATURE, signature.to_bytes())

    @classmethod
    def key_signature(cls, sharps_flats: int, minor: bool = False) -> "MetaMessage":
        return cls(MetaType.KEY_SIGNATURE, KeySignature(sharps_flats, minor).to_bytes())
