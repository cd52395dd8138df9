"""
Header chunk data models: format, division and the header itself.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Dict, Union

from smfkit.errors import InvalidFormat, ValidationError
from smfkit.utils.validation import validate_u16


class Format(IntEnum):
    """Overall organisation of the file."""

    SINGLE_TRACK = 0
    MULTI_TRACK_SYNCHRONOUS = 1
    MULTI_TRACK_ASYNCHRONOUS = 2

    @classmethod
    def from_raw(cls, value: int) -> "Format":
        try:
            return cls(value)
        except ValueError:
            raise InvalidFormat(f"Unknown SMF format {value} (expected 0, 1 or 2)") from None


@dataclass(frozen=True)
class TicksPerQuarterNote:
    """Metrical division: delta-times count ticks of a quarter note."""

    ticks: int

    def __post_init__(self):
        if not 0 <= self.ticks <= 0x7FFF:
            raise ValidationError(f"Ticks per quarter note must be 0-32767, got {self.ticks}")

    def to_raw(self) -> int:
        return self.ticks

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "ticks_per_quarter_note", "ticks": self.ticks}


@dataclass(frozen=True)
class SMPTEDivision:
    """
    Time-code based division.

    Attributes:
        fps_code: Negative SMPTE frame rate as stored (-24, -25, -29, -30)
        ticks_per_frame: Subframe resolution (0-255)
    """

    fps_code: int
    ticks_per_frame: int

    def __post_init__(self):
        if not -128 <= self.fps_code <= -1:
            raise ValidationError(f"SMPTE frame code must be -128..-1, got {self.fps_code}")
        if not 0 <= self.ticks_per_frame <= 0xFF:
            raise ValidationError(
                f"Ticks per frame must be 0-255, got {self.ticks_per_frame}"
            )

    @property
    def frames_per_second(self) -> int:
        """Nominal frame rate (29 stands for 30 drop-frame)."""
        return -self.fps_code

    def to_raw(self) -> int:
        return ((self.fps_code & 0xFF) << 8) | self.ticks_per_frame

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "smpte",
            "fps_code": self.fps_code,
            "ticks_per_frame": self.ticks_per_frame,
        }


Division = Union[TicksPerQuarterNote, SMPTEDivision]


def division_from_raw(value: int) -> Division:
    """
    Decode the 16-bit division word.

    Bit 15 clear: bits 14-0 are ticks per quarter note.
    Bit 15 set: the high byte is a negative (two's complement) SMPTE frame
    code and the low byte the ticks per frame.
    """
    if value & 0x8000:
        high = value >> 8
        return SMPTEDivision(fps_code=high - 0x100, ticks_per_frame=value & 0xFF)
    return TicksPerQuarterNote(value & 0x7FFF)


@dataclass(frozen=True)
class HeaderChunk:
    """
    Decoded MThd chunk.

    Attributes:
        format: File format (0, 1 or 2)
        track_count: Number of track chunks announced by the header
        division: Time resolution of delta-times
    """

    format: Format
    track_count: int
    division: Division

    def __post_init__(self):
        if not isinstance(self.format, Format):
            object.__setattr__(self, "format", Format.from_raw(self.format))
        validate_u16(self.track_count, "track_count")
        if not isinstance(self.division, (TicksPerQuarterNote, SMPTEDivision)):
            raise ValidationError(
                f"Division must be TicksPerQuarterNote or SMPTEDivision, got {self.division!r}"
            )

    @property
    def tag(self) -> bytes:
        return b"MThd"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chunk": "header",
            "format": int(self.format),
            "track_count": self.track_count,
            "division": self.division.to_dict(),
        }
