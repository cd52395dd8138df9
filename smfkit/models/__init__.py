"""Data models for Standard MIDI File representation."""

from smfkit.models.chunk import Chunk, ParsedChunk, UnknownChunk
from smfkit.models.event import (
    ChannelMessage,
    EventType,
    MidiMessage,
    SysExMessage,
    SystemMessage,
    TrackEvent,
)
from smfkit.models.header import (
    Division,
    Format,
    HeaderChunk,
    SMPTEDivision,
    TicksPerQuarterNote,
)
from smfkit.models.meta import KeySignature, MetaMessage, MetaType, SmpteOffset, TimeSignature
from smfkit.models.midi_file import ChunkError, MidiFile
from smfkit.models.track import TrackChunk

__all__ = [
    "Chunk",
    "ParsedChunk",
    "UnknownChunk",
    "ChannelMessage",
    "EventType",
    "MidiMessage",
    "SysExMessage",
    "SystemMessage",
    "TrackEvent",
    "Division",
    "Format",
    "HeaderChunk",
    "SMPTEDivision",
    "TicksPerQuarterNote",
    "KeySignature",
    "MetaMessage",
    "MetaType",
    "SmpteOffset",
    "TimeSignature",
    "ChunkError",
    "MidiFile",
    "TrackChunk",
]
