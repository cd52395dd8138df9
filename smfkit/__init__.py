"""
smfkit - Reader and writer for Standard MIDI Files.

This library provides tools to:
- Frame and decode SMF chunks (MThd, MTrk and unknown chunks)
- Decode track events with running status, meta and SysEx events
- Re-encode files byte-for-byte, with a selectable running status policy
- Convert to and from mido.MidiFile

Example usage:
    from smfkit import SMFReader, SMFWriter, RunningStatus

    midi = SMFReader.read("song.mid")
    for track in midi.tracks:
        print(track.name, len(track))

    SMFWriter.write(midi, "copy.mid", running_status=RunningStatus.PRESERVE)
"""

__version__ = "0.1.0"
__author__ = "smfkit Contributors"

from smfkit.errors import SMFError
from smfkit.formats.smf.cursor import ByteCursor, FileSource
from smfkit.formats.smf.events import RunningStatus
from smfkit.formats.smf.parsed import decode_chunk, encode_chunk
from smfkit.formats.smf.reader import SMFReader, read_midi_file
from smfkit.formats.smf.writer import SMFWriter, write_midi_file
from smfkit.models.chunk import UnknownChunk
from smfkit.models.header import Format, HeaderChunk, SMPTEDivision, TicksPerQuarterNote
from smfkit.models.midi_file import MidiFile
from smfkit.models.track import TrackChunk

__all__ = [
    "SMFError",
    "ByteCursor",
    "FileSource",
    "RunningStatus",
    "decode_chunk",
    "encode_chunk",
    "SMFReader",
    "SMFWriter",
    "read_midi_file",
    "write_midi_file",
    "UnknownChunk",
    "Format",
    "HeaderChunk",
    "SMPTEDivision",
    "TicksPerQuarterNote",
    "MidiFile",
    "TrackChunk",
]
