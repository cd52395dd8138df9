"""Standard MIDI File (.mid) codec."""

from smfkit.formats.smf.chunk import read_chunk, read_chunk_header, write_chunk
from smfkit.formats.smf.cursor import ByteCursor, ByteSource, FileSource
from smfkit.formats.smf.events import EventDecoder, EventEncoder, RunningStatus
from smfkit.formats.smf.header import decode_header, encode_header
from smfkit.formats.smf.parsed import decode_chunk, encode_chunk, iter_chunks, parse_chunk
from smfkit.formats.smf.reader import SMFReader, read_midi_file
from smfkit.formats.smf.track import decode_track, encode_track
from smfkit.formats.smf.writer import SMFWriter, write_midi_file

__all__ = [
    "ByteCursor",
    "ByteSource",
    "FileSource",
    "EventDecoder",
    "EventEncoder",
    "RunningStatus",
    "SMFReader",
    "SMFWriter",
    "decode_chunk",
    "decode_header",
    "decode_track",
    "encode_chunk",
    "encode_header",
    "encode_track",
    "iter_chunks",
    "parse_chunk",
    "read_chunk",
    "read_chunk_header",
    "read_midi_file",
    "write_chunk",
    "write_midi_file",
]
