"""
Conversion between smfkit and mido.

Both directions go through the SMF byte encoding, so the conversion is
exactly as faithful as the two codecs:

    MidiFile --SMFWriter--> bytes --mido.MidiFile(file=...)--> mido.MidiFile
    mido.MidiFile --save(file=...)--> bytes --SMFReader--> MidiFile

mido only understands MThd/MTrk chunks; unknown chunks are dropped on the
way to mido. mido stores SysEx data without the framing bytes, so a
message mido calls ``sysex data=(1, 2, 3)`` arrives here as
``SysExMessage(b"\\x01\\x02\\x03\\xf7")``.
"""

import io
import logging

import mido

from smfkit.errors import ValidationError
from smfkit.formats.smf.events import RunningStatus
from smfkit.formats.smf.reader import SMFReader
from smfkit.formats.smf.writer import SMFWriter
from smfkit.models.chunk import UnknownChunk
from smfkit.models.midi_file import MidiFile

logger = logging.getLogger(__name__)


def to_mido(
    midi_file: MidiFile, running_status: RunningStatus = RunningStatus.EXPLICIT
) -> mido.MidiFile:
    """
    Convert a MidiFile to a mido.MidiFile.

    Args:
        midi_file: File to convert (must have a header chunk)
        running_status: Status byte policy used for the intermediate bytes

    Returns:
        mido.MidiFile with the same header and tracks
    """
    if midi_file.header is None:
        raise ValidationError("Cannot convert a file without an MThd header to mido")

    unknown = midi_file.unknown_chunks
    if unknown:
        logger.debug("Dropping %d unknown chunk(s) for mido", len(unknown))

    known = MidiFile(chunks=[c for c in midi_file.chunks if not isinstance(c, UnknownChunk)])
    data = SMFWriter(running_status).to_bytes(known)
    return mido.MidiFile(file=io.BytesIO(data))


def from_mido(mido_file: mido.MidiFile, strict: bool = False) -> MidiFile:
    """
    Convert a mido.MidiFile to a MidiFile.

    Args:
        mido_file: mido file to convert
        strict: Reject system common/real-time bytes inside tracks

    Returns:
        Decoded MidiFile
    """
    buf = io.BytesIO()
    mido_file.save(file=buf)
    return SMFReader(strict=strict).parse_bytes(buf.getvalue())
