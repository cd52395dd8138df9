"""
Standard MIDI File writer.

Writes MidiFile objects back to .mid files. Chunks are written in the
order they appear in ``MidiFile.chunks``; chunk lengths are always
recomputed from the encoded payloads.
"""

import logging
from pathlib import Path
from typing import Union

from smfkit.formats.smf.events import RunningStatus
from smfkit.formats.smf.parsed import encode_chunk
from smfkit.models.midi_file import MidiFile

logger = logging.getLogger(__name__)


class SMFWriter:
    """
    Writer for Standard MIDI Files.

    Example:
        midi = MidiFile.create([track])
        SMFWriter.write(midi, "out.mid")
    """

    def __init__(self, running_status: RunningStatus = RunningStatus.EXPLICIT):
        """
        Initialize writer.

        Args:
            running_status: Status byte policy for channel messages
        """
        self.running_status = RunningStatus(running_status)

    @classmethod
    def write(
        cls,
        midi_file: MidiFile,
        filepath: Union[str, Path],
        running_status: RunningStatus = RunningStatus.EXPLICIT,
    ) -> None:
        """
        Write a MidiFile to disk.

        Args:
            midi_file: File to write
            filepath: Output file path (parent directories are created)
            running_status: Status byte policy for channel messages
        """
        writer = cls(running_status)
        data = writer.to_bytes(midi_file)

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, "wb") as f:
            f.write(data)

        logger.debug("Wrote %d bytes to %s", len(data), filepath)

    def to_bytes(self, midi_file: MidiFile) -> bytes:
        """
        Encode a MidiFile.

        Args:
            midi_file: File to encode

        Returns:
            Complete file contents
        """
        return b"".join(
            encode_chunk(chunk, self.running_status) for chunk in midi_file.chunks
        )


def write_midi_file(
    midi_file: MidiFile,
    filepath: Union[str, Path],
    running_status: RunningStatus = RunningStatus.EXPLICIT,
) -> None:
    """Write a MidiFile to disk."""
    SMFWriter.write(midi_file, filepath, running_status)
