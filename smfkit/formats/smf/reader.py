"""
Standard MIDI File reader.

Reads .mid files chunk by chunk and collects the decoded chunks into a
MidiFile.
"""

import logging
from pathlib import Path
from typing import Iterator, List, Union

from smfkit.errors import SMFError
from smfkit.formats.smf.chunk import read_chunk
from smfkit.formats.smf.cursor import ByteCursor, ByteSource, FileSource
from smfkit.formats.smf.parsed import parse_chunk
from smfkit.models.chunk import ParsedChunk
from smfkit.models.midi_file import ChunkError, MidiFile

logger = logging.getLogger(__name__)


class SMFReader:
    """
    Reader for Standard MIDI Files.

    Chunk framing errors (a header or payload cut short by the end of the
    data) always abort. Errors inside a chunk payload abort too, unless the
    reader is created with ``resync=True``: the failing chunk is then
    recorded in ``MidiFile.errors`` and reading continues at the next chunk
    boundary given by the chunk's declared length.

    Example:
        midi = SMFReader.read("song.mid")
        print(f"Format {midi.format}, {len(midi.tracks)} tracks")
    """

    def __init__(self, strict: bool = False, resync: bool = False):
        """
        Initialize reader.

        Args:
            strict: Reject system common/real-time bytes inside tracks
            resync: Skip chunks whose payload fails to decode
        """
        self.strict = strict
        self.resync = resync
        self._errors: List[ChunkError] = []

    @classmethod
    def read(
        cls, filepath: Union[str, Path], strict: bool = False, resync: bool = False
    ) -> MidiFile:
        """
        Read a Standard MIDI File.

        Args:
            filepath: Path to .mid file
            strict: Reject system common/real-time bytes inside tracks
            resync: Skip chunks whose payload fails to decode

        Returns:
            Parsed MidiFile
        """
        reader = cls(strict=strict, resync=resync)
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> MidiFile:
        """
        Parse a file by streaming it chunk by chunk.

        Args:
            filepath: Path to .mid file

        Returns:
            Parsed MidiFile
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with FileSource.open(filepath) as source:
            midi_file = self._parse(source)

        midi_file.source_path = str(filepath)
        return midi_file

    def parse_bytes(self, data: bytes) -> MidiFile:
        """
        Parse a file held in memory.

        Args:
            data: Raw file contents

        Returns:
            Parsed MidiFile
        """
        return self._parse(ByteCursor(data))

    def iter_chunks(self, source: ByteSource) -> Iterator[ParsedChunk]:
        """
        Yield decoded chunks from a byte source.

        Chunks skipped in resync mode are not yielded; they are available
        from ``errors`` afterwards.
        """
        self._errors = []
        index = 0

        while True:
            offset = getattr(source, "position", 0)
            framed = read_chunk(source)
            if framed is None:
                return

            chunk, payload = framed
            logger.debug("Chunk %d at 0x%X: %s", index, offset, chunk)

            try:
                parsed = parse_chunk(chunk, payload, strict=self.strict)
            except SMFError as exc:
                if not self.resync:
                    raise
                error = ChunkError(index, offset, chunk.tag, chunk.length, exc)
                logger.warning("Skipping %s", error)
                self._errors.append(error)
            else:
                yield parsed

            index += 1

    @property
    def errors(self) -> List[ChunkError]:
        return list(self._errors)

    def _parse(self, source: ByteSource) -> MidiFile:
        chunks = list(self.iter_chunks(source))
        return MidiFile(chunks=chunks, errors=self.errors)


def read_midi_file(
    filepath: Union[str, Path], strict: bool = False, resync: bool = False
) -> MidiFile:
    """Read a Standard MIDI File from disk."""
    return SMFReader.read(filepath, strict=strict, resync=resync)
