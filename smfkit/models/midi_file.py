"""
MidiFile data model - the top-level container for a decoded file.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from smfkit.errors import SMFError
from smfkit.models.chunk import ParsedChunk, UnknownChunk, tag_to_str
from smfkit.models.header import (
    Division,
    Format,
    HeaderChunk,
    TicksPerQuarterNote,
)
from smfkit.models.track import TrackChunk


@dataclass
class ChunkError:
    """
    A chunk that was skipped while reading in resync mode.

    Attributes:
        index: Position of the chunk in the file (0-based)
        offset: File offset of the chunk header
        tag: Chunk tag
        length: Declared payload length
        error: The error raised while decoding the payload
    """

    index: int
    offset: int
    tag: bytes
    length: int
    error: SMFError

    def __str__(self) -> str:
        name = tag_to_str(self.tag)
        return f"chunk {self.index} ({name} @ 0x{self.offset:X}): {self.error}"


@dataclass
class MidiFile:
    """
    Complete Standard MIDI File.

    Chunks are kept in file order, including chunks with unknown tags, so
    that writing a file back reproduces its layout.

    Attributes:
        chunks: Parsed chunks in file order
        errors: Chunks skipped by a resyncing reader
        source_path: File the data was read from, if any
    """

    chunks: List[ParsedChunk] = field(default_factory=list)
    errors: List[ChunkError] = field(default_factory=list)
    source_path: Optional[str] = None

    @property
    def header(self) -> Optional[HeaderChunk]:
        """First header chunk, if present."""
        for chunk in self.chunks:
            if isinstance(chunk, HeaderChunk):
                return chunk
        return None

    @property
    def tracks(self) -> List[TrackChunk]:
        return [c for c in self.chunks if isinstance(c, TrackChunk)]

    @property
    def unknown_chunks(self) -> List[UnknownChunk]:
        return [c for c in self.chunks if isinstance(c, UnknownChunk)]

    @property
    def format(self) -> Optional[Format]:
        header = self.header
        return header.format if header else None

    @property
    def division(self) -> Optional[Division]:
        header = self.header
        return header.division if header else None

    def validate(self) -> List[str]:
        """
        Check the file-level structure.

        Returns:
            List of problems (empty if valid)
        """
        problems = []

        if not self.chunks or not isinstance(self.chunks[0], HeaderChunk):
            problems.append("File does not start with an MThd header chunk")

        headers = [c for c in self.chunks if isinstance(c, HeaderChunk)]
        if len(headers) > 1:
            problems.append(f"File has {len(headers)} header chunks")

        header = self.header
        tracks = self.tracks
        if header is not None:
            if header.track_count != len(tracks):
                problems.append(
                    f"Header announces {header.track_count} tracks, file has {len(tracks)}"
                )
            if header.format == Format.SINGLE_TRACK and len(tracks) > 1:
                problems.append(f"Format 0 file has {len(tracks)} tracks")

        for index, track in enumerate(tracks):
            if not track.has_end_of_track:
                problems.append(f"Track {index} does not end with an End of Track event")
            ends = sum(1 for m in track.messages if getattr(m, "is_end_of_track", False))
            if ends > 1:
                problems.append(f"Track {index} has {ends} End of Track events")

        for error in self.errors:
            problems.append(f"Skipped {error}")

        return problems

    def to_dict(self) -> Dict[str, Any]:
        return {
            "chunks": [c.to_dict() for c in self.chunks],
            "errors": [str(e) for e in self.errors],
        }

    @classmethod
    def create(
        cls,
        tracks: List[TrackChunk],
        division: Optional[Division] = None,
        format: Optional[Format] = None,
    ) -> "MidiFile":
        """
        Create a file with a header matching the given tracks.

        Args:
            tracks: Track chunks
            division: Time resolution (default 480 ticks per quarter note)
            format: File format (default 0 for one track, 1 otherwise)

        Returns:
            New MidiFile instance
        """
        if division is None:
            division = TicksPerQuarterNote(480)
        if format is None:
            format = Format.SINGLE_TRACK if len(tracks) == 1 else Format.MULTI_TRACK_SYNCHRONOUS
        header = HeaderChunk(format=format, track_count=len(tracks), division=division)
        return cls(chunks=[header, *tracks])

    def __repr__(self) -> str:
        fmt = int(self.format) if self.format is not None else "?"
        return f"MidiFile(format={fmt}, tracks={len(self.tracks)}, chunks={len(self.chunks)})"
