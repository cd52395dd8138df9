"""
Standard MIDI File analyzer.

Extracts structural information from .mid files:
- Chunk layout (offsets, tags, declared lengths)
- Header format and division
- Per-track event statistics, channels, note range and length
- Tempo map and time signatures
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from smfkit.errors import InvalidMetaEvent, SMFError
from smfkit.formats.smf.chunk import read_chunk_header
from smfkit.formats.smf.cursor import ByteCursor
from smfkit.formats.smf.reader import SMFReader
from smfkit.models.chunk import CHUNK_HEADER_SIZE, HEADER_TAG, TRACK_TAG, tag_to_str
from smfkit.models.event import ChannelMessage
from smfkit.models.header import Division, Format, SMPTEDivision
from smfkit.models.meta import MetaMessage, MetaType
from smfkit.models.midi_file import MidiFile
from smfkit.models.track import TrackChunk

logger = logging.getLogger(__name__)

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]


def midi_note_to_name(note: int) -> str:
    """Convert a MIDI note number to a name (60 = C4)."""
    return f"{NOTE_NAMES[note % 12]}{note // 12 - 1}"


def describe_division(division: Optional[Division]) -> str:
    if division is None:
        return "-"
    if isinstance(division, SMPTEDivision):
        return f"SMPTE {division.frames_per_second} fps, {division.ticks_per_frame} ticks/frame"
    return f"{division.ticks} ticks/quarter"


@dataclass
class ChunkInfo:
    """Raw framing information about one chunk."""

    index: int
    offset: int
    tag: bytes
    length: int
    available: int

    @property
    def name(self) -> str:
        return tag_to_str(self.tag)

    @property
    def kind(self) -> str:
        if self.tag == HEADER_TAG:
            return "header"
        if self.tag == TRACK_TAG:
            return "track"
        return "unknown"

    @property
    def payload_offset(self) -> int:
        return self.offset + CHUNK_HEADER_SIZE

    @property
    def truncated(self) -> bool:
        return self.available < self.length


@dataclass
class TrackInfo:
    """Summary of one decoded track."""

    index: int
    name: str
    event_count: int
    event_counts: Dict[str, int] = field(default_factory=dict)
    channels: List[int] = field(default_factory=list)
    note_count: int = 0
    note_range: Optional[Tuple[int, int]] = None
    length_ticks: int = 0
    running_status_events: int = 0
    has_end_of_track: bool = False

    @property
    def note_range_names(self) -> str:
        if self.note_range is None:
            return "-"
        low, high = self.note_range
        return f"{midi_note_to_name(low)}-{midi_note_to_name(high)}"


@dataclass
class SMFAnalysis:
    """Complete Standard MIDI File analysis result."""

    # File info
    filepath: str
    filesize: int
    valid: bool

    # Header
    format: Optional[Format] = None
    division: Optional[Division] = None
    declared_tracks: int = 0
    actual_tracks: int = 0

    # Layout
    chunks: List[ChunkInfo] = field(default_factory=list)
    trailing_bytes: int = 0
    unknown_chunks: int = 0

    # Tracks
    tracks: List[TrackInfo] = field(default_factory=list)

    # Timing (absolute tick, value)
    tempo_map: List[Tuple[int, float]] = field(default_factory=list)
    time_signatures: List[Tuple[int, str]] = field(default_factory=list)

    # Problems found
    errors: List[str] = field(default_factory=list)

    @property
    def division_text(self) -> str:
        return describe_division(self.division)


def scan_chunks(data: bytes) -> List[ChunkInfo]:
    """
    Walk the chunk framing without decoding payloads.

    Stops at the first chunk whose header is incomplete. A chunk whose
    payload is cut short is still listed, with ``available`` smaller than
    ``length``.
    """
    cursor = ByteCursor(data)
    chunks: List[ChunkInfo] = []

    while cursor.remaining() >= CHUNK_HEADER_SIZE:
        offset = cursor.position
        chunk = read_chunk_header(cursor)
        available = min(chunk.length, cursor.remaining())
        chunks.append(ChunkInfo(len(chunks), offset, chunk.tag, chunk.length, available))
        cursor.read_exact(available)

    return chunks


class SMFAnalyzer:
    """
    Analyzer for Standard MIDI Files.

    Damaged chunks are skipped and reported in ``SMFAnalysis.errors``
    rather than aborting the analysis.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict
        self.data: bytes = b""

    def analyze_file(self, filepath: Union[str, Path]) -> SMFAnalysis:
        """Analyze a .mid file."""
        path = Path(filepath)

        with open(path, "rb") as f:
            self.data = f.read()

        return self._analyze(str(path))

    def analyze_bytes(self, data: bytes, name: str = "memory") -> SMFAnalysis:
        """Analyze SMF data from bytes."""
        self.data = data
        return self._analyze(name)

    def _analyze(self, filepath: str) -> SMFAnalysis:
        chunks = scan_chunks(self.data)
        analysis = SMFAnalysis(
            filepath=filepath,
            filesize=len(self.data),
            valid=False,
            chunks=chunks,
            trailing_bytes=len(self.data) - sum(CHUNK_HEADER_SIZE + c.available for c in chunks),
        )

        try:
            midi_file = SMFReader(strict=self.strict, resync=True).parse_bytes(self.data)
        except SMFError as exc:
            logger.debug("Analysis of %s aborted: %s", filepath, exc)
            analysis.errors.append(str(exc))
            return analysis

        self._analyze_file(midi_file, analysis)
        analysis.errors.extend(midi_file.validate())
        analysis.valid = not analysis.errors
        return analysis

    def _analyze_file(self, midi_file: MidiFile, analysis: SMFAnalysis) -> None:
        header = midi_file.header
        if header is not None:
            analysis.format = header.format
            analysis.division = header.division
            analysis.declared_tracks = header.track_count

        analysis.actual_tracks = len(midi_file.tracks)
        analysis.unknown_chunks = len(midi_file.unknown_chunks)

        for index, track in enumerate(midi_file.tracks):
            analysis.tracks.append(self._analyze_track(index, track))
            self._collect_timing(track, analysis)

        analysis.tempo_map.sort(key=lambda item: item[0])
        analysis.time_signatures.sort(key=lambda item: item[0])

    def _analyze_track(self, index: int, track: TrackChunk) -> TrackInfo:
        kinds: Counter = Counter(event.kind for event in track.events)
        channel_messages = track.channel_messages()
        notes = [m.note for m in channel_messages if m.is_note_on]

        return TrackInfo(
            index=index,
            name=track.name,
            event_count=len(track),
            event_counts=dict(kinds),
            channels=sorted({m.channel for m in channel_messages}),
            note_count=len(notes),
            note_range=(min(notes), max(notes)) if notes else None,
            length_ticks=track.duration_ticks,
            running_status_events=sum(1 for m in channel_messages if m.implicit_status),
            has_end_of_track=track.has_end_of_track,
        )

    def _collect_timing(self, track: TrackChunk, analysis: SMFAnalysis) -> None:
        for tick, event in track.with_absolute_times():
            message = event.message
            if not isinstance(message, MetaMessage):
                continue
            try:
                if message.meta_type == MetaType.SET_TEMPO:
                    analysis.tempo_map.append((tick, message.bpm))
                elif message.meta_type == MetaType.TIME_SIGNATURE:
                    analysis.time_signatures.append((tick, str(message.value)))
            except InvalidMetaEvent as exc:
                analysis.errors.append(f"Tick {tick}: {exc}")
