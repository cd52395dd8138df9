"""File analysis tools."""

from smfkit.analysis.smf_analyzer import (
    ChunkInfo,
    SMFAnalysis,
    SMFAnalyzer,
    TrackInfo,
    describe_division,
    midi_note_to_name,
    scan_chunks,
)

__all__ = [
    "ChunkInfo",
    "SMFAnalysis",
    "SMFAnalyzer",
    "TrackInfo",
    "describe_division",
    "midi_note_to_name",
    "scan_chunks",
]
