"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path

import pytest

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Format 1, 2 tracks, 480 ticks per quarter note
HEADER_PAYLOAD = bytes.fromhex("0001 0002 01e0")

# Track 0: name "Tempo", 120 BPM, 4/4, end of track
TEMPO_TRACK = bytes.fromhex(
    "00 ff 03 05 54656d706f"
    "00 ff 51 03 07a120"
    "00 ff 58 04 04021808"
    "00 ff 2f 00"
)

# Track 1: name "Lead", program 5, three notes, the last two note
# events using running status
NOTE_TRACK = bytes.fromhex(
    "00 ff 03 04 4c656164"
    "00 c0 05"
    "00 90 3c 40"
    "60 40 40"
    "60 3c 00"
    "00 40 00"
    "00 ff 2f 00"
)


def make_chunk(tag: bytes, payload: bytes) -> bytes:
    """Frame a payload as tag + big-endian length + payload."""
    return tag + struct.pack(">I", len(payload)) + payload


@pytest.fixture
def header_payload():
    """Return the 6-byte header payload of the sample file."""
    return HEADER_PAYLOAD


@pytest.fixture
def tempo_track_payload():
    """Return the tempo track payload of the sample file."""
    return TEMPO_TRACK


@pytest.fixture
def note_track_payload():
    """Return the note track payload (uses running status)."""
    return NOTE_TRACK


@pytest.fixture
def smf_data():
    """Return raw bytes of a complete format 1 file with two tracks."""
    return (
        make_chunk(b"MThd", HEADER_PAYLOAD)
        + make_chunk(b"MTrk", TEMPO_TRACK)
        + make_chunk(b"MTrk", NOTE_TRACK)
    )


@pytest.fixture
def smf_data_with_unknown(smf_data):
    """Return the sample file with an XTRA chunk between header and tracks."""
    header = smf_data[:14]
    return header + make_chunk(b"XTRA", b"\x01\x02\x03") + smf_data[14:]


@pytest.fixture
def smf_file(tmp_path, smf_data):
    """Return path to the sample file written to a temp directory."""
    path = tmp_path / "sample.mid"
    path.write_bytes(smf_data)
    return path
