"""Tests for the chunk-level decode/encode surface."""

import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from conftest import make_chunk

from smfkit.errors import InvalidHeaderChunk, TrackLengthMismatch, UnexpectedEof, ValidationError
from smfkit.formats.smf.cursor import ByteCursor
from smfkit.formats.smf.events import RunningStatus
from smfkit.formats.smf.parsed import decode_chunk, encode_chunk, iter_chunks
from smfkit.models.chunk import UnknownChunk
from smfkit.models.event import ChannelMessage, SysExMessage
from smfkit.models.header import Format, HeaderChunk, SMPTEDivision, TicksPerQuarterNote
from smfkit.models.meta import MetaMessage
from smfkit.models.track import TrackChunk


class TestDecodeChunk:
    """Test cases for decode_chunk dispatch."""

    def test_sample_file(self, smf_data):
        cursor = ByteCursor(smf_data)
        header = decode_chunk(cursor)
        tempo = decode_chunk(cursor)
        notes = decode_chunk(cursor)

        assert isinstance(header, HeaderChunk)
        assert isinstance(tempo, TrackChunk)
        assert notes.name == "Lead"
        assert decode_chunk(cursor) is None

    def test_unknown_chunk(self):
        """Test that an unknown tag decodes opaquely and re-encodes identically."""
        data = make_chunk(b"XTRA", b"\x00\xff\x10")
        parsed = decode_chunk(ByteCursor(data))

        assert parsed == UnknownChunk(b"XTRA", b"\x00\xff\x10")
        assert encode_chunk(parsed) == data

    def test_exhausted_source(self):
        assert decode_chunk(ByteCursor(b"")) is None

    def test_partial_chunk_header(self):
        with pytest.raises(UnexpectedEof):
            decode_chunk(ByteCursor(b"MTrk\x00"))

    def test_header_with_wrong_length(self):
        data = make_chunk(b"MThd", bytes.fromhex("0000 0001 0060 00"))
        with pytest.raises(InvalidHeaderChunk):
            decode_chunk(ByteCursor(data))

    def test_track_cut_off_mid_event(self):
        data = make_chunk(b"MTrk", bytes.fromhex("00 90 3c"))
        with pytest.raises(TrackLengthMismatch):
            decode_chunk(ByteCursor(data))

    def test_payload_is_consumed_exactly(self, smf_data):
        """Test that the next chunk starts right after the declared length."""
        cursor = ByteCursor(make_chunk(b"XTRA", b"MTrk") + smf_data)
        assert isinstance(decode_chunk(cursor), UnknownChunk)
        assert isinstance(decode_chunk(cursor), HeaderChunk)

    def test_iter_chunks(self, smf_data_with_unknown):
        chunks = list(iter_chunks(ByteCursor(smf_data_with_unknown)))
        assert [type(c).__name__ for c in chunks] == [
            "HeaderChunk",
            "UnknownChunk",
            "TrackChunk",
            "TrackChunk",
        ]


class TestEncodeChunk:
    """Test cases for encode_chunk and the decode/encode round trip."""

    @pytest.mark.parametrize(
        "parsed",
        [
            HeaderChunk(Format.SINGLE_TRACK, 1, TicksPerQuarterNote(96)),
            HeaderChunk(Format.MULTI_TRACK_ASYNCHRONOUS, 3, SMPTEDivision(-29, 4)),
            UnknownChunk(b"XTRA", b""),
            TrackChunk(),
            TrackChunk.from_messages(
                [
                    (0, MetaMessage.tempo(600000)),
                    (0, ChannelMessage.control_change(9, 7, 100)),
                    (12, ChannelMessage.pitch_bend(9, -8192)),
                    (0, SysExMessage(b"\x7e\x7f\x09\x01\xf7")),
                    (0, SysExMessage(b"\x01", status=0xF7)),
                ]
            ),
        ],
    )
    def test_roundtrip(self, parsed):
        for policy in RunningStatus:
            assert decode_chunk(ByteCursor(encode_chunk(parsed, policy))) == parsed

    def test_header_is_always_six_bytes(self):
        header = HeaderChunk(Format.SINGLE_TRACK, 1, TicksPerQuarterNote(480))
        assert encode_chunk(header) == b"MThd\x00\x00\x00\x06\x00\x00\x00\x01\x01\xe0"

    def test_track_length_is_computed(self, note_track_payload):
        track = decode_chunk(ByteCursor(make_chunk(b"MTrk", note_track_payload)))
        encoded = encode_chunk(track, RunningStatus.EXPLICIT)
        assert int.from_bytes(encoded[4:8], "big") == len(encoded) - 8

    def test_not_a_chunk(self):
        with pytest.raises(TypeError):
            encode_chunk("MThd")

    @pytest.mark.parametrize("tag", [b"MThd", b"MTrk"])
    def test_unknown_chunk_rejects_reserved_tags(self, tag):
        """Test that a reserved tag cannot hide as an opaque chunk."""
        with pytest.raises(ValidationError):
            UnknownChunk(tag, b"\x00\xff\x2f\x00")
