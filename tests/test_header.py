"""Tests for the MThd header codec and division handling."""

import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from smfkit.errors import InvalidFormat, InvalidHeaderChunk, UnexpectedEof, ValidationError
from smfkit.formats.smf.cursor import ByteCursor
from smfkit.formats.smf.header import decode_header, encode_header
from smfkit.models.chunk import Chunk
from smfkit.models.header import (
    Format,
    HeaderChunk,
    SMPTEDivision,
    TicksPerQuarterNote,
    division_from_raw,
)


def _decode(payload: bytes, tag: bytes = b"MThd", length=None) -> HeaderChunk:
    chunk = Chunk(tag, len(payload) if length is None else length)
    return decode_header(chunk, ByteCursor(payload))


class TestDecodeHeader:
    """Test cases for decoding header payloads."""

    def test_sample_header(self, header_payload):
        header = _decode(header_payload)

        assert header.format == Format.MULTI_TRACK_SYNCHRONOUS
        assert header.track_count == 2
        assert header.division == TicksPerQuarterNote(480)

    def test_smpte_division(self):
        """Test that the high division byte is read as signed."""
        header = _decode(bytes.fromhex("0000 0001 e728"))

        assert header.division == SMPTEDivision(-25, 40)
        assert header.division.frames_per_second == 25

    def test_wrong_length(self):
        """Test that a header whose declared length is not 6 is rejected."""
        with pytest.raises(InvalidHeaderChunk):
            _decode(bytes(7))

    def test_wrong_tag(self, header_payload):
        with pytest.raises(InvalidHeaderChunk):
            _decode(header_payload, tag=b"MTrk")

    def test_invalid_format(self):
        with pytest.raises(InvalidFormat):
            _decode(bytes.fromhex("0003 0001 0060"))

    def test_short_payload(self):
        with pytest.raises(UnexpectedEof):
            _decode(bytes(4), length=6)


class TestEncodeHeader:
    """Test cases for encoding header payloads."""

    def test_encode(self, header_payload):
        header = HeaderChunk(Format.MULTI_TRACK_SYNCHRONOUS, 2, TicksPerQuarterNote(480))
        assert encode_header(header) == header_payload

    def test_encode_smpte(self):
        header = HeaderChunk(Format.SINGLE_TRACK, 1, SMPTEDivision(-30, 80))
        assert encode_header(header) == bytes.fromhex("0000 0001 e250")

    def test_raw_format_is_normalised(self):
        header = HeaderChunk(2, 3, TicksPerQuarterNote(96))
        assert header.format is Format.MULTI_TRACK_ASYNCHRONOUS


class TestDivision:
    """Test cases for the division union."""

    def test_ticks_from_raw(self):
        assert division_from_raw(0x0060) == TicksPerQuarterNote(96)

    def test_smpte_from_raw(self):
        assert division_from_raw(0xE850) == SMPTEDivision(-24, 80)

    @pytest.mark.parametrize("raw", [0x0001, 0x7FFF, 0xE728, 0xE250, 0x8000])
    def test_raw_roundtrip(self, raw):
        assert division_from_raw(raw).to_raw() == raw

    def test_ticks_out_of_range(self):
        with pytest.raises(ValidationError):
            TicksPerQuarterNote(0x8000)

    def test_smpte_code_must_be_negative(self):
        with pytest.raises(ValidationError):
            SMPTEDivision(25, 40)

    def test_header_rejects_raw_division(self):
        with pytest.raises(ValidationError):
            HeaderChunk(Format.SINGLE_TRACK, 1, 480)
