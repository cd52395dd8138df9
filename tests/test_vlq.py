"""Tests for the variable-length quantity codec."""

import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from smfkit.errors import MalformedQuantity, TruncatedQuantity, UnexpectedEof
from smfkit.formats.smf.cursor import ByteCursor
from smfkit.utils.vlq import MAX_VLQ_VALUE, decode_vlq, encode_vlq, read_vlq, vlq_length


class TestEncodeVlq:
    """Test cases for VLQ encoding."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, "00"),
            (0x40, "40"),
            (127, "7f"),
            (128, "8100"),
            (0x2000, "c000"),
            (16383, "ff7f"),
            (16384, "818000"),
            (2097151, "ffff7f"),
            (2097152, "81808000"),
            (268435455, "ffffff7f"),
        ],
    )
    def test_known_encodings(self, value, expected):
        """Test the standard SMF examples."""
        assert encode_vlq(value) == bytes.fromhex(expected)

    def test_too_large(self):
        """Test that values over 28 bits are rejected."""
        with pytest.raises(MalformedQuantity):
            encode_vlq(MAX_VLQ_VALUE + 1)

    def test_negative(self):
        with pytest.raises(MalformedQuantity):
            encode_vlq(-1)

    def test_length(self):
        assert vlq_length(0) == 1
        assert vlq_length(128) == 2
        assert vlq_length(MAX_VLQ_VALUE) == 4


class TestDecodeVlq:
    """Test cases for VLQ decoding."""

    @pytest.mark.parametrize("value", [0, 127, 128, 16383, 16384, 2097151, 268435455])
    def test_roundtrip(self, value):
        """Test that encode followed by decode returns the original value."""
        encoded = encode_vlq(value)
        assert decode_vlq(encoded) == (value, len(encoded))

    def test_decode_with_offset(self):
        """Test decoding starting in the middle of a buffer."""
        data = bytes([0xAA, 0x81, 0x00, 0xBB])
        assert decode_vlq(data, 1) == (128, 2)

    def test_decode_list(self):
        assert decode_vlq([0x83, 0x60]) == (480, 2)

    def test_five_bytes_is_malformed(self):
        """Test that a quantity without a terminator in 4 bytes is rejected."""
        with pytest.raises(MalformedQuantity) as exc_info:
            decode_vlq(bytes([0x81, 0x80, 0x80, 0x80, 0x00]))
        assert not isinstance(exc_info.value, TruncatedQuantity)

    def test_truncated(self):
        """Test that running out of data is both malformed and an EOF."""
        with pytest.raises(TruncatedQuantity) as exc_info:
            decode_vlq(bytes([0x81, 0x80]))
        assert isinstance(exc_info.value, MalformedQuantity)
        assert isinstance(exc_info.value, UnexpectedEof)


class TestReadVlq:
    """Test cases for reading VLQs from a byte source."""

    def test_leaves_cursor_after_quantity(self):
        cursor = ByteCursor(bytes([0x81, 0x00, 0x90]))
        assert read_vlq(cursor) == 128
        assert cursor.position == 2
        assert cursor.remaining() == 1

    def test_empty_source(self):
        with pytest.raises(TruncatedQuantity):
            read_vlq(ByteCursor(b""))

    def test_too_long(self):
        cursor = ByteCursor(bytes([0xFF, 0xFF, 0xFF, 0xFF, 0x7F]))
        with pytest.raises(MalformedQuantity):
            read_vlq(cursor)

    def test_stops_at_window_end(self):
        """Test that a window limit counts as the end of data."""
        cursor = ByteCursor(bytes([0x00, 0x81, 0x00]), start=1, end=2)
        with pytest.raises(TruncatedQuantity):
            read_vlq(cursor)
