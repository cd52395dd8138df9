"""Tests for typed meta events and message models."""

import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from smfkit.errors import InvalidMetaEvent, ValidationError
from smfkit.models.event import ChannelMessage, EventType, SysExMessage, SystemMessage, TrackEvent
from smfkit.models.meta import KeySignature, MetaMessage, MetaType, SmpteOffset, TimeSignature


class TestMetaConstructors:
    """Test cases for MetaMessage constructors and typed values."""

    def test_tempo(self):
        message = MetaMessage.tempo(500000)

        assert message.to_bytes() == bytes.fromhex("ff 51 03 07 a1 20")
        assert message.value == 500000
        assert message.bpm == 120.0

    def test_tempo_out_of_range(self):
        with pytest.raises(ValidationError):
            MetaMessage.tempo(0)

    def test_time_signature(self):
        message = MetaMessage.time_signature(6, 8)

        assert message.data == bytes([6, 3, 24, 8])
        assert message.value == TimeSignature(6, 8)
        assert str(message.value) == "6/8"

    def test_time_signature_denominator(self):
        with pytest.raises(ValidationError):
            MetaMessage.time_signature(3, 6)

    def test_key_signature(self):
        message = MetaMessage.key_signature(-3, minor=True)

        assert message.data == bytes([0xFD, 1])
        assert message.value == KeySignature(-3, True)
        assert str(message.value) == "3b minor"

    def test_smpte_offset(self):
        offset = SmpteOffset(1, 2, 3, 4, 5)
        assert MetaMessage.smpte_offset(offset).value == offset

    def test_text_types(self):
        assert MetaMessage.track_name("Bass").value == "Bass"
        assert MetaMessage.text("caf\xe9", MetaType.LYRIC).data == b"caf\xe9"
        with pytest.raises(ValidationError):
            MetaMessage.text("x", MetaType.SET_TEMPO)

    def test_sequence_number_and_prefix(self):
        assert MetaMessage.sequence_number(513).data == b"\x02\x01"
        assert MetaMessage.sequence_number(513).value == 513
        assert MetaMessage.channel_prefix(9).value == 9

    def test_end_of_track(self):
        message = MetaMessage.end_of_track()
        assert message.is_end_of_track
        assert message.value is None
        assert message.to_bytes() == b"\xff\x2f\x00"

    def test_wrong_length_raises_on_value(self):
        """Test that malformed payloads decode but refuse typed access."""
        message = MetaMessage(MetaType.SET_TEMPO, b"\x07\xa1")
        with pytest.raises(InvalidMetaEvent):
            message.value
        assert "value" not in message.to_dict()

    def test_bpm_on_other_type(self):
        with pytest.raises(InvalidMetaEvent):
            MetaMessage.end_of_track().bpm

    def test_sequencer_specific_is_raw(self):
        message = MetaMessage(0x7F, b"\x00\x00\x41\x01")
        assert message.meta_type is MetaType.SEQUENCER_SPECIFIC
        assert message.value == b"\x00\x00\x41\x01"

    def test_to_dict(self):
        result = MetaMessage.time_signature(4, 4).to_dict()
        assert result["name"] == "time_signature"
        assert result["value"]["denominator"] == 4


class TestChannelMessageModel:
    """Test cases for ChannelMessage validation and helpers."""

    def test_pitch_bend(self):
        message = ChannelMessage.pitch_bend(0, 8191)
        assert message.data == (0x7F, 0x7F)
        assert message.pitch == 8191

    def test_invalid_channel(self):
        with pytest.raises(ValidationError):
            ChannelMessage.note_on(16, 60, 100)

    def test_invalid_data_byte(self):
        with pytest.raises(ValidationError):
            ChannelMessage.control_change(0, 7, 128)

    def test_invalid_type(self):
        with pytest.raises(ValidationError):
            ChannelMessage(0xF0)

    def test_single_byte_type_rejects_second_byte(self):
        with pytest.raises(ValidationError):
            ChannelMessage(EventType.PROGRAM_CHANGE, 0, 1, 2)

    def test_running_status_form(self):
        message = ChannelMessage.note_on(2, 60, 100)
        assert message.to_bytes() == b"\x92\x3c\x64"
        assert message.to_bytes(include_status=False) == b"\x3c\x64"

    def test_note_on_zero_velocity_is_note_off(self):
        message = ChannelMessage.note_on(0, 60, 0)
        assert message.is_note_off
        assert not message.is_note_on

    def test_implicit_status_ignored_in_equality(self):
        assert ChannelMessage(EventType.NOTE_ON, 0, 60, 1, implicit_status=True) == (
            ChannelMessage.note_on(0, 60, 1)
        )


class TestOtherMessages:
    """Test cases for SysEx, system messages and track events."""

    def test_three_byte_manufacturer_id(self):
        message = SysExMessage(b"\x00\x20\x29\x01\xf7")
        assert message.manufacturer_id == b"\x00\x20\x29"

    def test_sysex_status(self):
        with pytest.raises(ValidationError):
            SysExMessage(b"", status=0xF1)

    def test_system_message_length(self):
        with pytest.raises(ValidationError):
            SystemMessage(0xF2, b"\x01")

    def test_delta_time_range(self):
        with pytest.raises(ValidationError):
            TrackEvent(0x10000000, MetaMessage.end_of_track())

    def test_event_kind(self):
        assert TrackEvent(0, SystemMessage(0xFA)).kind == "system"
        assert TrackEvent(0, MetaMessage.end_of_track()).kind == "meta"
