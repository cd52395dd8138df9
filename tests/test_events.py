"""Tests for the event codec and running status handling."""

import pytest
import sys
from pathlib import Path

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from smfkit.errors import InvalidStatusByte, NoRunningStatus, UnexpectedEof
from smfkit.formats.smf.cursor import ByteCursor
from smfkit.formats.smf.events import EventDecoder, EventEncoder, RunningStatus, encode_event
from smfkit.models.event import (
    ChannelMessage,
    EventType,
    SysExMessage,
    SystemMessage,
    TrackEvent,
)
from smfkit.models.meta import MetaMessage, MetaType


def decode_all(hex_data: str, strict: bool = False):
    """Decode every event in a hex string with one decoder."""
    cursor = ByteCursor(bytes.fromhex(hex_data))
    decoder = EventDecoder(strict=strict)
    events = []
    while cursor.remaining():
        events.append(decoder.decode_event(cursor))
    return events


class TestChannelMessages:
    """Test cases for decoding channel messages."""

    def test_running_status(self):
        """Test that a data byte reuses the previous status."""
        events = decode_all("00 90 3c 40 00 40 40")

        first, second = (e.message for e in events)
        assert first == ChannelMessage(EventType.NOTE_ON, 0, 0x3C, 0x40)
        assert second == ChannelMessage(EventType.NOTE_ON, 0, 0x40, 0x40)
        assert second.status == first.status
        assert not first.implicit_status
        assert second.implicit_status

    def test_no_running_status(self):
        with pytest.raises(NoRunningStatus):
            decode_all("00 40 40")

    def test_one_data_byte_types(self):
        """Test that program change and channel pressure take one data byte."""
        events = decode_all("00 c5 07 00 d5 20 00 e5 00 40")

        program, pressure, bend = (e.message for e in events)
        assert program.event_type == EventType.PROGRAM_CHANGE
        assert program.channel == 5
        assert program.data == (7,)
        assert pressure.data == (0x20,)
        assert bend.pitch == 0

    def test_status_byte_in_data_position(self):
        with pytest.raises(InvalidStatusByte):
            decode_all("00 90 3c 90")

    def test_delta_time(self):
        events = decode_all("83 60 80 3c 00")
        assert events[0].delta_time == 480
        assert events[0].message.is_note_off

    def test_truncated_message(self):
        with pytest.raises(UnexpectedEof):
            decode_all("00 90 3c")


class TestMetaAndSysEx:
    """Test cases for meta and SysEx events and their effect on running status."""

    def test_meta_event(self):
        events = decode_all("00 ff 51 03 07 a1 20")
        message = events[0].message

        assert isinstance(message, MetaMessage)
        assert message.meta_type == MetaType.SET_TEMPO
        assert message.data == bytes.fromhex("07a120")

    def test_meta_keeps_running_status(self):
        events = decode_all("00 90 3c 40 00 ff 01 01 41 00 3e 40")
        assert events[2].message.note == 0x3E
        assert events[2].message.implicit_status

    def test_sysex_clears_running_status(self):
        with pytest.raises(NoRunningStatus):
            decode_all("00 90 3c 40 00 f0 02 7e f7 00 3e 40")

    def test_sysex_message(self):
        message = decode_all("00 f0 05 43 10 4c 00 f7")[0].message

        assert message == SysExMessage(bytes.fromhex("43104c00f7"))
        assert message.manufacturer_id == b"\x43"
        assert message.is_terminated

    def test_sysex_continuation(self):
        message = decode_all("00 f7 02 01 02")[0].message

        assert message.status == 0xF7
        assert message.is_continuation
        assert message.data == b"\x01\x02"

    def test_unknown_meta_type(self):
        message = decode_all("00 ff 60 01 05")[0].message
        assert not message.is_known
        assert message.type_name == "unknown_0x60"


class TestSystemMessages:
    """Test cases for system common/real-time bytes inside tracks."""

    def test_realtime_is_lenient(self):
        events = decode_all("00 90 3c 40 00 f8 00 3e 40")

        assert events[1].message == SystemMessage(0xF8)
        assert events[2].message.note == 0x3E

    def test_system_common_clears_running_status(self):
        with pytest.raises(NoRunningStatus):
            decode_all("00 90 3c 40 00 f6 00 3e 40")

    def test_song_position_data(self):
        message = decode_all("00 f2 10 20")[0].message
        assert message == SystemMessage(0xF2, b"\x10\x20")

    def test_strict_rejects_system_bytes(self):
        with pytest.raises(InvalidStatusByte):
            decode_all("00 f8", strict=True)

    def test_system_data_must_be_data_bytes(self):
        with pytest.raises(InvalidStatusByte):
            decode_all("00 f3 90")


class TestEventEncoder:
    """Test cases for encoding with the running status policies."""

    NOTES = [
        TrackEvent(0, ChannelMessage.note_on(0, 0x3C, 0x40)),
        TrackEvent(0, ChannelMessage.note_on(0, 0x3E, 0x40)),
    ]

    def encode(self, events, policy):
        encoder = EventEncoder(policy)
        return b"".join(encoder.encode_event(e) for e in events)

    def test_explicit(self):
        assert self.encode(self.NOTES, RunningStatus.EXPLICIT) == bytes.fromhex(
            "00903c40 00903e40"
        )

    def test_compact(self):
        assert self.encode(self.NOTES, RunningStatus.COMPACT) == bytes.fromhex("00903c40 003e40")

    def test_preserve_without_flags_is_explicit(self):
        assert self.encode(self.NOTES, RunningStatus.PRESERVE) == self.encode(
            self.NOTES, RunningStatus.EXPLICIT
        )

    def test_preserve_reproduces_mixed_input(self):
        """Test that PRESERVE copies a file that mixes both styles exactly."""
        data = "00 90 3c 40 00 90 3e 40 00 40 40 00 80 3c 00"
        events = decode_all(data)
        assert self.encode(events, RunningStatus.PRESERVE) == bytes.fromhex(data)

    def test_compact_restates_status_after_sysex(self):
        events = [
            self.NOTES[0],
            TrackEvent(0, SysExMessage(b"\x7e\xf7")),
            self.NOTES[1],
        ]
        assert self.encode(events, RunningStatus.COMPACT) == bytes.fromhex(
            "00903c40 00f0027ef7 00903e40"
        )

    def test_compact_keeps_status_across_meta(self):
        events = [self.NOTES[0], TrackEvent(0, MetaMessage.text("A")), self.NOTES[1]]
        assert self.encode(events, RunningStatus.COMPACT) == bytes.fromhex(
            "00903c40 00ff010141 003e40"
        )

    def test_compact_channel_change(self):
        events = [self.NOTES[0], TrackEvent(0, ChannelMessage.note_on(1, 0x3C, 0x40))]
        assert self.encode(events, RunningStatus.COMPACT) == bytes.fromhex(
            "00903c40 00913c40"
        )

    def test_encode_event_helper(self):
        event = TrackEvent(96, ChannelMessage.program_change(2, 10))
        assert encode_event(event) == bytes.fromhex("60 c2 0a")

    def test_policy_from_string(self):
        assert EventEncoder("compact").policy is RunningStatus.COMPACT
