"""
Display formatting utilities for CLI output.

Turns decoded messages into short text columns for tables.
"""

from typing import Tuple

from rich.markup import escape

from smfkit.analysis.smf_analyzer import midi_note_to_name
from smfkit.errors import InvalidMetaEvent
from smfkit.models.event import (
    ChannelMessage,
    EventType,
    MidiMessage,
    SysExMessage,
    SystemMessage,
)
from smfkit.models.meta import MetaMessage, MetaType

SYSTEM_NAMES = {
    0xF1: "MTC Quarter Frame",
    0xF2: "Song Position",
    0xF3: "Song Select",
    0xF6: "Tune Request",
    0xF8: "Clock",
    0xFA: "Start",
    0xFB: "Continue",
    0xFC: "Stop",
    0xFE: "Active Sensing",
}


def format_bytes(data: bytes, limit: int = 12) -> str:
    """
    Format bytes as spaced hex, truncated after ``limit`` bytes.

    Returns:
        "F0 43 10 ..." style string
    """
    text = " ".join(f"{b:02X}" for b in data[:limit])
    if len(data) > limit:
        text += f" ... (+{len(data) - limit})"
    return text


def value_bar(value: int, max_value: int = 127, width: int = 10) -> str:
    """
    Create a text bar for a 7-bit value.

    Returns:
        Formatted string like " 91 [███████░░░]"
    """
    clamped = max(0, min(value, max_value))
    fill = int((clamped / max_value) * width) if max_value > 0 else 0
    return f"{value:3d} [{'█' * fill}{'░' * (width - fill)}]"


def format_tempo(microseconds: int) -> str:
    """
    Format a tempo with its raw value.

    Returns:
        "120.00 BPM (500000 us/qn)"
    """
    if microseconds <= 0:
        return f"- BPM ({microseconds} us/qn)"
    return f"{60_000_000 / microseconds:.2f} BPM ({microseconds} us/qn)"


def _describe_channel(message: ChannelMessage) -> Tuple[str, str]:
    event_type = message.event_type
    if event_type in (EventType.NOTE_ON, EventType.NOTE_OFF):
        name = "Note On" if message.is_note_on else "Note Off"
        note = f"{midi_note_to_name(message.note)} ({message.note})"
        return name, f"{note:<10} vel {value_bar(message.velocity)}"
    if event_type == EventType.POLY_PRESSURE:
        return "Poly Pressure", f"{midi_note_to_name(message.note)} {value_bar(message.data2)}"
    if event_type == EventType.CONTROL_CHANGE:
        return "Control Change", f"CC{message.data1:<3d} {value_bar(message.data2)}"
    if event_type == EventType.PROGRAM_CHANGE:
        return "Program Change", f"program {message.data1}"
    if event_type == EventType.CHANNEL_PRESSURE:
        return "Channel Pressure", value_bar(message.data1)
    return "Pitch Bend", f"{message.pitch:+d}"


def _describe_meta(message: MetaMessage) -> str:
    try:
        value = message.value
    except InvalidMetaEvent as exc:
        return f"[red]{escape(str(exc))}[/red]"

    if message.meta_type == MetaType.SET_TEMPO:
        return format_tempo(value)
    if message.is_text:
        return escape(repr(value))
    if value is None:
        return ""
    if isinstance(value, bytes):
        return format_bytes(value)
    return str(value)


def describe_message(message: MidiMessage) -> Tuple[str, str, str]:
    """
    Describe a message for an event table.

    Returns:
        Tuple of (type name, channel column, details)
    """
    if isinstance(message, ChannelMessage):
        name, details = _describe_channel(message)
        if message.implicit_status:
            details += " [dim](running)[/dim]"
        return name, str(message.channel + 1), details

    if isinstance(message, MetaMessage):
        name = message.type_name.replace("_", " ").title()
        return f"Meta: {name}", "", _describe_meta(message)

    if isinstance(message, SysExMessage):
        name = "SysEx (F7)" if message.is_continuation else "SysEx"
        return name, "", format_bytes(message.data)

    if isinstance(message, SystemMessage):
        name = SYSTEM_NAMES.get(message.status, f"System 0x{message.status:02X}")
        return name, "", format_bytes(message.data)

    return type(message).__name__, "", ""
