"""Conversion to and from other MIDI libraries."""

from smfkit.interop.mido_bridge import from_mido, to_mido

__all__ = ["from_mido", "to_mido"]
