"""
Data validation utilities for SMF models.
"""

from smfkit.errors import ValidationError


def validate_data_byte(value: int, name: str = "value") -> None:
    """
    Validate that a value fits in a MIDI data byte (0-127).

    Args:
        value: The value to validate
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    if not 0 <= value <= 127:
        raise ValidationError(f"{name} must be 0-127, got {value}")


def validate_channel(channel: int) -> None:
    """
    Validate a wire-level MIDI channel number (0-15).

    Args:
        channel: Channel number

    Raises:
        ValidationError: If channel is out of range
    """
    if not 0 <= channel <= 15:
        raise ValidationError(f"MIDI channel must be 0-15, got {channel}")


def validate_byte(value: int, name: str = "value") -> None:
    """Validate an unsigned 8-bit value."""
    if not 0 <= value <= 0xFF:
        raise ValidationError(f"{name} must be 0-255, got {value}")


def validate_u16(value: int, name: str = "value") -> None:
    """Validate an unsigned 16-bit value."""
    if not 0 <= value <= 0xFFFF:
        raise ValidationError(f"{name} must be 0-65535, got {value}")


def validate_u32(value: int, name: str = "value") -> None:
    """Validate an unsigned 32-bit value."""
    if not 0 <= value <= 0xFFFFFFFF:
        raise ValidationError(f"{name} must fit in 32 bits, got {value}")


def validate_chunk_tag(tag: bytes) -> None:
    """
    Validate a chunk tag.

    Tags are 4 raw bytes. They are shown as ASCII but never required to be
    printable.

    Args:
        tag: Chunk tag

    Raises:
        ValidationError: If the tag is not exactly 4 bytes
    """
    if not isinstance(tag, (bytes, bytearray)):
        raise ValidationError(f"Chunk tag must be bytes, got {type(tag).__name__}")
    if len(tag) != 4:
        raise ValidationError(f"Chunk tag must be 4 bytes, got {len(tag)}")
