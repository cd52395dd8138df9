"""Utility functions for smfkit."""

from smfkit.utils.vlq import encode_vlq, decode_vlq, read_vlq
from smfkit.utils.validation import (
    validate_channel,
    validate_chunk_tag,
    validate_data_byte,
)

__all__ = [
    "encode_vlq",
    "decode_vlq",
    "read_vlq",
    "validate_channel",
    "validate_chunk_tag",
    "validate_data_byte",
]
