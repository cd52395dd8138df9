"""
Variable-length quantity (VLQ) encoding/decoding utilities.

SMF stores delta-times and event lengths as big-endian base-128 integers.
Each byte carries 7 bits of the value; the high bit (bit 7) is set on every
byte except the last one.

Encoding scheme:
- Split the integer into 7-bit groups, most significant group first
- Set bit 7 on all groups except the last
- Zero is a single 0x00 byte
- At most 4 bytes are allowed, so the largest value is 0x0FFFFFFF

Example:
    Value:  192 (0b1_1000000)
    Groups: 0b0000001, 0b1000000
    Output: [0x81, 0x40]
"""

from typing import List, Tuple, Union

from smfkit.errors import MalformedQuantity, TruncatedQuantity

MAX_VLQ_BYTES = 4
MAX_VLQ_VALUE = 0x0FFFFFFF


def encode_vlq(value: int) -> bytes:
    """
    Encode an integer as a variable-length quantity.

    Args:
        value: Integer in the range 0-0x0FFFFFFF

    Returns:
        1 to 4 encoded bytes

    Raises:
        MalformedQuantity: If the value is negative or needs more than 28 bits

    Example:
        >>> encode_vlq(192)
        b'\\x81@'
    """
    if value < 0 or value > MAX_VLQ_VALUE:
        raise MalformedQuantity(f"Value {value} does not fit in a 4-byte quantity")

    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7

    return bytes(reversed(groups))


def decode_vlq(data: Union[bytes, List[int]], offset: int = 0) -> Tuple[int, int]:
    """
    Decode a variable-length quantity from a buffer.

    Args:
        data: Buffer containing the quantity
        offset: Position of the first byte

    Returns:
        Tuple of (value, number of bytes consumed)

    Raises:
        MalformedQuantity: If no terminating byte appears within 4 bytes
        TruncatedQuantity: If the buffer ends mid-quantity
    """
    if isinstance(data, list):
        data = bytes(data)

    value = 0
    for count in range(1, MAX_VLQ_BYTES + 1):
        position = offset + count - 1
        if position >= len(data):
            raise TruncatedQuantity("Data ends inside a variable-length quantity", position)

        byte = data[position]
        value = (value << 7) | (byte & 0x7F)

        if not byte & 0x80:
            return value, count

    raise MalformedQuantity(
        f"Variable-length quantity longer than {MAX_VLQ_BYTES} bytes", offset
    )


def read_vlq(source) -> int:
    """
    Read a variable-length quantity from a byte source.

    Bytes are consumed one at a time, so the source is left positioned
    right after the terminating byte.

    Args:
        source: Object implementing the ByteSource protocol

    Returns:
        Decoded value

    Raises:
        MalformedQuantity: If no terminating byte appears within 4 bytes
        TruncatedQuantity: If the source is exhausted mid-quantity
    """
    start = getattr(source, "position", None)
    value = 0

    for _ in range(MAX_VLQ_BYTES):
        if source.remaining() < 1:
            raise TruncatedQuantity(
                "Data ends inside a variable-length quantity",
                getattr(source, "position", None),
            )

        byte = source.read_exact(1)[0]
        value = (value << 7) | (byte & 0x7F)

        if not byte & 0x80:
            return value

    raise MalformedQuantity(
        f"Variable-length quantity longer than {MAX_VLQ_BYTES} bytes", start
    )


def vlq_length(value: int) -> int:
    """Return the number of bytes needed to encode a value."""
    return len(encode_vlq(value))
