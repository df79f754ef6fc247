import logging

from didlink.exceptions import (
    EncodingError,
)

logger = logging.getLogger("didlink.utils.varint")

# Unsigned LEB128(varint codec), as used by multicodec prefixes.
# Reference: https://github.com/multiformats/unsigned-varint

LOW_MASK = 2**7 - 1
HIGH_MASK = 2**7

# multiformats caps unsigned varints at 9 bytes (63 bits).
MAX_VARINT_LENGTH = 9


def encode_uvarint(value: int) -> bytes:
    """Encode an unsigned integer as a varint."""
    if value < 0:
        raise ValueError("Cannot encode negative value as uvarint")

    result = bytearray()
    while value >= HIGH_MASK:
        result.append((value & LOW_MASK) | HIGH_MASK)
        value >>= 7
    result.append(value & LOW_MASK)
    return bytes(result)


def decode_uvarint_with_size(data: bytes) -> tuple[int, int]:
    """
    Decode a varint from the start of ``data`` and return both the value and
    the number of bytes consumed.

    Raises:
        EncodingError: If ``data`` ends mid-varint, the varint is longer than
            ``MAX_VARINT_LENGTH`` bytes, or it is not minimally encoded.

    """
    result = 0
    shift = 0

    for i, byte in enumerate(data[:MAX_VARINT_LENGTH]):
        result |= (byte & LOW_MASK) << shift
        if not byte & HIGH_MASK:
            if byte == 0 and i > 0:
                raise EncodingError("Varint is not minimally encoded")
            return result, i + 1
        shift += 7

    if len(data) >= MAX_VARINT_LENGTH:
        raise EncodingError("Varint too long")
    raise EncodingError("Unexpected end of data")


def decode_uvarint(data: bytes) -> int:
    """Decode a varint from bytes, ignoring any trailing data."""
    value, _ = decode_uvarint_with_size(data)
    return value
