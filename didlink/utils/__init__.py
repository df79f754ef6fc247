"""Utility functions for didlink."""

from didlink.utils.varint import (
    decode_uvarint,
    decode_uvarint_with_size,
    encode_uvarint,
)

__all__ = [
    "decode_uvarint",
    "decode_uvarint_with_size",
    "encode_uvarint",
]
