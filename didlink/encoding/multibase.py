"""
Multibase encoding and decoding.

A multibase string is a single prefix character naming the base, followed by
the data encoded in that base. See https://github.com/multiformats/multibase.
Only the unpadded, lowercase-canonical variants used by DID documents and
CIDs are supported.
"""

import base64
import binascii

import base58

from didlink.exceptions import (
    EncodingError,
)

BASE58BTC = "base58btc"
BASE32 = "base32"
BASE16 = "base16"
BASE64 = "base64"
BASE64URL = "base64url"

PREFIX_TO_BASE = {
    "z": BASE58BTC,
    "b": BASE32,
    "f": BASE16,
    "m": BASE64,
    "u": BASE64URL,
}
BASE_TO_PREFIX = {base: prefix for prefix, base in PREFIX_TO_BASE.items()}


def _pad(data: str, block: int) -> str:
    return data + "=" * (-len(data) % block)


def _encode_base(data: bytes, base: str) -> str:
    if base == BASE58BTC:
        return base58.b58encode(data).decode("ascii")
    if base == BASE32:
        return base64.b32encode(data).decode("ascii").lower().rstrip("=")
    if base == BASE16:
        return data.hex()
    if base == BASE64:
        return base64.b64encode(data).decode("ascii").rstrip("=")
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _decode_base(payload: str, base: str) -> bytes:
    if base == BASE58BTC:
        return base58.b58decode(payload)
    if base == BASE32:
        if payload != payload.lower():
            raise ValueError("base32 payload must be lowercase")
        return base64.b32decode(_pad(payload.upper(), 8))
    if base == BASE16:
        if set(payload) - set("0123456789abcdef"):
            raise ValueError("base16 payload must be lowercase hex")
        return bytes.fromhex(payload)
    if "=" in payload:
        raise ValueError("padding is not allowed")
    if base == BASE64:
        return base64.b64decode(_pad(payload, 4), validate=True)
    if "+" in payload or "/" in payload:
        raise ValueError("base64 characters are not allowed in base64url")
    return base64.b64decode(
        _pad(payload, 4).replace("-", "+").replace("_", "/"), validate=True
    )


def encode(data: bytes, base: str = BASE58BTC) -> str:
    """
    Encode ``data`` as a multibase string.

    Args:
        data: The bytes to encode
        base: One of the supported base names (default: base58btc)

    Returns:
        The prefixed, encoded string

    Raises:
        EncodingError: If ``base`` is not supported

    """
    prefix = BASE_TO_PREFIX.get(base)
    if prefix is None:
        raise EncodingError(f"Unsupported multibase encoding: {base}")
    return prefix + _encode_base(data, base)


def decode(text: str) -> bytes:
    """
    Decode a multibase string to raw bytes.

    Raises:
        EncodingError: If ``text`` is empty, carries an unknown prefix, or its
            payload is not valid in the named base

    """
    if not isinstance(text, str) or not text:
        raise EncodingError("Multibase value must be a non-empty string")

    base = PREFIX_TO_BASE.get(text[0])
    if base is None:
        raise EncodingError(f"Unsupported multibase prefix: {text[0]!r}")

    payload = text[1:]
    if not payload.isascii():
        raise EncodingError(f"Invalid {base} payload: non-ASCII characters")
    try:
        return _decode_base(payload, base)
    except (ValueError, binascii.Error) as e:
        raise EncodingError(f"Invalid {base} payload: {e}") from e


def get_base(text: str) -> str:
    """Return the base name of a multibase string."""
    if not text or text[0] not in PREFIX_TO_BASE:
        raise EncodingError("Unsupported or missing multibase prefix")
    return PREFIX_TO_BASE[text[0]]
