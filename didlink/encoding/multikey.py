"""
Multikey values: a varint multicodec tag followed by the raw key bytes.

See https://www.w3.org/TR/controller-document/#multikey.
"""

from dataclasses import (
    dataclass,
)
from enum import (
    IntEnum,
    unique,
)

from didlink.encoding import (
    multibase,
)
from didlink.exceptions import (
    EncodingError,
)
from didlink.utils.varint import (
    decode_uvarint_with_size,
    encode_uvarint,
)


@unique
class Multicodec(IntEnum):
    ED25519_PUB = 0xED
    SECP256K1_PUB = 0xE7
    RSA_PUB = 0x1205


@dataclass(frozen=True)
class Multikey:
    """
    A decoded multikey.

    ``codec`` is kept as a plain ``int`` so keys with a multicodec this
    package does not know still decode; the verifier rejects them later.
    """

    codec: int
    key_bytes: bytes

    def __bytes__(self) -> bytes:
        return encode_uvarint(self.codec) + self.key_bytes

    @property
    def scheme(self) -> Multicodec | None:
        try:
            return Multicodec(self.codec)
        except ValueError:
            return None

    @classmethod
    def decode(cls, data: bytes) -> "Multikey":
        codec, offset = decode_uvarint_with_size(data)
        key_bytes = data[offset:]
        if not key_bytes:
            raise EncodingError("Multikey carries no key material")
        return cls(codec, key_bytes)

    @classmethod
    def from_multibase(cls, text: str) -> "Multikey":
        return cls.decode(multibase.decode(text))

    def to_multibase(self, base: str = multibase.BASE58BTC) -> str:
        return multibase.encode(bytes(self), base)

    def __repr__(self) -> str:
        name = self.scheme.name if self.scheme is not None else hex(self.codec)
        return f"<Multikey {name} {self.to_multibase()}>"
