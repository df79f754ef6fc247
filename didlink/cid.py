"""
Content identifiers and the DIDLink identifier derivation.

Identifiers are CIDv1 values over a sha2-256 multihash. For ordinary content
the digest covers the content bytes. For an authentic DIDLink file the digest
covers only ``bytes(public_key) || nonce``, so every file published with the
same key and nonce maps to the same identifier regardless of its target.
"""

from dataclasses import (
    dataclass,
)
import logging

import multihash

from didlink.crypto.verifier import (
    verify,
)
from didlink.encoding import (
    multibase,
)
from didlink.exceptions import (
    EncodingError,
)
from didlink.records.didlink_file import (
    DIDLinkFile,
    InvalidDIDLinkFile,
)
from didlink.utils.varint import (
    decode_uvarint_with_size,
    encode_uvarint,
)

logger = logging.getLogger(__name__)

CID_V1 = 1

# Multicodec constants
CODEC_RAW = 0x55
CODEC_DAG_PB = 0x70

URI_SCHEME = "ipfs://"
PATH_PREFIX = "/ipfs/"


@dataclass(frozen=True)
class ContentIdentifier:
    digest: bytes
    codec: int = CODEC_RAW

    @classmethod
    def from_data(cls, data: bytes, codec: int = CODEC_RAW) -> "ContentIdentifier":
        mh = multihash.digest(data, multihash.Func.sha2_256)
        return cls(mh.digest, codec)

    @property
    def multihash(self) -> bytes:
        return multihash.Multihash(multihash.Func.sha2_256, self.digest).encode()

    def to_bytes(self) -> bytes:
        # CIDv1 format: <version><codec><multihash>
        return encode_uvarint(CID_V1) + encode_uvarint(self.codec) + self.multihash

    def __str__(self) -> str:
        return multibase.encode(self.to_bytes(), multibase.BASE32)

    def to_uri(self) -> str:
        return URI_SCHEME + str(self)

    def __repr__(self) -> str:
        return f"<ContentIdentifier {self}>"

    @classmethod
    def from_bytes(cls, data: bytes) -> "ContentIdentifier":
        """
        Parse a binary CIDv1, or a bare sha2-256 multihash (CIDv0).

        Raises:
            EncodingError: If ``data`` is not a sha2-256 CID

        """
        if data[:1] == bytes([multihash.Func.sha2_256.value]):
            return cls(_decode_sha256_multihash(data), CODEC_DAG_PB)

        version, offset = decode_uvarint_with_size(data)
        if version != CID_V1:
            raise EncodingError(f"Unsupported CID version: {version}")
        codec, size = decode_uvarint_with_size(data[offset:])
        return cls(_decode_sha256_multihash(data[offset + size :]), codec)

    @classmethod
    def from_string(cls, text: str) -> "ContentIdentifier":
        """
        Parse ``ipfs://<cid>``, ``/ipfs/<cid>`` or a bare CID string.

        Bare base58btc strings starting with ``Qm`` are read as CIDv0.
        """
        for prefix in (URI_SCHEME, PATH_PREFIX):
            if text.startswith(prefix):
                text = text[len(prefix) :]
                break
        text = text.rstrip("/")
        if text.startswith("Qm"):
            return cls.from_bytes(multibase.decode("z" + text))
        return cls.from_bytes(multibase.decode(text))


def _decode_sha256_multihash(data: bytes) -> bytes:
    try:
        mh = multihash.decode(data)
    except (ValueError, KeyError, TypeError) as e:
        raise EncodingError(f"Invalid multihash: {e}") from e
    if mh.func != multihash.Func.sha2_256:
        raise EncodingError(f"Unsupported multihash function: {mh.func}")
    return mh.digest


def derive_identifier(file_bytes: bytes) -> ContentIdentifier:
    """
    Compute the content identifier of a DIDLink file.

    Steps:
    1. Parse ``file_bytes``; if that fails, hash the whole input
    2. Build ``message = bytes(public_key) || nonce``
    3. If the signature verifies over ``message``, hash ``message``
    4. Otherwise hash the whole input

    The function is total: any byte string yields an identifier, so it stays
    usable as a general content hash for the storage network.
    """
    file_bytes = bytes(file_bytes)
    try:
        link_file = DIDLinkFile.from_bytes(file_bytes)
    except InvalidDIDLinkFile as e:
        logger.debug("Hashing non-DIDLink content (%d bytes): %s", len(file_bytes), e)
        return ContentIdentifier.from_data(file_bytes)

    message = link_file.signed_message
    if verify(link_file.public_key, message, link_file.signature):
        return ContentIdentifier.from_data(message)

    logger.debug("DIDLink file signature does not verify, hashing whole file")
    return ContentIdentifier.from_data(file_bytes)
