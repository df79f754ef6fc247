"""
DIDLink files: the signed, immutable link records published to the
content-addressed network.

On the wire a DIDLink file is a UTF-8 JSON object with exactly four string
members::

    {
        "publicKeyMultibase": "z6Mk...",
        "nonce": "z...",
        "signature": "z...",
        "target": "/ipfs/bafy..."
    }

The signature covers ``bytes(public_key) || nonce``, the decoded multikey
(multicodec prefix included) followed by the decoded nonce. Decoded forms are
used so two text encodings of the same key or nonce can never sign different
messages.
"""

from dataclasses import (
    dataclass,
)
import json
import logging

from didlink.crypto.keys import (
    PrivateKey,
)
from didlink.crypto.verifier import (
    verify,
)
from didlink.encoding import (
    multibase,
)
from didlink.encoding.multikey import (
    Multikey,
)
from didlink.exceptions import (
    EncodingError,
    ParseError,
)

logger = logging.getLogger(__name__)

FIELD_PUBLIC_KEY = "publicKeyMultibase"
FIELD_NONCE = "nonce"
FIELD_SIGNATURE = "signature"
FIELD_TARGET = "target"
FIELDS = frozenset((FIELD_PUBLIC_KEY, FIELD_NONCE, FIELD_SIGNATURE, FIELD_TARGET))


class InvalidDIDLinkFile(ParseError):
    pass


@dataclass(frozen=True)
class DIDLinkFile:
    public_key: Multikey
    nonce: bytes
    signature: bytes
    target: str

    @property
    def signed_message(self) -> bytes:
        return bytes(self.public_key) + self.nonce

    def is_authentic(self) -> bool:
        return verify(self.public_key, self.signed_message, self.signature)

    @classmethod
    def from_bytes(cls, data: bytes) -> "DIDLinkFile":
        """
        Parse the wire form of a DIDLink file.

        Raises:
            InvalidDIDLinkFile: If ``data`` is not UTF-8 JSON holding exactly
                the four string members, or a member fails to decode

        """
        try:
            record = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, ValueError, RecursionError) as e:
            raise InvalidDIDLinkFile(f"Not a UTF-8 JSON document: {e}") from e

        if not isinstance(record, dict):
            raise InvalidDIDLinkFile("DIDLink file must be a JSON object")
        if set(record) != FIELDS:
            missing = sorted(FIELDS - set(record))
            extra = sorted(set(record) - FIELDS)
            raise InvalidDIDLinkFile(
                f"Unexpected member set (missing={missing}, extra={extra})"
            )
        for field in FIELDS:
            if not isinstance(record[field], str):
                raise InvalidDIDLinkFile(f"Member {field!r} must be a string")

        try:
            public_key = Multikey.from_multibase(record[FIELD_PUBLIC_KEY])
            nonce = multibase.decode(record[FIELD_NONCE])
            signature = multibase.decode(record[FIELD_SIGNATURE])
        except EncodingError as e:
            raise InvalidDIDLinkFile(f"Undecodable member: {e}") from e

        return cls(public_key, nonce, signature, record[FIELD_TARGET])

    def to_dict(self) -> dict[str, str]:
        return {
            FIELD_PUBLIC_KEY: self.public_key.to_multibase(),
            FIELD_NONCE: multibase.encode(self.nonce),
            FIELD_SIGNATURE: multibase.encode(self.signature),
            FIELD_TARGET: self.target,
        }

    def to_json(self) -> bytes:
        """Canonical wire form: sorted keys, compact separators, base58btc."""
        return json.dumps(
            self.to_dict(), sort_keys=True, separators=(",", ":"), ensure_ascii=False
        ).encode("utf-8")


def create_didlink_file(
    private_key: PrivateKey, nonce: bytes, target: str
) -> DIDLinkFile:
    """
    Sign a new DIDLink file.

    The caller must never reuse ``nonce`` with the same key: the derived
    identifier depends only on the key and nonce, so a reused pair with a
    different ``target`` collides with the earlier file.
    """
    public_key = private_key.get_public_key().to_multikey()
    signature = private_key.sign(bytes(public_key) + nonce)
    logger.debug("Signed DIDLink file for %r", target)
    return DIDLinkFile(public_key, nonce, signature, target)
