"""
Ed25519 keys using PyNaCl, the default scheme for DIDLink files and service
proofs. Multikey material is the raw 32-byte public key.
"""

from nacl.exceptions import (
    BadSignatureError,
)
from nacl.signing import (
    SigningKey,
    VerifyKey,
)

from didlink.crypto.keys import (
    KeyPair,
    KeyType,
    PrivateKey,
    PublicKey,
)


class Ed25519PublicKey(PublicKey):
    def __init__(self, verify_key: VerifyKey) -> None:
        self.verify_key = verify_key

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "Ed25519PublicKey":
        return cls(VerifyKey(key_bytes))

    def to_bytes(self) -> bytes:
        return bytes(self.verify_key)

    def get_type(self) -> KeyType:
        return KeyType.Ed25519

    def verify(self, data: bytes, signature: bytes) -> bool:
        # nacl raises ValueError for signatures that are not 64 bytes
        try:
            self.verify_key.verify(data, signature)
        except (BadSignatureError, ValueError, TypeError):
            return False
        return True


class Ed25519PrivateKey(PrivateKey):
    def __init__(self, signing_key: SigningKey) -> None:
        self.signing_key = signing_key

    def to_bytes(self) -> bytes:
        # the 32-byte seed
        return bytes(self.signing_key)

    def get_type(self) -> KeyType:
        return KeyType.Ed25519

    def sign(self, data: bytes) -> bytes:
        return self.signing_key.sign(data).signature

    def get_public_key(self) -> Ed25519PublicKey:
        return Ed25519PublicKey(self.signing_key.verify_key)


def create_new_key_pair(seed: bytes | None = None) -> KeyPair:
    """
    Generate a key pair, or derive it from a 32-byte ``seed`` so publishers
    can restore the key that signed their files.
    """
    signing_key = SigningKey.generate() if seed is None else SigningKey(seed)
    private_key = Ed25519PrivateKey(signing_key)
    return KeyPair(private_key, private_key.get_public_key())
