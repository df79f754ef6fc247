"""Key types and interfaces."""

from abc import (
    ABC,
    abstractmethod,
)
from dataclasses import (
    dataclass,
)
from enum import (
    Enum,
    unique,
)

from didlink.encoding.multikey import (
    Multicodec,
    Multikey,
)


@unique
class KeyType(Enum):
    RSA = Multicodec.RSA_PUB
    Ed25519 = Multicodec.ED25519_PUB
    Secp256k1 = Multicodec.SECP256K1_PUB


class Key(ABC):
    """A ``Key`` represents a cryptographic key."""

    @abstractmethod
    def to_bytes(self) -> bytes:
        """Returns the byte representation of this key."""
        ...

    @abstractmethod
    def get_type(self) -> KeyType:
        """Returns the ``KeyType`` for ``self``."""
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Key):
            return NotImplemented
        return self.get_type() == other.get_type() and self.to_bytes() == (
            other.to_bytes()
        )


class PublicKey(Key):
    """A ``PublicKey`` represents a cryptographic public key."""

    @abstractmethod
    def verify(self, data: bytes, signature: bytes) -> bool:
        """
        Verify that ``signature`` is the cryptographic signature of the hash
        of ``data``.
        """
        ...

    def to_multikey(self) -> Multikey:
        """Return the multicodec-tagged form of this ``Key``."""
        return Multikey(int(self.get_type().value), self.to_bytes())

    def serialize(self) -> bytes:
        """Return the canonical serialization of this ``Key``."""
        return bytes(self.to_multikey())


class PrivateKey(Key):
    """A ``PrivateKey`` represents a cryptographic private key."""

    @abstractmethod
    def sign(self, data: bytes) -> bytes: ...

    @abstractmethod
    def get_public_key(self) -> PublicKey: ...


@dataclass(frozen=True)
class KeyPair:
    private_key: PrivateKey
    public_key: PublicKey
