import coincurve

from didlink.crypto.keys import (
    KeyPair,
    KeyType,
    PrivateKey,
    PublicKey,
)


class Secp256k1PublicKey(PublicKey):
    """secp256k1 key; multikey material is the 33-byte compressed point."""

    def __init__(self, point: coincurve.PublicKey) -> None:
        self.point = point

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "Secp256k1PublicKey":
        return cls(coincurve.PublicKey(key_bytes))

    def to_bytes(self) -> bytes:
        return self.point.format(compressed=True)

    def get_type(self) -> KeyType:
        return KeyType.Secp256k1

    def verify(self, data: bytes, signature: bytes) -> bool:
        # signatures are DER; coincurve raises on anything it cannot parse
        try:
            return self.point.verify(signature, data)
        except (ValueError, TypeError):
            return False


class Secp256k1PrivateKey(PrivateKey):
    def __init__(self, secret_key: coincurve.PrivateKey) -> None:
        self.secret_key = secret_key

    def to_bytes(self) -> bytes:
        return self.secret_key.secret

    def get_type(self) -> KeyType:
        return KeyType.Secp256k1

    def sign(self, data: bytes) -> bytes:
        return self.secret_key.sign(data)

    def get_public_key(self) -> Secp256k1PublicKey:
        return Secp256k1PublicKey(self.secret_key.public_key)


def create_new_key_pair(secret: bytes | None = None) -> KeyPair:
    """
    Generate a key pair, or restore it from a 32-byte ``secret``.
    """
    private_key = Secp256k1PrivateKey(coincurve.PrivateKey(secret))
    return KeyPair(private_key, private_key.get_public_key())
