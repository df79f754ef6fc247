from didlink.crypto.keys import (
    KeyPair,
    KeyType,
    PrivateKey,
    PublicKey,
)
from didlink.crypto.serialization import (
    deserialize_public_key,
)
from didlink.crypto.verifier import (
    verify,
)

__all__ = [
    "KeyPair",
    "KeyType",
    "PrivateKey",
    "PublicKey",
    "deserialize_public_key",
    "verify",
]
