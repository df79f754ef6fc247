from nacl.exceptions import (
    CryptoError,
)

from didlink.crypto.ed25519 import (
    Ed25519PublicKey,
)
from didlink.crypto.exceptions import (
    CryptographyError,
    MissingDeserializerError,
)
from didlink.crypto.keys import (
    KeyType,
    PublicKey,
)
from didlink.crypto.rsa import (
    RSAPublicKey,
)
from didlink.crypto.secp256k1 import (
    Secp256k1PublicKey,
)
from didlink.encoding.multikey import (
    Multikey,
)

key_type_to_public_key_deserializer = {
    KeyType.Secp256k1.value: Secp256k1PublicKey.from_bytes,
    KeyType.RSA.value: RSAPublicKey.from_bytes,
    KeyType.Ed25519.value: Ed25519PublicKey.from_bytes,
}


def deserialize_public_key(data: Multikey | bytes) -> PublicKey:
    """
    Build a ``PublicKey`` from a multikey.

    :raises MissingDeserializerError: if the multicodec is not supported.
    :raises CryptographyError: if the key material is malformed.
    """
    multikey = data if isinstance(data, Multikey) else Multikey.decode(data)
    try:
        deserializer = key_type_to_public_key_deserializer[multikey.codec]
    except KeyError as e:
        raise MissingDeserializerError(
            {"multicodec": hex(multikey.codec), "key": "public_key"}
        ) from e
    try:
        return deserializer(multikey.key_bytes)
    except CryptographyError:
        raise
    except (ValueError, TypeError, CryptoError) as e:
        raise CryptographyError(f"Malformed {hex(multikey.codec)} key: {e}") from e
