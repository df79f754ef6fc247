"""
RSA keys (PKCS#1 v1.5 signatures over SHA-256) using pycryptodome.

Under the ``rsa-pub`` multicodec the key material is the DER encoding of a
PKCS#1 ``RSAPublicKey``, i.e. ``SEQUENCE { modulus, publicExponent }``, not
an X.509 SubjectPublicKeyInfo.
"""

from Crypto.Hash import (
    SHA256,
)
import Crypto.PublicKey.RSA as RSA
from Crypto.PublicKey.RSA import (
    RsaKey,
)
from Crypto.Signature import (
    pkcs1_15,
)
from Crypto.Util.asn1 import (
    DerSequence,
)

from didlink.crypto.exceptions import (
    CryptographyError,
)
from didlink.crypto.keys import (
    KeyPair,
    KeyType,
    PrivateKey,
    PublicKey,
)

MAX_RSA_KEY_SIZE = 4096
MIN_RSA_KEY_SIZE = 2048


def check_modulus_size(bits: int) -> None:
    """
    :raises CryptographyError: if ``bits`` is outside
        ``MIN_RSA_KEY_SIZE..MAX_RSA_KEY_SIZE``
    """
    if not MIN_RSA_KEY_SIZE <= bits <= MAX_RSA_KEY_SIZE:
        raise CryptographyError(
            f"RSA modulus of {bits} bits is outside "
            f"{MIN_RSA_KEY_SIZE}..{MAX_RSA_KEY_SIZE}"
        )


class RSAPublicKey(PublicKey):
    def __init__(self, rsa_key: RsaKey) -> None:
        check_modulus_size(rsa_key.size_in_bits())
        self.rsa_key = rsa_key

    @classmethod
    def from_bytes(cls, key_bytes: bytes) -> "RSAPublicKey":
        """
        Parse a PKCS#1 ``RSAPublicKey`` DER.

        :raises CryptographyError: on any other encoding, including private
            keys and SubjectPublicKeyInfo
        """
        try:
            sequence = DerSequence()
            sequence.decode(
                key_bytes, strict=True, nr_elements=2, only_ints_expected=True
            )
            rsa_key = RSA.construct((sequence[0], sequence[1]))
        except (ValueError, IndexError, TypeError) as e:
            raise CryptographyError(f"Invalid PKCS#1 RSA public key: {e}") from e
        return cls(rsa_key)

    def to_bytes(self) -> bytes:
        return DerSequence([self.rsa_key.n, self.rsa_key.e]).encode()

    def get_type(self) -> KeyType:
        return KeyType.RSA

    def verify(self, data: bytes, signature: bytes) -> bool:
        try:
            pkcs1_15.new(self.rsa_key).verify(SHA256.new(data), signature)
        except (ValueError, TypeError):
            return False
        return True


class RSAPrivateKey(PrivateKey):
    def __init__(self, rsa_key: RsaKey) -> None:
        self.rsa_key = rsa_key

    def to_bytes(self) -> bytes:
        # PKCS#1 RSAPrivateKey
        return self.rsa_key.export_key("DER")

    def get_type(self) -> KeyType:
        return KeyType.RSA

    def sign(self, data: bytes) -> bytes:
        return pkcs1_15.new(self.rsa_key).sign(SHA256.new(data))

    def get_public_key(self) -> RSAPublicKey:
        return RSAPublicKey(self.rsa_key.publickey())


def create_new_key_pair(bits: int = 2048) -> KeyPair:
    check_modulus_size(bits)
    private_key = RSAPrivateKey(RSA.generate(bits))
    return KeyPair(private_key, private_key.get_public_key())
