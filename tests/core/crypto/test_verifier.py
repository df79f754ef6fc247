import pytest

from didlink.crypto.ed25519 import create_new_key_pair as create_ed25519_key_pair
from didlink.crypto.exceptions import CryptographyError, MissingDeserializerError
from didlink.crypto.secp256k1 import create_new_key_pair as create_secp256k1_key_pair
from didlink.crypto.serialization import deserialize_public_key
from didlink.crypto.verifier import verify
from didlink.encoding import Multikey

MESSAGE = b"did:example:alice#homepage"


@pytest.mark.parametrize(
    "create_key_pair", [create_ed25519_key_pair, create_secp256k1_key_pair]
)
def test_verify_accepts_multikey_and_bytes(create_key_pair):
    key_pair = create_key_pair()
    multikey = key_pair.public_key.to_multikey()
    signature = key_pair.private_key.sign(MESSAGE)

    assert verify(multikey, MESSAGE, signature) is True
    assert verify(bytes(multikey), MESSAGE, signature) is True
    assert verify(multikey, MESSAGE + b"x", signature) is False


def test_verify_with_wrong_key():
    signer = create_ed25519_key_pair()
    other = create_ed25519_key_pair()
    signature = signer.private_key.sign(MESSAGE)

    assert verify(other.public_key.to_multikey(), MESSAGE, signature) is False


def test_unknown_scheme_fails_closed():
    # p256-pub is a real multicodec this package has no verifier for
    multikey = Multikey(0x1200, b"\x02" + b"\x11" * 32)
    assert verify(multikey, MESSAGE, b"\x00" * 64) is False


def test_malformed_key_fails_closed():
    # ed25519 keys are exactly 32 bytes
    assert verify(Multikey(0xED, b"\x01" * 5), MESSAGE, b"\x00" * 64) is False
    assert verify(b"\xed", MESSAGE, b"\x00" * 64) is False


def test_cross_scheme_tag_fails_closed():
    key_pair = create_ed25519_key_pair()
    signature = key_pair.private_key.sign(MESSAGE)
    relabelled = Multikey(0xE7, key_pair.public_key.to_bytes())

    assert verify(relabelled, MESSAGE, signature) is False


def test_deserialize_reports_missing_scheme():
    with pytest.raises(MissingDeserializerError):
        deserialize_public_key(Multikey(0x1200, b"\x02" * 33))


def test_deserialize_reports_malformed_key():
    with pytest.raises(CryptographyError):
        deserialize_public_key(Multikey(0xE7, b"\x09" * 33))
