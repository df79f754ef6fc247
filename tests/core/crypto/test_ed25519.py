from didlink.crypto.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
    create_new_key_pair,
)
from didlink.crypto.keys import KeyType
from didlink.crypto.serialization import deserialize_public_key


def test_sign_and_verify():
    key_pair = create_new_key_pair()
    signature = key_pair.private_key.sign(b"message")

    assert key_pair.public_key.verify(b"message", signature)
    assert not key_pair.public_key.verify(b"other message", signature)


def test_seeded_key_pair_is_deterministic():
    seed = b"\x07" * 32
    assert create_new_key_pair(seed).public_key == create_new_key_pair(seed).public_key


def test_key_pair_restores_from_seed():
    key_pair = create_new_key_pair()
    restored = create_new_key_pair(key_pair.private_key.to_bytes())

    assert isinstance(restored.private_key, Ed25519PrivateKey)
    assert restored.private_key == key_pair.private_key
    assert restored.public_key == key_pair.public_key


def test_public_key_multikey_round_trip():
    public_key = create_new_key_pair().public_key
    restored = deserialize_public_key(public_key.serialize())

    assert isinstance(restored, Ed25519PublicKey)
    assert restored.get_type() is KeyType.Ed25519
    assert restored == public_key


def test_verify_rejects_short_signature():
    key_pair = create_new_key_pair()
    assert not key_pair.public_key.verify(b"message", b"\x00" * 10)
