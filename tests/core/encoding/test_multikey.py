import pytest

from didlink.crypto.ed25519 import create_new_key_pair
from didlink.encoding import Multicodec, Multikey, multibase
from didlink.exceptions import EncodingError


def test_ed25519_multikey_has_z6mk_prefix():
    public_key = create_new_key_pair().public_key
    multikey = public_key.to_multikey()

    text = multikey.to_multibase()
    assert text.startswith("z6Mk")
    assert bytes(multikey)[:2] == b"\xed\x01"
    assert multikey.scheme is Multicodec.ED25519_PUB
    assert Multikey.from_multibase(text) == multikey


def test_known_did_key_vector():
    # did:key test vector from the did:key method specification
    text = "z6MkiTBz1ymuepAQ4HEHYSF1H8quG5GLVVQR3djdX3mDooWp"
    multikey = Multikey.from_multibase(text)
    assert multikey.codec == Multicodec.ED25519_PUB
    assert len(multikey.key_bytes) == 32
    assert multikey.to_multibase() == text


def test_unknown_codec_is_kept():
    multikey = Multikey.decode(b"\x80\x24" + b"\x01" * 33)
    assert multikey.codec == 0x1200
    assert multikey.scheme is None
    assert "0x1200" in repr(multikey)


def test_decode_rejects_missing_key_material():
    with pytest.raises(EncodingError):
        Multikey.decode(b"\xed\x01")


def test_decode_rejects_truncated_prefix():
    with pytest.raises(EncodingError):
        Multikey.from_multibase(multibase.encode(b"\xed"))
