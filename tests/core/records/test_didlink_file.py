import json

import pytest

from didlink.crypto.ed25519 import create_new_key_pair
from didlink.encoding import multibase
from didlink.records.didlink_file import (
    DIDLinkFile,
    InvalidDIDLinkFile,
    create_didlink_file,
)

from tests.factories import DIDLinkFileFactory


def test_create_signs_key_and_nonce():
    key_pair = create_new_key_pair()
    link_file = create_didlink_file(key_pair.private_key, b"nonce-1", "/ipfs/bafyA")

    assert link_file.public_key == key_pair.public_key.to_multikey()
    assert link_file.signed_message == bytes(link_file.public_key) + b"nonce-1"
    assert key_pair.public_key.verify(link_file.signed_message, link_file.signature)
    assert link_file.is_authentic()


def test_wire_form_round_trip():
    link_file = DIDLinkFileFactory()
    data = link_file.to_json()

    assert set(json.loads(data)) == {
        "publicKeyMultibase",
        "nonce",
        "signature",
        "target",
    }
    assert DIDLinkFile.from_bytes(data) == link_file


def test_member_order_is_insignificant():
    link_file = DIDLinkFileFactory()
    reordered = json.dumps(dict(reversed(list(link_file.to_dict().items()))))
    assert DIDLinkFile.from_bytes(reordered.encode()) == link_file


def test_other_multibase_encodings_decode_to_same_file():
    link_file = DIDLinkFileFactory()
    record = link_file.to_dict()
    record["nonce"] = multibase.encode(link_file.nonce, multibase.BASE64URL)
    record["publicKeyMultibase"] = link_file.public_key.to_multibase(multibase.BASE32)

    assert DIDLinkFile.from_bytes(json.dumps(record).encode()) == link_file


def test_tampered_signature_is_not_authentic():
    link_file = DIDLinkFileFactory()
    tampered = DIDLinkFile(
        link_file.public_key,
        link_file.nonce,
        bytes([link_file.signature[0] ^ 1]) + link_file.signature[1:],
        link_file.target,
    )
    assert not tampered.is_authentic()


def _record(**overrides):
    record = DIDLinkFileFactory().to_dict()
    record.update(overrides)
    return record


@pytest.mark.parametrize(
    "data",
    [
        b"",
        b"\xff\xfe",
        b"not json",
        b"[]",
        b'"a string"',
        json.dumps({"target": "/ipfs/x"}).encode(),
        json.dumps(_record(extra="member")).encode(),
        json.dumps(_record(target=42)).encode(),
        json.dumps(_record(nonce="xnot-multibase")).encode(),
        json.dumps(_record(publicKeyMultibase="z")).encode(),
        b"[" * 100_000,
    ],
)
def test_from_bytes_rejects_malformed(data):
    with pytest.raises(InvalidDIDLinkFile):
        DIDLinkFile.from_bytes(data)


def test_missing_member_is_malformed():
    record = DIDLinkFileFactory().to_dict()
    del record["signature"]
    with pytest.raises(InvalidDIDLinkFile):
        DIDLinkFile.from_bytes(json.dumps(record).encode())
