import pytest

from didlink.crypto.ed25519 import create_new_key_pair
from didlink.encoding import multibase
from didlink.exceptions import InvalidServiceProof, MalformedService, NoMatchingService
from didlink.records.did_url import DIDURL
from didlink.records.service import (
    ServiceEntry,
    document_id,
    find_verification_key,
    select_service,
)

from tests.factories import DEFAULT_DID, ServiceDictFactory

NAME = DIDURL.parse(f"{DEFAULT_DID}#homepage")


def _document(*services, **members):
    document = {"id": DEFAULT_DID, "service": list(services)}
    document.update(members)
    return document


def test_select_matching_entry():
    service = ServiceDictFactory(id=str(NAME), ttl=60)
    entry = select_service(_document(service), NAME)

    assert entry.id == str(NAME)
    assert entry.ttl == 60
    assert entry.service_endpoint == service["serviceEndpoint"]
    assert entry.verification_method == f"{DEFAULT_DID}#key-1"
    assert entry.proof_value == multibase.decode(service["proofValue"])
    assert entry.signed_message == str(NAME).encode()


def test_select_skips_other_ids_and_types():
    document = _document(
        ServiceDictFactory(id=f"{DEFAULT_DID}#blog"),
        ServiceDictFactory(id=str(NAME), type="LinkedDomains"),
        ServiceDictFactory(id=str(NAME), ttl=7),
    )
    assert select_service(document, NAME).ttl == 7


def test_first_match_wins():
    document = _document(
        ServiceDictFactory(id=str(NAME), ttl=1),
        ServiceDictFactory(id=str(NAME), ttl=2),
    )
    assert select_service(document, NAME).ttl == 1


def test_malformed_first_match_hides_later_duplicates():
    document = _document(
        ServiceDictFactory(id=str(NAME), ttl="soon"),
        ServiceDictFactory(id=str(NAME)),
    )
    with pytest.raises(MalformedService):
        select_service(document, NAME)


def test_relative_ids_expand_against_document_id():
    service = ServiceDictFactory(
        id="#homepage", signed_id=str(NAME), verificationMethod="#key-1"
    )
    entry = select_service(_document(service), NAME)
    assert entry.id == str(NAME)
    assert entry.verification_method == f"{DEFAULT_DID}#key-1"


@pytest.mark.parametrize(
    "document",
    [
        _document(),
        {"id": DEFAULT_DID},
        _document(ServiceDictFactory(id=f"{DEFAULT_DID}#other")),
        {"id": DEFAULT_DID, "service": "not-a-list"},
        _document("not-a-mapping", {"type": "DIDLink"}),
    ],
)
def test_no_matching_service(document):
    with pytest.raises(NoMatchingService):
        select_service(document, NAME)


def test_malformed_is_a_no_matching_service():
    assert issubclass(MalformedService, NoMatchingService)


@pytest.mark.parametrize(
    "overrides",
    [
        {"ttl": -1},
        {"ttl": 1.5},
        {"ttl": True},
        {"ttl": None},
        {"serviceEndpoint": ""},
        {"serviceEndpoint": 7},
        {"verificationMethod": None},
        {"proofValue": "!not-multibase"},
    ],
)
def test_malformed_entries(overrides):
    service = ServiceDictFactory(id=str(NAME), **overrides)
    with pytest.raises(MalformedService):
        ServiceEntry.from_dict(service, DEFAULT_DID)


def test_ttl_zero_is_allowed():
    service = ServiceDictFactory(id=str(NAME), ttl=0)
    assert ServiceEntry.from_dict(service, DEFAULT_DID).ttl == 0


def test_find_verification_key():
    key = create_new_key_pair().public_key.to_multikey()
    document = _document(
        verificationMethod=[
            {"id": "#key-0", "publicKeyMultibase": "zbogus"},
            {"id": "#key-1", "publicKeyMultibase": key.to_multibase()},
        ]
    )
    found = find_verification_key(document, f"{DEFAULT_DID}#key-1", DEFAULT_DID)
    assert found == key


def test_find_verification_key_in_relationship():
    key = create_new_key_pair().public_key.to_multikey()
    document = _document(
        verificationMethod=[],
        assertionMethod=[
            f"{DEFAULT_DID}#key-1",
            {"id": f"{DEFAULT_DID}#key-2", "publicKeyMultibase": key.to_multibase()},
        ],
    )
    assert find_verification_key(document, f"{DEFAULT_DID}#key-2", DEFAULT_DID) == key


@pytest.mark.parametrize(
    "methods",
    [
        [],
        [{"id": "#key-1", "publicKeyJwk": {"kty": "OKP"}}],
        [{"id": "#key-1", "publicKeyMultibase": "z"}],
        [{"id": "#key-1", "publicKeyMultibase": "not multibase"}],
    ],
)
def test_unusable_verification_method(methods):
    document = _document(verificationMethod=methods)
    with pytest.raises(InvalidServiceProof):
        find_verification_key(document, f"{DEFAULT_DID}#key-1", DEFAULT_DID)


def test_document_id_falls_back_to_queried_did():
    assert document_id({"id": "did:example:bob"}, NAME) == "did:example:bob"
    assert document_id({}, NAME) == DEFAULT_DID
    assert document_id({"id": ""}, NAME) == DEFAULT_DID
