import pytest

from didlink.documents import DocumentNotFound, StaticDocumentResolver


@pytest.mark.trio
async def test_serves_published_documents():
    resolver = StaticDocumentResolver(
        {"did:example:alice": {"id": "did:example:alice"}}
    )
    document = await resolver.fetch_document("example", "alice")
    assert document == {"id": "did:example:alice"}
    assert resolver.fetch_count == 1


@pytest.mark.trio
async def test_subject_may_contain_colons():
    resolver = StaticDocumentResolver()
    resolver.publish("did:web:example.com:users:bob", {"id": "x"})
    assert await resolver.fetch_document("web", "example.com:users:bob") == {"id": "x"}


@pytest.mark.trio
async def test_returned_documents_are_copies():
    published = {"service": []}
    resolver = StaticDocumentResolver({"did:example:alice": published})
    published["service"].append("late edit")

    document = await resolver.fetch_document("example", "alice")
    assert document == {"service": []}
    document["service"].append("caller edit")
    assert await resolver.fetch_document("example", "alice") == {"service": []}


@pytest.mark.trio
async def test_unknown_and_removed_documents():
    resolver = StaticDocumentResolver({"did:example:alice": {}})
    with pytest.raises(DocumentNotFound) as excinfo:
        await resolver.fetch_document("example", "bob")
    assert isinstance(excinfo.value.__cause__, KeyError)

    resolver.remove("did:example:alice")
    with pytest.raises(DocumentNotFound):
        await resolver.fetch_document("example", "alice")


@pytest.mark.parametrize("did", ["example:alice", "did::alice", "urn:example:alice"])
def test_publish_rejects_non_dids(did):
    with pytest.raises(ValueError):
        StaticDocumentResolver().publish(did, {})
