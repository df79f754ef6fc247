import pytest

import didlink
from didlink.config import ResolverConfig
from didlink.content import BlockStoreContentFetcher
from didlink.documents import StaticDocumentResolver
from didlink.exceptions import MethodNotSupported


def test_defaults():
    config = ResolverConfig()
    assert config.document_resolvers == {}
    assert config.content_fetcher is None
    assert config.document_timeout == 30.0
    assert config.content_timeout == 30.0
    assert config.max_ttl is None
    assert config.cache_max_entries == 10_000
    assert config.cache_sweep_interval is None


def test_method_registry():
    config = ResolverConfig()
    web, example = StaticDocumentResolver(), StaticDocumentResolver()
    config.register_method("web", web)
    config.register_method("example", example)

    assert config.methods == ["example", "web"]
    assert config.resolver_for("web") is web
    assert config.resolver_for("key") is None

    config.unregister_method("web")
    config.unregister_method("web")
    assert config.methods == ["example"]


@pytest.mark.parametrize("method", ["", "Web", "did:web"])
def test_register_rejects_bad_method_names(method):
    with pytest.raises(ValueError):
        ResolverConfig().register_method(method, StaticDocumentResolver())


@pytest.mark.parametrize(
    "options",
    [
        {"document_timeout": 0},
        {"content_timeout": -1},
        {"cache_sweep_interval": 0},
        {"max_ttl": -1},
        {"cache_max_entries": 0},
    ],
)
def test_validate_rejects_out_of_range_options(options):
    config = ResolverConfig(content_fetcher=BlockStoreContentFetcher(), **options)
    with pytest.raises(ValueError):
        config.validate()


def test_validate_accepts_unbounded_options():
    ResolverConfig(
        content_fetcher=BlockStoreContentFetcher(),
        document_timeout=None,
        content_timeout=None,
        max_ttl=None,
        cache_max_entries=None,
    ).validate()


def test_dict_round_trip():
    fetcher = BlockStoreContentFetcher()
    config = ResolverConfig.from_dict(
        {"document_timeout": 5.0, "max_ttl": 600, "unknown": True},
        content_fetcher=fetcher,
    )
    assert config.document_timeout == 5.0
    assert config.max_ttl == 600
    assert config.content_fetcher is fetcher
    assert config.to_dict() == {
        "document_timeout": 5.0,
        "content_timeout": 30.0,
        "max_ttl": 600,
        "cache_max_entries": 10_000,
        "cache_sweep_interval": None,
    }


@pytest.mark.trio
async def test_new_resolver(publisher):
    await publisher.publish("homepage", "/content/XYZ")
    resolver = didlink.new_resolver(
        publisher.fetcher, {publisher.method: publisher.documents}
    )
    assert resolver.config.methods == [publisher.method]
    assert await resolver.resolve_target(publisher.name("homepage")) == "/content/XYZ"

    with pytest.raises(MethodNotSupported):
        await resolver.resolve("did:web:example.com#homepage")
