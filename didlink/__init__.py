"""DIDLink: verified resolution of DID URLs to content-addressed targets."""

from collections.abc import (
    Mapping,
)
from importlib.metadata import (
    PackageNotFoundError,
    version as __version,
)
import logging

from didlink.abc import (
    IContentFetcher,
    IDocumentResolver,
)
from didlink.cid import (
    ContentIdentifier,
    derive_identifier,
)
from didlink.config import (
    ResolverConfig,
)
from didlink.exceptions import (
    BaseDIDLinkError,
    ContentUnavailable,
    DocumentUnavailable,
    EncodingError,
    InvalidName,
    InvalidServiceProof,
    KeyMismatch,
    MalformedService,
    MethodNotSupported,
    NoMatchingService,
    ResolutionError,
    UnauthenticatedFile,
)
from didlink.records import (
    DIDLinkFile,
    ResolvedLink,
    create_didlink_file,
)
from didlink.resolver import (
    DIDLinkResolver,
    ResolutionState,
)
from didlink.utils.logging import (
    setup_logging,
)

# Initialize logging configuration
setup_logging()

logger = logging.getLogger(__name__)

try:
    __version__ = __version("didlink")
except PackageNotFoundError:
    __version__ = "0.0.0"


def new_resolver(
    content_fetcher: IContentFetcher,
    document_resolvers: Mapping[str, IDocumentResolver] | None = None,
    config: ResolverConfig | None = None,
) -> DIDLinkResolver:
    """
    Create a resolver trusting exactly the methods in ``document_resolvers``.

    :param content_fetcher: collaborator used to fetch DIDLink files
    :param document_resolvers: DID method name -> document resolver
    :param config: optional base configuration; its collaborators are
        replaced by the ones passed here
    :return: a ready ``DIDLinkResolver``
    """
    config = config or ResolverConfig()
    config.content_fetcher = content_fetcher
    for method, resolver in (document_resolvers or {}).items():
        config.register_method(method, resolver)
    logger.debug("Creating resolver for methods %s", config.methods)
    return DIDLinkResolver(config)


__all__ = [
    "BaseDIDLinkError",
    "ContentIdentifier",
    "ContentUnavailable",
    "DIDLinkFile",
    "DIDLinkResolver",
    "DocumentUnavailable",
    "EncodingError",
    "IContentFetcher",
    "IDocumentResolver",
    "InvalidName",
    "InvalidServiceProof",
    "KeyMismatch",
    "MalformedService",
    "MethodNotSupported",
    "NoMatchingService",
    "ResolutionError",
    "ResolutionState",
    "ResolvedLink",
    "ResolverConfig",
    "UnauthenticatedFile",
    "create_didlink_file",
    "derive_identifier",
    "new_resolver",
]
