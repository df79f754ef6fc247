from abc import (
    ABC,
    abstractmethod,
)

from didlink.custom_types import (
    TDocument,
)

# -------------------------- document resolver interface.py --------------------------


class IDocumentResolver(ABC):
    """
    Retrieves naming-system documents for one DID method.

    Implementations are registered per method in ``ResolverConfig``; the
    resolution state machine never needs to know which methods exist.
    """

    @abstractmethod
    async def fetch_document(self, method: str, subject: str) -> TDocument:
        """
        Fetch the document for ``did:<method>:<subject>``.

        :param method: DID method name, e.g. ``web``
        :param subject: method-specific identifier
        :return: the document as a JSON-like mapping
        :raise Exception: any failure; the resolver reports it as
            ``DocumentUnavailable``
        """


# -------------------------- content fetcher interface.py --------------------------


class IContentFetcher(ABC):
    """Retrieves bytes for a content identifier URI."""

    @abstractmethod
    async def fetch_by_identifier(self, uri: str) -> bytes:
        """
        :param uri: content identifier URI taken from a service endpoint
        :return: the content bytes
        :raise Exception: any failure; the resolver reports it as
            ``ContentUnavailable``
        """
