"""
In-memory document resolver.

Useful for embedding systems that already hold the documents they trust,
and for tests.
"""

import copy
import logging

import trio

from didlink.abc import (
    IDocumentResolver,
)
from didlink.custom_types import (
    TDocument,
)

logger = logging.getLogger(__name__)


class DocumentNotFound(LookupError):
    pass


class StaticDocumentResolver(IDocumentResolver):
    """Serves documents from a ``(method, subject) -> document`` map."""

    def __init__(self, documents: dict[str, TDocument] | None = None) -> None:
        """
        :param documents: initial documents keyed by their DID
            (``did:<method>:<subject>``)
        """
        self._documents: dict[tuple[str, str], TDocument] = {}
        self.fetch_count = 0
        for did, document in (documents or {}).items():
            self.publish(did, document)

    def publish(self, did: str, document: TDocument) -> None:
        """Store or replace the document for ``did``."""
        scheme, method, subject = did.split(":", 2)
        if scheme != "did" or not method or not subject:
            raise ValueError(f"Not a DID: {did!r}")
        self._documents[(method, subject)] = copy.deepcopy(document)

    def remove(self, did: str) -> None:
        _, method, subject = did.split(":", 2)
        self._documents.pop((method, subject), None)

    async def fetch_document(self, method: str, subject: str) -> TDocument:
        self.fetch_count += 1
        # yield so concurrent resolutions interleave as they would over a network
        await trio.lowlevel.checkpoint()
        try:
            document = self._documents[(method, subject)]
        except KeyError as e:
            raise DocumentNotFound(f"No document for did:{method}:{subject}") from e
        logger.debug("Serving document for did:%s:%s", method, subject)
        return copy.deepcopy(document)
