"""Document resolvers for naming-system (DID) methods."""

from didlink.documents.static import (
    DocumentNotFound,
    StaticDocumentResolver,
)

__all__ = [
    "DocumentNotFound",
    "StaticDocumentResolver",
]
