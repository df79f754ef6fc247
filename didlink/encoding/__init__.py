"""Self-describing encodings used by DID documents and DIDLink files."""

from didlink.encoding import multibase
from didlink.encoding.multikey import (
    Multicodec,
    Multikey,
)

__all__ = [
    "multibase",
    "Multicodec",
    "Multikey",
]
