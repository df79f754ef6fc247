"""
Content-addressed block access used to fetch DIDLink files.
"""

from .block_store import BlockStore, MemoryBlockStore
from .errors import (
    BlockNotFoundError,
    BlockTooLargeError,
    ContentStoreError,
    InvalidBlockError,
)
from .fetcher import BlockStoreContentFetcher

__all__ = [
    "BlockStore",
    "BlockStoreContentFetcher",
    "MemoryBlockStore",
    "BlockNotFoundError",
    "BlockTooLargeError",
    "ContentStoreError",
    "InvalidBlockError",
]
