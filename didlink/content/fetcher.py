import logging

from didlink.abc import (
    IContentFetcher,
)
from didlink.cid import (
    ContentIdentifier,
    derive_identifier,
)

from .block_store import BlockStore, MemoryBlockStore
from .errors import BlockNotFoundError, BlockTooLargeError, InvalidBlockError

logger = logging.getLogger(__name__)

# DIDLink files are small JSON records; anything larger is not one of ours.
MAX_BLOCK_SIZE = 64 * 1024


class BlockStoreContentFetcher(IContentFetcher):
    """
    Content fetcher over a local ``BlockStore``.

    Every block is checked against the identifier it was requested by, using
    the same derivation publishers use, so a store cannot hand back content
    for a different identifier.
    """

    def __init__(
        self,
        block_store: BlockStore | None = None,
        max_block_size: int = MAX_BLOCK_SIZE,
    ) -> None:
        self.block_store = block_store or MemoryBlockStore()
        self.max_block_size = max_block_size
        self.fetch_count = 0

    async def add(self, data: bytes) -> ContentIdentifier:
        """
        Store ``data`` under its derived identifier.

        Raises:
            BlockTooLargeError: If the block exceeds ``max_block_size``

        """
        if len(data) > self.max_block_size:
            raise BlockTooLargeError(
                f"Block size {len(data)} exceeds maximum {self.max_block_size}"
            )
        cid = derive_identifier(data)
        await self.block_store.put_block(cid.multihash, data)
        logger.debug("Added block %s", cid)
        return cid

    async def fetch_by_identifier(self, uri: str) -> bytes:
        """
        Raises:
            EncodingError: If ``uri`` does not name a CID
            BlockNotFoundError: If the store has no such block
            InvalidBlockError: If the stored block does not match ``uri``

        """
        self.fetch_count += 1
        cid = ContentIdentifier.from_string(uri)
        data = await self.block_store.get_block(cid.multihash)
        if data is None:
            raise BlockNotFoundError(f"Block {cid} not found")
        if derive_identifier(data).digest != cid.digest:
            raise InvalidBlockError(f"Block content does not match {cid}")
        return data
