"""
Block storage interface for content fetchers.
"""

from abc import ABC, abstractmethod


class BlockStore(ABC):
    """
    Abstract interface for storing and retrieving blocks.

    Blocks are keyed by the multihash of their content identifier, so CIDv0
    and CIDv1 forms of one identifier address the same block.
    """

    @abstractmethod
    async def get_block(self, cid: bytes) -> bytes | None:
        """
        Get a block by its CID.

        Args:
            cid: The CID of the block to retrieve

        Returns:
            The block data if found, None otherwise

        """
        pass

    @abstractmethod
    async def put_block(self, cid: bytes, data: bytes) -> None:
        """
        Store a block.

        Args:
            cid: The CID of the block
            data: The block data

        """
        pass

    @abstractmethod
    async def has_block(self, cid: bytes) -> bool:
        pass

    @abstractmethod
    async def delete_block(self, cid: bytes) -> None:
        pass


class MemoryBlockStore(BlockStore):
    """In-memory block store implementation."""

    def __init__(self) -> None:
        self._blocks: dict[bytes, bytes] = {}

    async def get_block(self, cid: bytes) -> bytes | None:
        return self._blocks.get(cid)

    async def put_block(self, cid: bytes, data: bytes) -> None:
        self._blocks[cid] = data

    async def has_block(self, cid: bytes) -> bool:
        return cid in self._blocks

    async def delete_block(self, cid: bytes) -> None:
        if cid in self._blocks:
            del self._blocks[cid]

    def size(self) -> int:
        """Get the number of blocks in the store."""
        return len(self._blocks)
