"""
Content store errors.
"""


class ContentStoreError(Exception):
    """Base exception for content store errors."""

    pass


class InvalidBlockError(ContentStoreError):
    """Raised when a block does not hash to the identifier it was stored under."""

    pass


class BlockNotFoundError(ContentStoreError):
    """Raised when a requested block is not found."""

    pass


class BlockTooLargeError(ContentStoreError):
    """Raised when a block exceeds the maximum size."""

    pass
