"""
Detached signature verification over multikey-encoded public keys.

Verification is fail-closed: an unknown scheme, a malformed key or a
malformed signature is reported exactly like a bad signature.
"""

import logging

from didlink.crypto.exceptions import (
    CryptographyError,
)
from didlink.crypto.serialization import (
    deserialize_public_key,
)
from didlink.encoding.multikey import (
    Multikey,
)
from didlink.exceptions import (
    EncodingError,
)

logger = logging.getLogger(__name__)


def verify(public_key: Multikey | bytes, message: bytes, signature: bytes) -> bool:
    """
    Verify ``signature`` over ``message`` under ``public_key``.

    Args:
        public_key: A decoded ``Multikey`` or its prefixed byte form
        message: The signed message
        signature: The detached signature bytes

    Returns:
        True only if the signature verifies under a supported scheme

    """
    try:
        key = deserialize_public_key(public_key)
    except (CryptographyError, EncodingError) as e:
        logger.debug("Cannot verify with unusable public key: %s", e)
        return False

    try:
        return bool(key.verify(message, signature))
    except Exception as e:
        logger.debug("Signature backend rejected input: %s", e)
        return False
