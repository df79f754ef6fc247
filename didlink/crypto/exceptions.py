from didlink.exceptions import (
    BaseDIDLinkError,
)


class CryptographyError(BaseDIDLinkError):
    pass


class MissingDeserializerError(CryptographyError):
    """
    Raise if no key implementation is registered for the multicodec of some
    public key.
    """
