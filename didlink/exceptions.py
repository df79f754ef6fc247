from typing import (
    TYPE_CHECKING,
)

if TYPE_CHECKING:
    from didlink.resolver.state_machine import (
        ResolutionState,
    )


class BaseDIDLinkError(Exception):
    pass


class ParseError(BaseDIDLinkError):
    pass


class EncodingError(ParseError):
    """Raised on malformed multibase, multikey or varint input."""


class ResolutionError(BaseDIDLinkError):
    r"""
    Base class of every failure surfaced by ``DIDLinkResolver.resolve``.

    Each subclass names one failure mode, so a caller can tell a link that
    is "not available yet" apart from one that is "actively compromised or
    misconfigured"\:

    ---------
        >>> try:
        ...     link = await resolver.resolve("did:example:alice#home")
        ... except ResolutionError as e:
        ...     if e.retryable:
        ...         schedule_retry()
        ...     else:
        ...         report(e.state, e)

    """

    retryable = False

    def __init__(
        self,
        message: str,
        name: str | None = None,
        state: "ResolutionState | None" = None,
    ) -> None:
        super().__init__(message)
        self.name = name
        self.state = state


class InvalidName(ResolutionError):
    """The queried name is not a ``did:method:subject#fragment`` URL."""


class MethodNotSupported(ResolutionError):
    """No document resolver is registered for the name's DID method."""


class DocumentUnavailable(ResolutionError):
    retryable = True


class NoMatchingService(ResolutionError):
    pass


class MalformedService(NoMatchingService):
    """The authoritative service entry is missing or mistypes a field."""


class InvalidServiceProof(ResolutionError):
    pass


class ContentUnavailable(ResolutionError):
    retryable = True


class KeyMismatch(ResolutionError):
    pass


class UnauthenticatedFile(ResolutionError):
    pass
