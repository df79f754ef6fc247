from didlink.resolver.cache import (
    ResolvedLinkCache,
)
from didlink.resolver.state_machine import (
    DIDLinkResolver,
    Resolution,
    ResolutionState,
)

__all__ = [
    "DIDLinkResolver",
    "Resolution",
    "ResolutionState",
    "ResolvedLinkCache",
]
