from dataclasses import (
    dataclass,
)

from didlink.encoding.multikey import (
    Multikey,
)


@dataclass(frozen=True)
class ResolvedLink:
    """
    A fully verified resolution result, and the unit of caching.

    Only the resolver builds these, after both the service proof and the
    file signature have verified under ``resolved_key``.
    """

    name: str
    target: str
    resolved_key: Multikey
    verified_at: float
    expires_at: float
    ttl: int
    service_endpoint: str

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at
