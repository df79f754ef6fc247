# didlink/config.py
from dataclasses import dataclass, field
import time
from typing import Any

from didlink.abc import (
    IContentFetcher,
    IDocumentResolver,
)
from didlink.custom_types import (
    TClock,
)

_SCALAR_OPTIONS = (
    "document_timeout",
    "content_timeout",
    "max_ttl",
    "cache_max_entries",
    "cache_sweep_interval",
)


@dataclass
class ResolverConfig:
    """
    Trust and resource configuration for a ``DIDLinkResolver``.

    ``document_resolvers`` is the registry of trusted DID methods: a name
    whose method has no entry here is refused before any network call.
    """

    document_resolvers: dict[str, IDocumentResolver] = field(default_factory=dict)
    content_fetcher: IContentFetcher | None = None

    # Timeouts for the two collaborator calls (seconds, None = unbounded)
    document_timeout: float | None = 30.0
    content_timeout: float | None = 30.0

    # Optional upper bound on a service entry's ttl (seconds, None = no clamp)
    max_ttl: int | None = None

    # Cache sizing and background sweeping
    cache_max_entries: int | None = 10_000
    cache_sweep_interval: float | None = None

    clock: TClock = field(default=time.time, repr=False)

    def register_method(self, method: str, resolver: IDocumentResolver) -> None:
        """Trust ``method`` and resolve its documents with ``resolver``."""
        if not method or method != method.lower() or ":" in method:
            raise ValueError(f"Invalid DID method name: {method!r}")
        self.document_resolvers[method] = resolver

    def unregister_method(self, method: str) -> None:
        self.document_resolvers.pop(method, None)

    def resolver_for(self, method: str) -> IDocumentResolver | None:
        return self.document_resolvers.get(method)

    @property
    def methods(self) -> list[str]:
        return sorted(self.document_resolvers)

    def validate(self) -> None:
        """
        Check option ranges.

        :raises ValueError: if a timeout, ttl or cache option is out of range
            or no content fetcher is configured
        """
        if self.content_fetcher is None:
            raise ValueError("A content fetcher is required")
        for name in ("document_timeout", "content_timeout", "cache_sweep_interval"):
            value = getattr(self, name)
            if value is not None and value <= 0:
                raise ValueError(f"{name} must be positive, got {value!r}")
        if self.max_ttl is not None and self.max_ttl < 0:
            raise ValueError(f"max_ttl must be non-negative, got {self.max_ttl!r}")
        if self.cache_max_entries is not None and self.cache_max_entries <= 0:
            raise ValueError(
                f"cache_max_entries must be positive, got {self.cache_max_entries!r}"
            )

    @classmethod
    def from_dict(
        cls, config: dict[str, Any], **collaborators: Any
    ) -> "ResolverConfig":
        """
        Create a ResolverConfig from a dictionary of scalar options.

        Collaborators (``document_resolvers``, ``content_fetcher``, ``clock``)
        are not serializable and are passed as keyword arguments.
        """
        options = {k: v for k, v in config.items() if k in _SCALAR_OPTIONS}
        return cls(**options, **collaborators)

    def to_dict(self) -> dict[str, Any]:
        """Convert the scalar options to a dictionary."""
        return {name: getattr(self, name) for name in _SCALAR_OPTIONS}
