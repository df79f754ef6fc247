"""
The DIDLink resolution state machine.

A resolution walks a fixed, linear sequence of states. Each state either
advances or fails with its own ``ResolutionError`` subclass; nothing is
retried internally and nothing short of a fully verified ``ResolvedLink`` is
ever cached::

    DOCUMENT_FETCH -> SERVICE_SELECT -> PROOF_VERIFY -> FILE_FETCH
        -> KEY_CONSISTENCY -> FILE_PROOF_VERIFY -> EMIT

Only DOCUMENT_FETCH and FILE_FETCH suspend. Concurrent calls for the same
name share one in-flight resolution.
"""

from collections.abc import (
    Awaitable,
    Callable,
    Mapping,
)
from dataclasses import (
    dataclass,
)
from enum import (
    Enum,
    unique,
)
import logging
import math

import trio

from didlink.cid import (
    ContentIdentifier,
)
from didlink.config import (
    ResolverConfig,
)
from didlink.crypto.verifier import (
    verify,
)
from didlink.custom_types import (
    TDocument,
)
from didlink.encoding.multikey import (
    Multikey,
)
from didlink.exceptions import (
    ContentUnavailable,
    DocumentUnavailable,
    EncodingError,
    InvalidServiceProof,
    KeyMismatch,
    MalformedService,
    MethodNotSupported,
    ResolutionError,
    UnauthenticatedFile,
)
from didlink.records.did_url import (
    DIDURL,
)
from didlink.records.didlink_file import (
    DIDLinkFile,
    InvalidDIDLinkFile,
)
from didlink.records.resolved_link import (
    ResolvedLink,
)
from didlink.records.service import (
    ServiceEntry,
    document_id,
    find_verification_key,
    select_service,
)
from didlink.resolver.cache import (
    ResolvedLinkCache,
)

logger = logging.getLogger(__name__)


@unique
class ResolutionState(Enum):
    DOCUMENT_FETCH = 1
    SERVICE_SELECT = 2
    PROOF_VERIFY = 3
    FILE_FETCH = 4
    KEY_CONSISTENCY = 5
    FILE_PROOF_VERIFY = 6
    EMIT = 7


@dataclass
class Resolution:
    """Working state of one resolution attempt, discarded unless it emits."""

    name: DIDURL
    document: TDocument | None = None
    service: ServiceEntry | None = None
    proof_key: Multikey | None = None
    file_bytes: bytes | None = None
    link_file: DIDLinkFile | None = None
    link: ResolvedLink | None = None


class _InFlight:
    def __init__(self) -> None:
        self.done = trio.Event()
        self.result: ResolvedLink | None = None
        self.error: ResolutionError | None = None


StepFn = Callable[[Resolution], Awaitable[None]]


class DIDLinkResolver:
    """
    Resolves ``did:method:subject#fragment`` names to verified targets.

    Usage::

        config = ResolverConfig(content_fetcher=fetcher)
        config.register_method("web", web_resolver)
        resolver = DIDLinkResolver(config)
        link = await resolver.resolve("did:web:example.com#homepage")
    """

    def __init__(
        self, config: ResolverConfig, cache: ResolvedLinkCache | None = None
    ) -> None:
        config.validate()
        self.config = config
        self.cache = cache or ResolvedLinkCache(
            max_entries=config.cache_max_entries,
            sweep_interval=config.cache_sweep_interval,
            clock=config.clock,
        )
        self._in_flight: dict[str, _InFlight] = {}
        self._steps: tuple[tuple[ResolutionState, StepFn], ...] = (
            (ResolutionState.DOCUMENT_FETCH, self._fetch_document),
            (ResolutionState.SERVICE_SELECT, self._select_service),
            (ResolutionState.PROOF_VERIFY, self._verify_service_proof),
            (ResolutionState.FILE_FETCH, self._fetch_file),
            (ResolutionState.KEY_CONSISTENCY, self._check_key_consistency),
            (ResolutionState.FILE_PROOF_VERIFY, self._verify_file_proof),
            (ResolutionState.EMIT, self._emit),
        )

    async def resolve(self, name: str) -> ResolvedLink:
        """
        Resolve ``name`` to a verified ``ResolvedLink``.

        Raises:
            ResolutionError: One subclass per failure mode; see
                ``didlink.exceptions``

        """
        while True:
            cached = self.cache.get(name)
            if cached is not None:
                logger.debug("Cache hit for %s", name)
                return cached

            flight = self._in_flight.get(name)
            if flight is None:
                break
            await flight.done.wait()
            if flight.error is not None:
                raise flight.error
            if flight.result is not None:
                return flight.result
            # the leading call was cancelled; start over

        flight = _InFlight()
        self._in_flight[name] = flight
        try:
            link = await self._run(name)
            self.cache.put(link)
            flight.result = link
            return link
        except ResolutionError as e:
            flight.error = e
            raise
        finally:
            del self._in_flight[name]
            flight.done.set()

    async def resolve_target(self, name: str) -> str:
        link = await self.resolve(name)
        return link.target

    def invalidate(self, name: str) -> None:
        self.cache.invalidate(name)

    def close(self) -> None:
        self.cache.stop()

    async def _run(self, name: str) -> ResolvedLink:
        did_url = DIDURL.parse(name)
        if self.config.resolver_for(did_url.method) is None:
            raise MethodNotSupported(
                f"DID method {did_url.method!r} is not enabled", name=name
            )

        resolution = Resolution(did_url)
        for state, step in self._steps:
            logger.debug("%s: %s", name, state.name)
            try:
                await step(resolution)
            except ResolutionError as e:
                e.name = name
                e.state = state
                logger.info(
                    "Resolution of %s failed in %s: %s: %s",
                    name,
                    state.name,
                    type(e).__name__,
                    e,
                )
                raise

        assert resolution.link is not None
        logger.debug("Resolved %s -> %s", name, resolution.link.target)
        return resolution.link

    async def _fetch_document(self, resolution: Resolution) -> None:
        name = resolution.name
        resolver = self.config.resolver_for(name.method)
        assert resolver is not None
        try:
            with trio.fail_after(_deadline(self.config.document_timeout)):
                document = await resolver.fetch_document(name.method, name.subject)
        except trio.TooSlowError as e:
            raise DocumentUnavailable(
                f"Timed out fetching document for {name.did}"
            ) from e
        except Exception as e:
            raise DocumentUnavailable(
                f"Document for {name.did} unavailable: {e}"
            ) from e

        if not isinstance(document, Mapping):
            raise DocumentUnavailable(f"Document for {name.did} is not a JSON object")
        resolution.document = document

    async def _select_service(self, resolution: Resolution) -> None:
        assert resolution.document is not None
        service = select_service(resolution.document, resolution.name)
        try:
            ContentIdentifier.from_string(service.service_endpoint)
        except EncodingError as e:
            raise MalformedService(
                f"serviceEndpoint of {service.id} is not a content identifier: {e}"
            ) from e
        resolution.service = service

    async def _verify_service_proof(self, resolution: Resolution) -> None:
        assert resolution.document is not None and resolution.service is not None
        service = resolution.service
        key = find_verification_key(
            resolution.document,
            service.verification_method,
            document_id(resolution.document, resolution.name),
        )
        if not verify(key, service.signed_message, service.proof_value):
            raise InvalidServiceProof(
                f"proofValue of {service.id} does not verify under "
                f"{service.verification_method}"
            )
        resolution.proof_key = key

    async def _fetch_file(self, resolution: Resolution) -> None:
        assert resolution.service is not None
        endpoint = resolution.service.service_endpoint
        fetcher = self.config.content_fetcher
        assert fetcher is not None
        try:
            with trio.fail_after(_deadline(self.config.content_timeout)):
                data = await fetcher.fetch_by_identifier(endpoint)
        except trio.TooSlowError as e:
            raise ContentUnavailable(f"Timed out fetching {endpoint}") from e
        except Exception as e:
            raise ContentUnavailable(f"Content {endpoint} unavailable: {e}") from e

        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise ContentUnavailable(f"Fetcher returned no bytes for {endpoint}")
        resolution.file_bytes = bytes(data)

    async def _check_key_consistency(self, resolution: Resolution) -> None:
        assert resolution.file_bytes is not None and resolution.proof_key is not None
        try:
            link_file = DIDLinkFile.from_bytes(resolution.file_bytes)
        except InvalidDIDLinkFile as e:
            raise UnauthenticatedFile(
                f"Fetched content is not a DIDLink file: {e}"
            ) from e

        if bytes(link_file.public_key) != bytes(resolution.proof_key):
            raise KeyMismatch(
                f"DIDLink file key {link_file.public_key!r} differs from service "
                f"proof key {resolution.proof_key!r}"
            )
        resolution.link_file = link_file

    async def _verify_file_proof(self, resolution: Resolution) -> None:
        assert resolution.link_file is not None
        if not resolution.link_file.is_authentic():
            raise UnauthenticatedFile("DIDLink file signature does not verify")

    async def _emit(self, resolution: Resolution) -> None:
        assert resolution.service is not None
        assert resolution.link_file is not None and resolution.proof_key is not None
        ttl = resolution.service.ttl
        if self.config.max_ttl is not None:
            ttl = min(ttl, self.config.max_ttl)
        verified_at = self.config.clock()
        resolution.link = ResolvedLink(
            name=str(resolution.name),
            target=resolution.link_file.target,
            resolved_key=resolution.proof_key,
            verified_at=verified_at,
            expires_at=verified_at + ttl,
            ttl=ttl,
            service_endpoint=resolution.service.service_endpoint,
        )


def _deadline(timeout: float | None) -> float:
    return math.inf if timeout is None else timeout
