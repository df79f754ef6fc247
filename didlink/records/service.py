"""
Service entry selection over a naming-system (DID) document.

A DIDLink service entry looks like::

    {
        "id": "did:example:alice#homepage",
        "type": "DIDLink",
        "serviceEndpoint": "ipfs://bafkrei...",
        "ttl": 300,
        "verificationMethod": "did:example:alice#key-1",
        "proofValue": "z..."
    }

Only the first entry whose ``(id, type)`` matches is authoritative. Later
duplicates are never consulted, even when the first one is malformed.
"""

from collections.abc import (
    Mapping,
)
from dataclasses import (
    dataclass,
)
import logging
from typing import (
    Any,
)

from didlink.encoding import (
    multibase,
)
from didlink.encoding.multikey import (
    Multikey,
)
from didlink.exceptions import (
    EncodingError,
    InvalidServiceProof,
    MalformedService,
    NoMatchingService,
)
from didlink.records.did_url import (
    DIDURL,
    expand_reference,
)

logger = logging.getLogger(__name__)

SERVICE_TYPE = "DIDLink"

# Verification relationships that may embed verification methods by value.
VERIFICATION_RELATIONSHIPS = (
    "verificationMethod",
    "assertionMethod",
    "authentication",
    "capabilityInvocation",
    "capabilityDelegation",
)


@dataclass(frozen=True)
class ServiceEntry:
    id: str
    type: str
    service_endpoint: str
    ttl: int
    verification_method: str
    proof_value: bytes

    @property
    def signed_message(self) -> bytes:
        return self.id.encode("utf-8")

    @classmethod
    def from_dict(cls, entry: Mapping[str, Any], did: str) -> "ServiceEntry":
        """
        Build an entry from its document form, expanding relative references
        against ``did``.

        Raises:
            MalformedService: If a member is missing or has the wrong type

        """
        entry_id = expand_reference(entry["id"], did)

        def require_str(field: str) -> str:
            value = entry.get(field)
            if not isinstance(value, str) or not value:
                raise MalformedService(
                    f"Service {entry_id!r} has no valid {field!r}", name=entry_id
                )
            return value

        endpoint = require_str("serviceEndpoint")
        verification_method = expand_reference(require_str("verificationMethod"), did)
        proof_text = require_str("proofValue")

        ttl = entry.get("ttl")
        # bool is an int subclass; `true` is not a TTL
        if isinstance(ttl, bool) or not isinstance(ttl, int) or ttl < 0:
            raise MalformedService(
                f"Service {entry_id!r} ttl must be a non-negative integer, "
                f"got {ttl!r}",
                name=entry_id,
            )

        try:
            proof_value = multibase.decode(proof_text)
        except EncodingError as e:
            raise MalformedService(
                f"Service {entry_id!r} proofValue is not multibase: {e}", name=entry_id
            ) from e

        return cls(
            id=entry_id,
            type=entry["type"],
            service_endpoint=endpoint,
            ttl=ttl,
            verification_method=verification_method,
            proof_value=proof_value,
        )


def select_service(document: Mapping[str, Any], name: DIDURL) -> ServiceEntry:
    """
    Return the authoritative DIDLink service entry for ``name``.

    Raises:
        NoMatchingService: If no entry matches ``(name, "DIDLink")``
        MalformedService: If the first matching entry is malformed

    """
    did = document_id(document, name)
    wanted = str(name)
    services = document.get("service") or []
    if not isinstance(services, list):
        raise NoMatchingService("Document 'service' member is not a list", name=wanted)

    for entry in services:
        if not isinstance(entry, Mapping):
            continue
        entry_id = entry.get("id")
        if not isinstance(entry_id, str):
            continue
        if (
            expand_reference(entry_id, did) == wanted
            and entry.get("type") == SERVICE_TYPE
        ):
            logger.debug("Selected service entry %s", wanted)
            return ServiceEntry.from_dict(entry, did)

    raise NoMatchingService(f"No {SERVICE_TYPE} service for {wanted}", name=wanted)


def find_verification_key(
    document: Mapping[str, Any], reference: str, did: str
) -> Multikey:
    """
    Locate the key a service proof refers to.

    Only ``publicKeyMultibase`` verification methods are understood.

    Raises:
        InvalidServiceProof: If the method is absent or carries no usable key

    """
    for relationship in VERIFICATION_RELATIONSHIPS:
        methods = document.get(relationship) or []
        if not isinstance(methods, list):
            continue
        for method in methods:
            if not isinstance(method, Mapping):
                # references by id point back at verificationMethod
                continue
            method_id = method.get("id")
            if not isinstance(method_id, str):
                continue
            if expand_reference(method_id, did) != reference:
                continue
            key_text = method.get("publicKeyMultibase")
            if not isinstance(key_text, str):
                raise InvalidServiceProof(
                    f"Verification method {reference!r} has no publicKeyMultibase"
                )
            try:
                return Multikey.from_multibase(key_text)
            except EncodingError as e:
                raise InvalidServiceProof(
                    f"Verification method {reference!r} key is malformed: {e}"
                ) from e

    raise InvalidServiceProof(f"Verification method {reference!r} not found")


def document_id(document: Mapping[str, Any], name: DIDURL) -> str:
    doc_id = document.get("id")
    if isinstance(doc_id, str) and doc_id:
        return doc_id
    return name.did
