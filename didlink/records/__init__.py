from didlink.records.did_url import (
    DIDURL,
)
from didlink.records.didlink_file import (
    DIDLinkFile,
    InvalidDIDLinkFile,
    create_didlink_file,
)
from didlink.records.resolved_link import (
    ResolvedLink,
)
from didlink.records.service import (
    SERVICE_TYPE,
    ServiceEntry,
    find_verification_key,
    select_service,
)

__all__ = [
    "DIDURL",
    "DIDLinkFile",
    "InvalidDIDLinkFile",
    "ResolvedLink",
    "SERVICE_TYPE",
    "ServiceEntry",
    "create_didlink_file",
    "find_verification_key",
    "select_service",
]
