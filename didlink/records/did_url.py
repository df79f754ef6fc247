from dataclasses import (
    dataclass,
)
import re

from didlink.exceptions import (
    InvalidName,
)

# did:<method>:<method-specific-id>#<fragment>, per DID Core section 3.1
DID_URL_PATTERN = re.compile(
    r"^did:(?P<method>[a-z0-9]+):(?P<subject>(?:[A-Za-z0-9._-]|%[0-9A-Fa-f]{2}|:)*"
    r"(?:[A-Za-z0-9._-]|%[0-9A-Fa-f]{2}))#(?P<fragment>[^#\s]+)$"
)


@dataclass(frozen=True)
class DIDURL:
    method: str
    subject: str
    fragment: str

    @property
    def did(self) -> str:
        return f"did:{self.method}:{self.subject}"

    def __str__(self) -> str:
        return f"{self.did}#{self.fragment}"

    @classmethod
    def parse(cls, name: str) -> "DIDURL":
        """
        Split ``name`` into method, subject and fragment.

        Raises:
            InvalidName: If ``name`` is not an absolute DID URL with a fragment

        """
        if not isinstance(name, str):
            raise InvalidName(f"Name must be a string, got {type(name).__name__}")
        match = DID_URL_PATTERN.fullmatch(name)
        if match is None:
            raise InvalidName(f"Not a DID URL with a fragment: {name!r}", name=name)
        return cls(match["method"], match["subject"], match["fragment"])


def expand_reference(reference: str, did: str) -> str:
    """Expand a relative ``#fragment`` reference against ``did``."""
    if reference.startswith("#"):
        return did + reference
    return reference
