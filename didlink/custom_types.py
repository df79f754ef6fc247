from collections.abc import (
    Callable,
    Mapping,
)
from typing import (
    Any,
)

TDocument = Mapping[str, Any]
TClock = Callable[[], float]
