import logging
import threading
import time

from didlink.custom_types import (
    TClock,
)
from didlink.records.resolved_link import (
    ResolvedLink,
)

logger = logging.getLogger(__name__)


class ResolvedLinkCache:
    """
    TTL cache of verified resolution results, keyed by queried name.

    An entry is served exactly while ``now < expires_at``. Entries are
    immutable and replaced wholesale, so each key only needs the
    read-check-expiry / write-replace discipline under one lock.
    """

    cache: dict[str, ResolvedLink]

    def __init__(
        self,
        max_entries: int | None = None,
        sweep_interval: float | None = None,
        clock: TClock = time.time,
    ) -> None:
        """
        :param max_entries: evict the soonest-expiring entry beyond this size
        :param sweep_interval: seconds between background sweeps of expired
            entries; ``None`` disables the sweeper thread
        :param clock: source of the current time in seconds
        """
        self.max_entries = max_entries
        self.sweep_interval = sweep_interval
        self.clock = clock
        self.lock = threading.Lock()
        self.cache = {}
        self._stop_event = threading.Event()
        self._thread: threading.Thread | None = None
        if sweep_interval is not None:
            self._thread = threading.Thread(
                target=self._background_cleanup, daemon=True
            )
            self._thread.start()

    def _background_cleanup(self) -> None:
        assert self.sweep_interval is not None
        while not self._stop_event.wait(self.sweep_interval):
            self.sweep()

    def sweep(self) -> int:
        """Removes expired entries from the cache and returns how many."""
        now = self.clock()
        with self.lock:
            keys_to_remove = [
                name for name, link in self.cache.items() if not link.is_valid(now)
            ]
            for name in keys_to_remove:
                del self.cache[name]
        if keys_to_remove:
            logger.debug("Swept %d expired links", len(keys_to_remove))
        return len(keys_to_remove)

    def stop(self) -> None:
        """Stops the background cleanup thread."""
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None

    def length(self) -> int:
        return len(self.cache)

    def get(self, name: str) -> ResolvedLink | None:
        now = self.clock()
        with self.lock:
            link = self.cache.get(name)
            if link is None:
                return None
            if not link.is_valid(now):
                del self.cache[name]
                return None
            return link

    def put(self, link: ResolvedLink) -> None:
        if not link.is_valid(self.clock()):
            # ttl 0 or a clock that moved past expiry during resolution
            return
        with self.lock:
            self.cache[link.name] = link
            if self.max_entries is not None and len(self.cache) > self.max_entries:
                # the link just stored is never the victim
                oldest = min(
                    (k for k in self.cache if k != link.name),
                    key=lambda k: self.cache[k].expires_at,
                )
                del self.cache[oldest]
                logger.debug(
                    "Evicted %s to stay within %d entries", oldest, self.max_entries
                )

    def invalidate(self, name: str) -> None:
        with self.lock:
            self.cache.pop(name, None)

    def clear(self) -> None:
        with self.lock:
            self.cache.clear()
