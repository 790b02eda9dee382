"""In-memory single-slot response cache, used by default and in tests."""

import threading
from datetime import timedelta
from typing import Optional

from pollen_feed.app_types import CachedResponse
from pollen_feed.cache_store.base import DEFAULT_MAX_AGE, CacheStore, Clock, is_fresh, utcnow

from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/in_memory_cache_store")


class InMemoryCacheStore(CacheStore):
    """Thread-safe, one-entry store with an injectable clock."""

    def __init__(self, max_age: timedelta = DEFAULT_MAX_AGE, clock: Clock = utcnow) -> None:
        """Initialize an empty slot with a freshness window and clock."""
        logger.debug("Initializing InMemoryCacheStore")
        self.max_age = max_age
        self.clock = clock
        self._entry: Optional[CachedResponse] = None
        self._lock = threading.Lock()

    def read(self) -> Optional[CachedResponse]:
        with self._lock:
            return self._entry

    def write(self, entry: CachedResponse) -> None:
        with self._lock:
            self._entry = entry
        logger.debug("Cached response", extra={"fetched_at": entry.fetched_at.isoformat()})

    def is_fresh(self, entry: Optional[CachedResponse]) -> bool:
        return is_fresh(entry, self.now(), self.max_age)

    def now(self):
        return self.clock()

    def clear(self) -> None:
        """Clear the slot."""
        with self._lock:
            self._entry = None
