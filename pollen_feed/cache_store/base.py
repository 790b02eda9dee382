"""Shared protocol and freshness rule for the single-slot response cache."""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Protocol

from pollen_feed.app_types import CachedResponse

Clock = Callable[[], datetime]

DEFAULT_MAX_AGE = timedelta(hours=1)


def utcnow() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(tz=timezone.utc)


def is_fresh(entry: Optional[CachedResponse], now: datetime, max_age: timedelta = DEFAULT_MAX_AGE) -> bool:
    """True iff the entry was fetched less than `max_age` before `now`."""
    if entry is None:
        return False
    return now - entry.fetched_at < max_age


class CacheStore(Protocol):
    """Protocol for cache backends holding the last fetched response."""
    clock: Clock
    max_age: timedelta

    def read(self) -> Optional[CachedResponse]:
        """Return the stored response, or None if nothing usable is stored."""

    def write(self, entry: CachedResponse) -> None:
        """Replace the stored response and its fetch timestamp together."""

    def is_fresh(self, entry: Optional[CachedResponse]) -> bool:
        """Apply the freshness rule using this store's clock and max age."""

    def now(self) -> datetime:
        """Current time according to this store's clock."""

    def clear(self) -> None:
        """Drop the stored response."""
