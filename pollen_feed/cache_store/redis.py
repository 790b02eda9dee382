"""Redis-backed response cache using two scoped keys (payload and fetch time)."""

import json
from datetime import datetime, timedelta, timezone
from typing import Optional

from pollen_feed.app_types import CachedResponse
from pollen_feed.cache_store.base import DEFAULT_MAX_AGE, CacheStore, Clock, is_fresh, utcnow
from pollen_feed.domain import CategorySeries
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="cache_store/redis_cache_store")


class RedisCacheStore(CacheStore):
    """Single-slot cache stored as `<prefix>lastResponse` + `<prefix>lastFetch` (epoch millis)."""

    def __init__(
        self,
        client,
        max_age: timedelta = DEFAULT_MAX_AGE,
        prefix: str = "pollen_feed:",
        clock: Clock = utcnow,
    ) -> None:
        """Initialize with a Redis client, freshness window, key prefix and clock."""
        logger.debug("Initializing RedisCacheStore")
        self.client = client
        self.max_age = max_age
        self.prefix = prefix
        self.clock = clock

    @property
    def response_key(self) -> str:
        return f"{self.prefix}lastResponse"

    @property
    def fetched_key(self) -> str:
        return f"{self.prefix}lastFetch"

    @staticmethod
    def _to_millis(value: datetime) -> int:
        return int(value.timestamp() * 1000)

    @staticmethod
    def _from_millis(value) -> datetime:
        return datetime.fromtimestamp(int(value) / 1000, tz=timezone.utc)

    @staticmethod
    def _dump_payload(entry: CachedResponse) -> bytes:
        """Serialize moments/categories (absent categories as null) to JSON bytes."""
        key = entry.request_key
        data = {
            "moments": entry.moments,
            "categories": [c.to_api() if c is not None else None for c in entry.categories],
            "request_key": [key[0], key[1], list(key[2])] if key else None,
        }
        return json.dumps(data).encode("utf-8")

    @staticmethod
    def _load_payload(raw: bytes | str, fetched_at: datetime) -> CachedResponse:
        """Deserialize JSON bytes into a CachedResponse."""
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        data = json.loads(raw)
        key = data.get("request_key")
        return CachedResponse(
            fetched_at=fetched_at,
            moments=list(data.get("moments") or []),
            categories=[
                CategorySeries.from_api(c) if c is not None else None
                for c in (data.get("categories") or [])
            ],
            request_key=(key[0], key[1], tuple(key[2])) if key else None,
        )

    def read(self) -> Optional[CachedResponse]:
        """Return the cached response, or None if missing or unreadable."""
        try:
            raw, fetched_raw = self.client.mget([self.response_key, self.fetched_key])
        except Exception as exc:
            logger.error("Failed to read cached response from Redis: %s", exc)
            return None
        if not raw or not fetched_raw:
            return None
        try:
            return self._load_payload(raw, self._from_millis(fetched_raw))
        except (ValueError, KeyError, TypeError, IndexError) as exc:
            logger.warning("Discarding unreadable cached response: %s", exc)
            return None

    def write(self, entry: CachedResponse) -> None:
        """Write payload and timestamp in one MSET so readers never see a mix."""
        payload = self._dump_payload(entry)
        try:
            self.client.mset({
                self.response_key: payload,
                self.fetched_key: self._to_millis(entry.fetched_at),
            })
        except Exception as exc:
            # The fetched data is still returned to the caller; only caching is lost.
            logger.error("Failed to write cached response to Redis: %s", exc)

    def is_fresh(self, entry: Optional[CachedResponse]) -> bool:
        return is_fresh(entry, self.now(), self.max_age)

    def now(self) -> datetime:
        return self.clock()

    def clear(self) -> None:
        """Delete both cache keys."""
        try:
            self.client.delete(self.response_key, self.fetched_key)
        except Exception as exc:
            logger.error("Failed to clear cached response from Redis: %s", exc)
