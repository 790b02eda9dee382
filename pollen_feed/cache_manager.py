"""Cache manager choosing the response cache backend at startup."""
from datetime import timedelta

try:
    import redis  # type: ignore
except ImportError:  # pragma: no cover - optional dependency
    redis = None

from pollen_feed.cache_store import CacheStore, InMemoryCacheStore, RedisCacheStore
from pollen_feed.cache_store.base import Clock, utcnow
from pollen_feed.config import settings
from utils.logging_utils import get_tagged_logger, mask_url

logger = get_tagged_logger(__name__, tag="cache_manager")


def _max_age() -> timedelta:
    return timedelta(milliseconds=settings.cache_max_age_ms)


def _init_store() -> CacheStore:
    """Initialize the backing cache store based on configuration."""
    redis_url = settings.cache_redis_url
    logger.debug(f"Initializing cache store: redis_url='{mask_url(redis_url) if redis_url else 'None'}', "
                 f"redis package present: {'yes' if redis else 'no'}")
    if redis_url and redis:
        try:
            client = redis.Redis.from_url(redis_url)
            client.ping()
            logger.info("Using RedisCacheStore", extra={"redis_url": mask_url(redis_url)})
            return RedisCacheStore(client, max_age=_max_age(), prefix=settings.cache_key_prefix)
        except Exception as exc:  # pragma: no cover - depends on a live server
            logger.warning("Falling back to InMemoryCacheStore (Redis unavailable)", extra={"error": str(exc)})
    return InMemoryCacheStore(max_age=_max_age())


_store: CacheStore = _init_store()


def get_store() -> CacheStore:
    """Return the process-wide cache store."""
    return _store


def use_in_memory_store_for_tests(max_age: timedelta | None = None, clock: Clock = utcnow) -> CacheStore:
    """Swap in a fresh in-memory store so tests start from an empty cache."""
    global _store
    _store = InMemoryCacheStore(max_age=max_age or _max_age(), clock=clock)
    return _store


def clear_cache() -> None:
    """Drop the cached response (dev/testing)."""
    _store.clear()
