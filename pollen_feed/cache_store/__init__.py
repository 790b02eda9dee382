"""Response cache backends."""

from .base import CacheStore, is_fresh, utcnow
from .memory import InMemoryCacheStore
from .redis import RedisCacheStore

__all__ = [
    "CacheStore",
    "is_fresh",
    "utcnow",
    "InMemoryCacheStore",
    "RedisCacheStore",
]
