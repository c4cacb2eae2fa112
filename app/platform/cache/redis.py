import time
from typing import Dict, Optional, Protocol, Tuple

from redis import Redis

from app.platform.config import settings


class TTLCache(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str, ttl_seconds: int) -> None: ...


class RedisCache:
    """Key/value cache with per-key expiry, backed by Redis"""

    def __init__(self, client: Redis):
        self.client = client

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self.client.set(key, value, ex=ttl_seconds)


class InMemoryCache:
    """Process-local stand-in for Redis, used in tests and local runs"""

    def __init__(self):
        self.memory_store: Dict[str, Tuple[str, float]] = {}

    def get(self, key: str) -> Optional[str]:
        entry = self.memory_store.get(key)
        if entry is None:
            return None
        value, expiry = entry
        if time.time() > expiry:
            del self.memory_store[key]
            return None
        return value

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        self.memory_store[key] = (value, time.time() + ttl_seconds)


def create_cache() -> TTLCache:
    if settings.FORCE_IN_MEMORY_CACHE:
        return InMemoryCache()

    # Create a Redis client
    redis = Redis.from_url(
        settings.REDIS_URL,
        encoding="utf-8",
        decode_responses=True
    )
    return RedisCache(redis)
