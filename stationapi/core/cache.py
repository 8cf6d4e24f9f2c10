"""
Cache protocol and factory for the company lookup cache.

Repositories receive the cache as a constructor argument, so tests can
substitute an aiocache SimpleMemoryCache or the NullCache below. The API
wires in the single process-wide instance returned by get_cache().
"""

import threading
from typing import Any, Protocol
from urllib.parse import urlparse

from aiocache import Cache
from aiocache.serializers import PickleSerializer

from stationapi.core.config import require_config, settings


class CacheProtocol(Protocol):
    """
    Subset of the aiocache BaseCache interface used by repositories.

    Entries expire after their TTL; there is no invalidation path.
    """

    async def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401
        """Return the value stored at key, or default when missing or expired."""
        ...

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:  # noqa: ANN401
        """Store value at key, expiring after ttl seconds."""
        ...


class NullCache:
    """Cache that never stores anything; every get is a miss."""

    async def get(self, key: str, default: Any = None) -> Any:  # noqa: ANN401
        return default

    async def set(self, key: str, value: Any, ttl: int | None = None) -> bool:  # noqa: ANN401
        return True


def build_cache_key(provider: str, method: str, entity_id: int) -> str:
    """
    Build a namespaced cache key.

    Examples:
        >>> build_cache_key("company_repository", "find_by_id", 1)
        'company_repository:find_by_id:1'
    """
    return f"{provider}:{method}:{entity_id}"


def build_cache() -> CacheProtocol:
    """
    Create the cache configured by CACHE_BACKEND.

    Returns:
        An in-process SimpleMemoryCache, or a RedisCache when CACHE_BACKEND=redis

    Raises:
        ValueError: If CACHE_BACKEND=redis and REDIS_URL is not set
    """
    if settings.CACHE_BACKEND == "redis":
        require_config("REDIS_URL")
        parsed = urlparse(settings.REDIS_URL)
        return Cache(  # type: ignore[no-any-return]
            Cache.REDIS,
            endpoint=parsed.hostname or "localhost",
            port=parsed.port or 6379,
            serializer=PickleSerializer(),
            namespace="stationapi",
        )
    return Cache(Cache.MEMORY, namespace="stationapi")  # type: ignore[no-any-return]


# Shared across requests; created on first use (fork-safety)
_cache: CacheProtocol | None = None
_cache_lock = threading.Lock()


def get_cache() -> CacheProtocol:
    """Get or create the process-wide cache (lazy initialization)."""
    global _cache  # noqa: PLW0603
    if _cache is None:
        with _cache_lock:
            if _cache is None:  # Double-checked locking
                _cache = build_cache()
    return _cache


async def close_cache() -> None:
    """Close the process-wide cache, if one was created."""
    global _cache  # noqa: PLW0603
    if _cache is not None and hasattr(_cache, "close"):
        await _cache.close()
    _cache = None
