"""Response cache port used by domain services.

Entries carry tags; writes invalidate a whole tag instead of scanning keys by
prefix. Repositories never see the cache.
"""

from __future__ import annotations

import logging
import pickle
import threading
import time
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Protocol, Set

import redis
from redis.exceptions import RedisError

from admin_core.errors import BackendError

logger = logging.getLogger(__name__)

_MISSING = object()


class CachePort(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...

    def set(self, key: str, value: Any, ttl: Optional[int] = None, tags: Iterable[str] = ()) -> None: ...

    def invalidate_tag(self, tag: str) -> int: ...

    def clear(self) -> None: ...


@dataclass
class _Entry:
    value: Any
    expires_at: float
    tags: frozenset


class InMemoryTagCache:
    """Thread-safe TTL cache with tag-based invalidation."""

    def __init__(self, default_ttl: int = 300, clock=time.monotonic):
        self._default_ttl = default_ttl
        self._clock = clock
        self._entries: Dict[str, _Entry] = {}
        self._tags: Dict[str, Set[str]] = {}
        self._lock = threading.Lock()

    def get(self, key: str, default: Any = None) -> Any:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return default
            if entry.expires_at <= self._clock():
                self._drop(key)
                return default
            return entry.value

    def set(self, key: str, value: Any, ttl: Optional[int] = None, tags: Iterable[str] = ()) -> None:
        ttl = self._default_ttl if ttl is None else ttl
        with self._lock:
            self._drop(key)
            entry = _Entry(value=value, expires_at=self._clock() + ttl, tags=frozenset(tags))
            self._entries[key] = entry
            for tag in entry.tags:
                self._tags.setdefault(tag, set()).add(key)

    def invalidate_tag(self, tag: str) -> int:
        with self._lock:
            keys = self._tags.pop(tag, set())
            for key in keys:
                self._drop(key)
            return len(keys)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._tags.clear()

    def _drop(self, key: str) -> None:
        entry = self._entries.pop(key, None)
        if entry is None:
            return
        for tag in entry.tags:
            keys = self._tags.get(tag)
            if keys is not None:
                keys.discard(key)
                if not keys:
                    del self._tags[tag]


class RedisTagCache:
    """Tag cache shared between processes through Redis.

    Each tag is a Redis set holding the keys stored under it. Values are
    pickled, so the server must only be reachable by this application. Read
    and write failures degrade to a cache miss; a failed invalidation raises,
    since it would leave stale entries behind.
    """

    def __init__(self, client: redis.Redis, default_ttl: int = 300, key_prefix: str = "admin_core:"):
        self.client = client
        self._default_ttl = default_ttl
        self.key_prefix = key_prefix

    @classmethod
    def from_url(cls, url: str, default_ttl: int = 300, key_prefix: str = "admin_core:") -> "RedisTagCache":
        client = redis.from_url(url, socket_connect_timeout=5, socket_timeout=5)
        return cls(client, default_ttl=default_ttl, key_prefix=key_prefix)

    def _key(self, key: str) -> str:
        return f"{self.key_prefix}entry:{key}"

    def _tag(self, tag: str) -> str:
        return f"{self.key_prefix}tag:{tag}"

    def get(self, key: str, default: Any = None) -> Any:
        try:
            raw = self.client.get(self._key(key))
        except RedisError as e:
            logger.warning(f"Redis GET failed for {key}: {e}")
            return default
        if raw is None:
            return default
        return pickle.loads(raw)

    def set(self, key: str, value: Any, ttl: Optional[int] = None, tags: Iterable[str] = ()) -> None:
        ttl = self._default_ttl if ttl is None else ttl
        try:
            with self.client.pipeline() as pipe:
                pipe.setex(self._key(key), ttl, pickle.dumps(value))
                for tag in tags:
                    pipe.sadd(self._tag(tag), key)
                pipe.execute()
        except RedisError as e:
            logger.warning(f"Redis SET failed for {key}: {e}")

    def invalidate_tag(self, tag: str) -> int:
        try:
            keys = [member.decode() if isinstance(member, bytes) else member
                    for member in self.client.smembers(self._tag(tag))]
            with self.client.pipeline() as pipe:
                for key in keys:
                    pipe.delete(self._key(key))
                pipe.delete(self._tag(tag))
                pipe.execute()
        except RedisError as e:
            raise BackendError(f"Failed to invalidate cache tag {tag}: {str(e)}") from e
        return len(keys)

    def clear(self) -> None:
        try:
            keys = list(self.client.scan_iter(match=f"{self.key_prefix}*"))
            if keys:
                self.client.delete(*keys)
        except RedisError as e:
            raise BackendError(f"Failed to clear cache: {str(e)}") from e


class NullCache:
    """Cache that stores nothing."""

    def get(self, key: str, default: Any = None) -> Any:
        return default

    def set(self, key: str, value: Any, ttl: Optional[int] = None, tags: Iterable[str] = ()) -> None:
        return None

    def invalidate_tag(self, tag: str) -> int:
        return 0

    def clear(self) -> None:
        return None


def cached(cache: CachePort, key: str, loader, *, tags: Iterable[str] = (), ttl: Optional[int] = None):
    """Return the cached value for ``key`` or load, store and return it."""
    value = cache.get(key, _MISSING)
    if value is not _MISSING:
        return value
    value = loader()
    cache.set(key, value, ttl=ttl, tags=tags)
    return value
