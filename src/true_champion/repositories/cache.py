"""
Key/value cache backends with Redis support and in-memory fallback.

League data is written by the updater and re-read on every request, so
entries default to no expiry; a TTL can be configured per deployment.
Writes are best-effort: a failing Redis logs a warning and the update
carries on.
"""

from __future__ import annotations

import fnmatch
import json
import logging
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

import redis

from ..core.config import Settings

logger = logging.getLogger(__name__)


class CacheBackend(ABC):
    """Abstract base class for cache backends. Values are JSON-compatible."""

    name: str = ""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Get value from cache, None when absent."""
        pass

    def get_many(self, keys: Iterable[str]) -> list[Optional[Any]]:
        """Get several values in one call, positionally aligned with ``keys``."""
        return [self.get(key) for key in keys]

    @abstractmethod
    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        """Set value; ``ttl`` None keeps it until overwritten or deleted."""
        pass

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete key from cache."""
        pass

    @abstractmethod
    def scan(self, pattern: str = "*") -> list[str]:
        """Keys matching a glob pattern."""
        pass

    @abstractmethod
    def size(self) -> int:
        """Get number of cached entries."""
        pass

    def get_stats(self) -> dict[str, Any]:
        return {"backend": self.name, "entries": self.size()}


class InMemoryBackend(CacheBackend):
    """Thread-safe in-memory cache backend with optional per-key expiry."""

    name = "memory"

    def __init__(self):
        self._cache: dict[str, tuple[Any, Optional[datetime]]] = {}
        self._lock = threading.RLock()

    @staticmethod
    def _alive(expiry: Optional[datetime]) -> bool:
        return expiry is None or datetime.now(tz=timezone.utc) < expiry

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            entry = self._cache.get(key)
            if entry is None:
                return None
            value, expiry = entry
            if self._alive(expiry):
                return value
            del self._cache[key]
        return None

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        expiry = datetime.now(tz=timezone.utc) + timedelta(seconds=ttl) if ttl else None
        # Round-trip through JSON so reads see the same shapes Redis would return
        stored = json.loads(json.dumps(value, default=str))
        with self._lock:
            self._cache[key] = (stored, expiry)

    def delete(self, key: str) -> None:
        with self._lock:
            self._cache.pop(key, None)

    def scan(self, pattern: str = "*") -> list[str]:
        with self._lock:
            return [
                k
                for k, (_, expiry) in self._cache.items()
                if self._alive(expiry) and fnmatch.fnmatchcase(k, pattern)
            ]

    def size(self) -> int:
        with self._lock:
            return sum(1 for _, expiry in self._cache.values() if self._alive(expiry))

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


class RedisBackend(CacheBackend):
    """Redis cache backend shared by the API workers and the updater."""

    name = "redis"

    def __init__(self, url: str, prefix: str = "", client: Optional[redis.Redis] = None):
        self._redis = client or redis.Redis.from_url(url, decode_responses=True)
        self._prefix = prefix
        # Fail fast so the caller can fall back to memory
        self._redis.ping()
        logger.info("Redis cache backend connected")

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    def _strip(self, key: str) -> str:
        return key[len(self._prefix):]

    def get(self, key: str) -> Optional[Any]:
        try:
            data = self._redis.get(self._key(key))
            if data is not None:
                return json.loads(data)
        except (redis.RedisError, ValueError) as e:
            logger.warning("Redis get error for %s: %s", key, e)
        return None

    def get_many(self, keys: Iterable[str]) -> list[Optional[Any]]:
        keys = list(keys)
        if not keys:
            return []
        try:
            raw = self._redis.mget([self._key(k) for k in keys])
        except redis.RedisError as e:
            logger.warning("Redis mget error: %s", e)
            return [None] * len(keys)
        values: list[Optional[Any]] = []
        for key, data in zip(keys, raw):
            if data is None:
                values.append(None)
                continue
            try:
                values.append(json.loads(data))
            except ValueError as e:
                logger.warning("Redis decode error for %s: %s", key, e)
                values.append(None)
        return values

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        try:
            self._redis.set(self._key(key), json.dumps(value, default=str), ex=ttl)
        except redis.RedisError as e:
            logger.warning("Redis set error for %s: %s", key, e)

    def delete(self, key: str) -> None:
        try:
            self._redis.delete(self._key(key))
        except redis.RedisError as e:
            logger.warning("Redis delete error for %s: %s", key, e)

    def scan(self, pattern: str = "*") -> list[str]:
        try:
            return [
                self._strip(k)
                for k in self._redis.scan_iter(match=self._key(pattern), count=500)
            ]
        except redis.RedisError as e:
            logger.warning("Redis scan error: %s", e)
            return []

    def size(self) -> int:
        return len(self.scan("*"))


def create_cache_backend(settings: Settings) -> CacheBackend:
    """
    Build the cache backend for this process.

    Redis when configured and reachable, otherwise in-memory (logged).
    """
    wants_redis = settings.cache_backend == "redis" or bool(settings.redis_url)
    if wants_redis and settings.redis_url:
        try:
            return RedisBackend(settings.redis_url, prefix=settings.cache_prefix)
        except redis.RedisError as e:
            logger.warning("Redis unavailable (%s), using in-memory cache", e)
    elif wants_redis:
        logger.warning("cache_backend=redis but REDIS_URL is not set, using in-memory cache")
    else:
        logger.info("Using in-memory cache")
    return InMemoryBackend()
