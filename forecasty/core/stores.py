"""Backing stores that satisfy the forecast cache contract."""
from __future__ import annotations

import time
from threading import Lock
from typing import Any, Callable, Dict, Tuple

from django.core.cache.backends.base import BaseCache


class MemoryStore:
    """A lightweight TTL store emulating Redis expiry behaviour."""

    def __init__(self, time_func: Callable[[], float] = time.monotonic) -> None:
        self._time_func = time_func
        self._storage: Dict[str, Tuple[float, Any]] = {}
        self._lock = Lock()

    def read(self, key: str) -> Any:
        with self._lock:
            item = self._live_item(key)
        if item is None:
            return None
        return item[1]

    def write(self, key: str, value: Any, ttl: int) -> None:
        with self._lock:
            self._storage[key] = (self._time_func() + ttl, value)

    def delete(self, key: str) -> None:
        with self._lock:
            self._storage.pop(key, None)

    def exists(self, key: str) -> bool:
        with self._lock:
            return self._live_item(key) is not None

    def clear(self) -> None:
        with self._lock:
            self._storage.clear()

    def _live_item(self, key: str):
        item = self._storage.get(key)
        if not item:
            return None
        expires_at, _ = item
        if expires_at <= self._time_func():
            self._storage.pop(key, None)
            return None
        return item


class DjangoCacheStore:
    """Adapt a configured Django cache backend (locmem, redis, ...)."""

    def __init__(self, cache: BaseCache) -> None:
        self._cache = cache

    def read(self, key: str) -> Any:
        return self._cache.get(key)

    def write(self, key: str, value: Any, ttl: int) -> None:
        self._cache.set(key, value, timeout=ttl)

    def delete(self, key: str) -> None:
        self._cache.delete(key)

    def exists(self, key: str) -> bool:
        return bool(self._cache.has_key(key))


__all__ = ["DjangoCacheStore", "MemoryStore"]
