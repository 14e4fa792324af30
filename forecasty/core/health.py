"""In-memory health registry served by the ``/up`` endpoint.

Counters live in the process only; they reset on restart and are not shared
between workers.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Dict, Optional


@dataclass(frozen=True)
class CacheStats:
    """Simple container for cache related counters."""

    hits: int = 0
    misses: int = 0
    errors: int = 0

    def as_dict(self) -> Dict[str, int]:
        return {"hits": self.hits, "misses": self.misses, "errors": self.errors}


class HealthRegistry:
    """Stores cache counters and upstream error counters."""

    def __init__(self) -> None:
        self._cache_stats = CacheStats()
        self._upstream_errors: Dict[str, int] = {}
        self._started_at = datetime.now(timezone.utc)
        self._lock = Lock()

    # -- Cache --------------------------------------------------------------
    def record_cache_hit(self) -> None:
        with self._lock:
            stats = self._cache_stats
            self._cache_stats = CacheStats(stats.hits + 1, stats.misses, stats.errors)

    def record_cache_miss(self) -> None:
        with self._lock:
            stats = self._cache_stats
            self._cache_stats = CacheStats(stats.hits, stats.misses + 1, stats.errors)

    def record_cache_error(self) -> None:
        with self._lock:
            stats = self._cache_stats
            self._cache_stats = CacheStats(stats.hits, stats.misses, stats.errors + 1)

    # -- Upstream errors ----------------------------------------------------
    def record_upstream_error(self, upstream: str, increment: int = 1) -> None:
        if not upstream:
            raise ValueError("upstream must be provided")
        if increment <= 0:
            raise ValueError("increment must be positive")
        with self._lock:
            self._upstream_errors[upstream] = self._upstream_errors.get(upstream, 0) + increment

    # -- Snapshot -----------------------------------------------------------
    def snapshot(self, now: Optional[datetime] = None) -> Dict[str, object]:
        now = now or datetime.now(timezone.utc)
        with self._lock:
            cache = self._cache_stats.as_dict()
            upstream = dict(self._upstream_errors)
        return {
            "status": "ok",
            "started_at": self._started_at.isoformat(),
            "uptime_seconds": int((now - self._started_at).total_seconds()),
            "cache": cache,
            "upstream_errors": upstream,
        }


__all__ = ["CacheStats", "HealthRegistry"]
