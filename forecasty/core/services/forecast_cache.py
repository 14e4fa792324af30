"""ZIP-keyed forecast cache with fetch-or-populate semantics."""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional, Tuple

from django.core.exceptions import ImproperlyConfigured

from forecasty.core.abstractions import CacheStore, ValidationError


logger = logging.getLogger(__name__)

ZIP_CODE_PATTERN = re.compile(r"\A\d{5}(-\d{4})?\Z")

_OPERATION_PHRASES = {
    "read": "read from",
    "write": "write to",
    "delete": "delete from",
    "exists": "check",
}


class CacheError(RuntimeError):
    """Raised when the backing store fails; wraps the store-specific error."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        phrase = _OPERATION_PHRASES.get(operation, operation)
        super().__init__(f"Failed to {phrase} cache: {cause}")
        self.operation = operation
        self.cause = cause


def normalize_zip(zip_code: Any) -> str:
    """Return the lookup form of a postal code, rejecting blank values."""
    normalized = "" if zip_code is None else str(zip_code).strip().upper()
    if not normalized:
        raise ValidationError("ZIP code cannot be blank")
    return normalized


class ForecastCache:
    """TTL-bounded cache of weather results keyed by postal code.

    The backing store is injected and only needs ``read``, ``write``,
    ``delete`` and ``exists``.  Every store failure is re-raised as
    :class:`CacheError` so callers can apply a single degrade policy no matter
    which store is configured.  Concurrent misses for the same key are not
    coalesced: both callers run their producer and the last write wins.
    """

    DEFAULT_TTL = 30 * 60
    CACHE_PREFIX = "forecast"
    REQUIRED_OPERATIONS = ("read", "write", "delete", "exists")

    def __init__(self, store: CacheStore, ttl: int = DEFAULT_TTL) -> None:
        missing = [name for name in self.REQUIRED_OPERATIONS if not callable(getattr(store, name, None))]
        if missing:
            raise ImproperlyConfigured(f"Cache store missing methods: {', '.join(missing)}")
        if ttl <= 0:
            raise ValidationError("TTL must be positive")
        self._store = store
        self._ttl = int(ttl)

    @property
    def ttl(self) -> int:
        return self._ttl

    # Public API ---------------------------------------------------------
    def fetch(self, zip_code: Any) -> Any:
        key = self.cache_key(zip_code)
        try:
            return self._store.read(key)
        except Exception as exc:
            logger.error("Cache read failed for zip %s: %s", zip_code, exc)
            raise CacheError("read", exc) from exc

    def write(self, zip_code: Any, value: Any, ttl: Optional[int] = None) -> None:
        key = self.cache_key(zip_code)
        if ttl is None:
            ttl = self._ttl
        elif ttl <= 0:
            raise ValidationError("TTL must be positive")
        if value is None:
            return
        try:
            self._store.write(key, value, ttl)
        except Exception as exc:
            logger.error("Cache write failed for zip %s: %s", zip_code, exc)
            raise CacheError("write", exc) from exc
        logger.info("Cached forecast for zip %s (expires in %ss)", zip_code, ttl)

    def fetch_or_store(self, zip_code: Any, producer: Optional[Callable[[], Any]] = None) -> Tuple[Any, bool]:
        """Return ``(value, from_cache)``, invoking ``producer`` only on a miss."""
        normalize_zip(zip_code)
        if not callable(producer):
            raise ValidationError("Producer required")

        cached = self.fetch(zip_code)
        if cached is not None:
            logger.info("Cache hit for zip %s", zip_code)
            return cached, True

        logger.info("Cache miss for zip %s - fetching fresh data", zip_code)
        fresh = producer()
        self.write(zip_code, fresh)
        return fresh, False

    def delete(self, zip_code: Any) -> None:
        key = self.cache_key(zip_code)
        try:
            self._store.delete(key)
        except Exception as exc:
            logger.error("Cache delete failed for zip %s: %s", zip_code, exc)
            raise CacheError("delete", exc) from exc
        logger.info("Cleared cache for zip %s", zip_code)

    def exists(self, zip_code: Any) -> bool:
        key = self.cache_key(zip_code)
        try:
            return bool(self._store.exists(key))
        except Exception as exc:
            logger.error("Cache existence check failed for zip %s: %s", zip_code, exc)
            raise CacheError("exists", exc) from exc

    def cache_key(self, zip_code: Any) -> str:
        normalized = normalize_zip(zip_code)
        if not ZIP_CODE_PATTERN.match(normalized):
            logger.warning("Non-standard ZIP code format: %s", zip_code)
        return f"{self.CACHE_PREFIX}:{normalized}"


__all__ = ["CacheError", "ForecastCache", "ZIP_CODE_PATTERN", "normalize_zip"]
