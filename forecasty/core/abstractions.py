"""Core abstractions for the forecast domain."""
from __future__ import annotations

from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, Optional, Protocol


class ValidationError(ValueError):
    """Raised synchronously for invalid caller input (keys, producers, coordinates)."""


def is_number(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


@dataclass(frozen=True)
class GeocodeResult:
    """Coordinates and postal code resolved for an address."""

    latitude: Optional[float]
    longitude: Optional[float]
    postal_code: Optional[str]

    @property
    def is_valid(self) -> bool:
        return None not in (self.latitude, self.longitude, self.postal_code)


@dataclass(frozen=True)
class WeatherResult:
    """Current conditions in Fahrenheit plus the decoded upstream payload."""

    current_temp_f: Optional[float]
    high_temp_f: Optional[float]
    low_temp_f: Optional[float]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)

    @property
    def is_valid(self) -> bool:
        return is_number(self.current_temp_f)

    @property
    def current_temp_display(self) -> str:
        if self.current_temp_f is None:
            return "N/A"
        return f"{float(self.current_temp_f):.1f}°F"


class CacheStore(Protocol):
    """Backing store used by the forecast cache."""

    def read(self, key: str) -> Any:
        """Return the stored value or ``None`` when absent or expired."""
        ...

    def write(self, key: str, value: Any, ttl: int) -> None:
        """Store ``value`` for ``ttl`` seconds."""
        ...

    def delete(self, key: str) -> None:
        ...

    def exists(self, key: str) -> bool:
        ...


class WeatherClient(Protocol):
    """A data source capable of returning current weather for coordinates."""

    def fetch(self, latitude: float, longitude: float) -> WeatherResult:
        ...


__all__ = [
    "CacheStore",
    "GeocodeResult",
    "ValidationError",
    "WeatherClient",
    "WeatherResult",
    "is_number",
]
