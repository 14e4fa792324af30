from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Dict, List, Optional


WEATHER_URL = "https://weather.test/v1/forecast"

SAMPLE_WEATHER_PAYLOAD = {
    "current_weather": {"temperature": 72.5},
    "daily": {
        "temperature_2m_max": [80.0],
        "temperature_2m_min": [65.0],
    },
}


class TimeController:
    def __init__(self) -> None:
        self.now = 0.0

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def __call__(self) -> float:
        return self.now


def make_location(
    latitude: float = 37.422,
    longitude: float = -122.084,
    raw: Optional[Dict[str, Any]] = None,
) -> SimpleNamespace:
    if raw is None:
        raw = {"address": {"postcode": "94043"}}
    return SimpleNamespace(latitude=latitude, longitude=longitude, address="Mountain View, CA", raw=raw)


class FakeGeocoder:
    """Stands in for a geopy geocoder; records every query."""

    def __init__(self, location: Any = None, error: Optional[Exception] = None) -> None:
        self.location = location
        self.error = error
        self.queries: List[str] = []
        self.options: List[Dict[str, Any]] = []

    def geocode(self, query: str, exactly_one: bool = True, **kwargs: Any) -> Any:
        self.queries.append(query)
        self.options.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.location


class BrokenStore:
    """Store whose every operation fails."""

    def __init__(self) -> None:
        self.calls: List[str] = []

    def read(self, key: str) -> Any:
        self.calls.append("read")
        raise ConnectionError("store down")

    def write(self, key: str, value: Any, ttl: int) -> None:
        self.calls.append("write")
        raise ConnectionError("store down")

    def delete(self, key: str) -> None:
        self.calls.append("delete")
        raise ConnectionError("store down")

    def exists(self, key: str) -> bool:
        self.calls.append("exists")
        raise ConnectionError("store down")


class RecordingStore:
    """Dict-backed store that records every call for white-box assertions."""

    def __init__(self) -> None:
        self.data: Dict[str, Any] = {}
        self.calls: List[tuple] = []

    def read(self, key: str) -> Any:
        self.calls.append(("read", key))
        return self.data.get(key)

    def write(self, key: str, value: Any, ttl: int) -> None:
        self.calls.append(("write", key, ttl))
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.calls.append(("delete", key))
        self.data.pop(key, None)

    def exists(self, key: str) -> bool:
        self.calls.append(("exists", key))
        return key in self.data
