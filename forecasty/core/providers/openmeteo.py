from __future__ import annotations

from typing import Any, List, Optional

from .base import HTTPProvider, InvalidResponseError
from ..abstractions import ValidationError, WeatherResult, is_number


class OpenMeteoClient(HTTPProvider):
    """Current conditions plus today's high/low from the Open-Meteo forecast API."""

    base_url = "https://api.open-meteo.com/v1/forecast"

    def __init__(self, base_url: Optional[str] = None, **kwargs) -> None:
        super().__init__(**kwargs)
        self.base_url = base_url or self.base_url

    def fetch(self, latitude: float, longitude: float) -> WeatherResult:
        _validate_coordinates(latitude, longitude)
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "daily": ",".join(["temperature_2m_max", "temperature_2m_min"]),
            "temperature_unit": "fahrenheit",
            "timezone": "auto",
        }
        response = self._request("GET", self.base_url, params=params)
        payload = self._json(response)
        if not isinstance(payload, dict):
            raise InvalidResponseError(f"Expected JSON object, got {type(payload).__name__}")
        if "current_weather" not in payload:
            raise InvalidResponseError("Missing current_weather in response")

        current = payload.get("current_weather") or {}
        if not isinstance(current, dict):
            raise InvalidResponseError(f"Expected current_weather object, got {type(current).__name__}")
        daily = payload.get("daily")
        if not isinstance(daily, dict):
            daily = {}
        return WeatherResult(
            current_temp_f=_safe_float(current.get("temperature")),
            high_temp_f=_safe_index(daily.get("temperature_2m_max"), 0),
            low_temp_f=_safe_index(daily.get("temperature_2m_min"), 0),
            raw=payload,
        )


def _validate_coordinates(latitude: Any, longitude: Any) -> None:
    if not (is_number(latitude) and is_number(longitude)):
        raise ValidationError("Coordinates must be numeric")
    if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
        raise ValidationError("Coordinates out of valid range")


def _safe_float(value: Optional[object]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _safe_index(values: Optional[List[Optional[float]]], index: int) -> Optional[float]:
    try:
        value = values[index]
    except (IndexError, TypeError):
        return None
    return _safe_float(value)


__all__ = ["OpenMeteoClient"]
