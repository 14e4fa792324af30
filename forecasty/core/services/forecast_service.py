"""Forecast lookup that chains geocoding, the ZIP cache and the weather client."""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import logging

from forecasty.core.abstractions import GeocodeResult, WeatherClient, WeatherResult
from forecasty.core.health import HealthRegistry
from forecasty.core.providers.base import WeatherServiceError
from forecasty.core.providers.geocoder import GeocodingError, GeocodingService
from forecasty.core.services.forecast_cache import CacheError, ForecastCache


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Forecast:
    address: str
    location: GeocodeResult
    weather: WeatherResult
    from_cache: bool


class ForecastService:
    """Resolve an address to current weather, caching per postal code.

    Cache failures are never fatal: the request continues as if caching were
    disabled.  Geocoding and weather failures propagate to the caller.
    """

    def __init__(
        self,
        *,
        geocoder: GeocodingService,
        weather_client: WeatherClient,
        cache: ForecastCache,
        health: Optional[HealthRegistry] = None,
    ) -> None:
        self.geocoder = geocoder
        self.weather_client = weather_client
        self.cache = cache
        self.health = health or HealthRegistry()

    def get_forecast(self, address: str) -> Optional[Forecast]:
        """Return the forecast for ``address`` or ``None`` when it cannot be located."""
        try:
            location = self.geocoder.geocode(address)
        except GeocodingError:
            self.health.record_upstream_error("geocoding")
            raise
        if location is None:
            return None

        try:
            weather, from_cache = self._fetch_weather(location)
        except WeatherServiceError:
            self.health.record_upstream_error("weather")
            raise
        return Forecast(address=address, location=location, weather=weather, from_cache=from_cache)

    def _fetch_weather(self, location: GeocodeResult) -> Tuple[WeatherResult, bool]:
        produced: List[WeatherResult] = []

        def producer() -> WeatherResult:
            result = self.weather_client.fetch(location.latitude, location.longitude)
            produced.append(result)
            return result

        try:
            weather, from_cache = self.cache.fetch_or_store(location.postal_code, producer)
        except CacheError as exc:
            logger.warning("Cache error (continuing without cache): %s", exc)
            self.health.record_cache_error()
            if produced:
                return produced[0], False
            return producer(), False

        if from_cache:
            self.health.record_cache_hit()
        else:
            self.health.record_cache_miss()
        return weather, from_cache


__all__ = ["Forecast", "ForecastService"]
