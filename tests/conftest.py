from __future__ import annotations

import pytest
from requests_mock import Mocker

from forecasty.core.health import HealthRegistry
from forecasty.core.providers.geocoder import GeocodingService
from forecasty.core.providers.openmeteo import OpenMeteoClient
from forecasty.core.services.forecast_cache import ForecastCache
from forecasty.core.services.forecast_service import ForecastService
from forecasty.core.stores import MemoryStore

from tests.helpers import WEATHER_URL, FakeGeocoder, TimeController, make_location


@pytest.fixture
def requests_mock():
    with Mocker() as mock:
        yield mock


@pytest.fixture
def clock() -> TimeController:
    return TimeController()


@pytest.fixture
def memory_store(clock: TimeController) -> MemoryStore:
    return MemoryStore(time_func=clock)


@pytest.fixture
def fake_geocoder() -> FakeGeocoder:
    return FakeGeocoder(location=make_location())


@pytest.fixture
def forecast_service(fake_geocoder: FakeGeocoder, memory_store: MemoryStore) -> ForecastService:
    return ForecastService(
        geocoder=GeocodingService(fake_geocoder),
        weather_client=OpenMeteoClient(base_url=WEATHER_URL),
        cache=ForecastCache(memory_store, ttl=60),
        health=HealthRegistry(),
    )
