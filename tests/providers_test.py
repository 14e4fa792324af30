from __future__ import annotations

import pytest
import requests

from forecasty.core.abstractions import ValidationError
from forecasty.core.providers.base import (
    InvalidResponseError,
    RequestConfig,
    WeatherAPIError,
    WeatherServiceError,
    WeatherTimeoutError,
)
from forecasty.core.providers.openmeteo import OpenMeteoClient

from tests.helpers import SAMPLE_WEATHER_PAYLOAD, WEATHER_URL


@pytest.fixture
def client() -> OpenMeteoClient:
    return OpenMeteoClient(base_url=WEATHER_URL, request_config=RequestConfig(timeout=2.0))


def test_fetch_parses_current_and_daily(client, requests_mock):
    requests_mock.get(WEATHER_URL, json=SAMPLE_WEATHER_PAYLOAD)

    result = client.fetch(37.422, -122.084)

    assert result.current_temp_f == 72.5
    assert result.high_temp_f == 80.0
    assert result.low_temp_f == 65.0
    assert result.raw == SAMPLE_WEATHER_PAYLOAD
    assert result.is_valid
    assert result.current_temp_display == "72.5°F"


def test_fetch_sends_expected_query(client, requests_mock):
    requests_mock.get(WEATHER_URL, json=SAMPLE_WEATHER_PAYLOAD)

    client.fetch(37.422, -122.084)

    qs = requests_mock.last_request.qs
    assert qs["latitude"] == ["37.422"]
    assert qs["longitude"] == ["-122.084"]
    assert qs["current_weather"] == ["true"]
    assert qs["daily"] == ["temperature_2m_max,temperature_2m_min"]
    assert qs["temperature_unit"] == ["fahrenheit"]
    assert qs["timezone"] == ["auto"]
    assert requests_mock.last_request.timeout == 2.0


def test_missing_daily_values_are_none(client, requests_mock):
    requests_mock.get(WEATHER_URL, json={"current_weather": {"temperature": 50}})

    result = client.fetch(10.0, 10.0)

    assert result.current_temp_f == 50.0
    assert result.high_temp_f is None
    assert result.low_temp_f is None


def test_missing_temperature_is_invalid_result(client, requests_mock):
    requests_mock.get(WEATHER_URL, json={"current_weather": {}})

    result = client.fetch(10.0, 10.0)

    assert result.current_temp_f is None
    assert not result.is_valid
    assert result.current_temp_display == "N/A"


@pytest.mark.parametrize(
    "latitude, longitude, message",
    [
        (91.0, 0.0, "out of valid range"),
        (-90.5, 0.0, "out of valid range"),
        (0.0, 180.1, "out of valid range"),
        ("37.4", -122.0, "must be numeric"),
        (None, -122.0, "must be numeric"),
        (True, 0.0, "must be numeric"),
    ],
)
def test_invalid_coordinates_rejected_before_request(client, requests_mock, latitude, longitude, message):
    with pytest.raises(ValidationError, match=message):
        client.fetch(latitude, longitude)

    assert requests_mock.call_count == 0


def test_boundary_coordinates_are_accepted(client, requests_mock):
    requests_mock.get(WEATHER_URL, json=SAMPLE_WEATHER_PAYLOAD)

    client.fetch(90, -180)

    assert requests_mock.call_count == 1


def test_http_error_raises_api_error(client, requests_mock):
    requests_mock.get(WEATHER_URL, status_code=500, text="server error")

    with pytest.raises(WeatherAPIError, match="Weather API error: 500 - server error"):
        client.fetch(1.0, 1.0)


def test_timeout_raises_timeout_error(client, requests_mock):
    requests_mock.get(WEATHER_URL, exc=requests.exceptions.ConnectTimeout)

    with pytest.raises(WeatherTimeoutError):
        client.fetch(1.0, 1.0)


def test_connection_failure_raises_api_error(client, requests_mock):
    requests_mock.get(WEATHER_URL, exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(WeatherAPIError, match="request failed"):
        client.fetch(1.0, 1.0)


def test_invalid_json_raises_invalid_response(client, requests_mock):
    requests_mock.get(WEATHER_URL, text="<html>not json</html>")

    with pytest.raises(InvalidResponseError, match="Invalid JSON"):
        client.fetch(1.0, 1.0)


def test_non_object_payload_raises_invalid_response(client, requests_mock):
    requests_mock.get(WEATHER_URL, json=[1, 2, 3])

    with pytest.raises(InvalidResponseError, match="Expected JSON object, got list"):
        client.fetch(1.0, 1.0)


def test_missing_current_weather_raises_invalid_response(client, requests_mock):
    requests_mock.get(WEATHER_URL, json={"daily": {}})

    with pytest.raises(InvalidResponseError, match="Missing current_weather"):
        client.fetch(1.0, 1.0)


def test_all_failures_share_a_base_class():
    for error in (WeatherAPIError, WeatherTimeoutError, InvalidResponseError):
        assert issubclass(error, WeatherServiceError)


@pytest.mark.parametrize("current", ["oops", [72.5], 72.5])
def test_non_object_current_weather_raises_invalid_response(client, requests_mock, current):
    requests_mock.get(WEATHER_URL, json={"current_weather": current})

    with pytest.raises(InvalidResponseError, match="Expected current_weather object"):
        client.fetch(10.0, 10.0)


def test_non_object_daily_is_treated_as_missing(client, requests_mock):
    requests_mock.get(WEATHER_URL, json={"current_weather": {"temperature": 50}, "daily": [1]})

    result = client.fetch(10.0, 10.0)

    assert result.current_temp_f == 50.0
    assert result.high_temp_f is None
    assert result.low_temp_f is None
