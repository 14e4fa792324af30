"""Management command to fetch a forecast using the same stack as the web views."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from forecasty.core.providers.base import WeatherServiceError
from forecasty.core.providers.geocoder import GeocodingError
from forecasty.web.view_models import ForecastViewModel
from forecasty.web.views import get_forecast_service


class Command(BaseCommand):
    help = "Fetch current weather for the provided address"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--address", type=str, help="Street address or place name")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        address = (options.get("address") or "").strip()
        if not address:
            raise CommandError("--address is required")

        try:
            forecast = get_forecast_service().get_forecast(address)
        except GeocodingError as exc:
            raise CommandError("Unable to process the address") from exc
        except WeatherServiceError as exc:
            raise CommandError("Unable to retrieve weather data") from exc

        if forecast is None:
            raise CommandError(f"Address not found: {address}")

        payload = ForecastViewModel.from_forecast(forecast).as_dict()
        self.stdout.write(json.dumps(payload))
