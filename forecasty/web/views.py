"""HTML and REST views for address forecasts."""
from __future__ import annotations

from functools import lru_cache
import logging
from typing import Optional, Tuple

from django.conf import settings
from django.core.cache import caches
from django.shortcuts import redirect, render
from django.views import View
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from forecasty.core.health import HealthRegistry
from forecasty.core.providers.base import RequestConfig, WeatherServiceError
from forecasty.core.providers.geocoder import (
    GeocodingError,
    GeocodingService,
    build_geocoder,
    query_options_for,
)
from forecasty.core.providers.openmeteo import OpenMeteoClient
from forecasty.core.services.forecast_cache import ForecastCache
from forecasty.core.services.forecast_service import ForecastService
from forecasty.core.stores import DjangoCacheStore
from forecasty.web.forms import ForecastForm
from forecasty.web.view_models import ForecastViewModel


logger = logging.getLogger(__name__)

BLANK_ADDRESS_MESSAGE = "Please enter an address."
ADDRESS_NOT_FOUND_MESSAGE = "Address not found. Please try a different address."
GEOCODING_FAILED_MESSAGE = "Unable to process the address. Please try again."
WEATHER_FAILED_MESSAGE = "Unable to retrieve weather data. Please try again later."

HTTP_422_UNPROCESSABLE_ENTITY = 422


@lru_cache(maxsize=1)
def get_health_registry() -> HealthRegistry:
    return HealthRegistry()


@lru_cache(maxsize=1)
def get_forecast_service() -> ForecastService:
    geocoder = build_geocoder(
        settings.GEOCODER_LOOKUP,
        user_agent=settings.GEOCODER_USER_AGENT,
        timeout=settings.GEOCODER_TIMEOUT,
    )
    store = DjangoCacheStore(caches[settings.FORECAST_CACHE_ALIAS])
    return ForecastService(
        geocoder=GeocodingService(geocoder, query_options=query_options_for(settings.GEOCODER_LOOKUP)),
        weather_client=OpenMeteoClient(
            base_url=settings.WEATHER_BASE_URL,
            request_config=RequestConfig(timeout=settings.WEATHER_TIMEOUT),
        ),
        cache=ForecastCache(store, ttl=settings.FORECAST_CACHE_TTL),
        health=get_health_registry(),
    )


def resolve_forecast(address: str) -> Tuple[int, Optional[str], Optional[ForecastViewModel]]:
    """Run a lookup and map its outcome to ``(status, alert, view_model)``."""
    try:
        forecast = get_forecast_service().get_forecast(address)
    except GeocodingError as exc:
        logger.error("Geocoding service error: %s", exc)
        return status.HTTP_503_SERVICE_UNAVAILABLE, GEOCODING_FAILED_MESSAGE, None
    except WeatherServiceError as exc:
        logger.error("Weather service error: %s", exc)
        return status.HTTP_502_BAD_GATEWAY, WEATHER_FAILED_MESSAGE, None

    if forecast is None:
        return HTTP_422_UNPROCESSABLE_ENTITY, ADDRESS_NOT_FOUND_MESSAGE, None
    return status.HTTP_200_OK, None, ForecastViewModel.from_forecast(forecast)


class ForecastFormView(View):
    """Render the address form."""

    template_name = "forecasts/new.html"

    def get(self, request, *args, **kwargs):
        return render(request, self.template_name, {"form": ForecastForm()})


class ForecastCreateView(View):
    """Handle the address form submission."""

    form_template_name = "forecasts/new.html"
    show_template_name = "forecasts/show.html"

    def get(self, request, *args, **kwargs):
        return redirect("/")

    def post(self, request, *args, **kwargs):
        form = ForecastForm(request.POST)
        address = form.cleaned_data.get("address", "") if form.is_valid() else ""
        if not address:
            return self._render_form(request, form, BLANK_ADDRESS_MESSAGE, HTTP_422_UNPROCESSABLE_ENTITY)

        status_code, alert, view_model = resolve_forecast(address)
        if view_model is None:
            return self._render_form(request, form, alert, status_code)
        return render(request, self.show_template_name, {"forecast": view_model}, status=status_code)

    def _render_form(self, request, form: ForecastForm, alert: Optional[str], status_code: int):
        context = {"form": form, "alert": alert}
        return render(request, self.form_template_name, context, status=status_code)


class ForecastAPIView(APIView):
    """Return the forecast for ``?address=`` as JSON."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the formatted forecast for the requested address."""
        address = (request.query_params.get("address") or "").strip()
        if not address:
            return Response({"detail": "address query parameter is required"}, status=status.HTTP_400_BAD_REQUEST)

        status_code, alert, view_model = resolve_forecast(address)
        if view_model is None:
            return Response({"detail": alert}, status=status_code)
        return Response(view_model.as_dict(), status=status_code)


class HealthView(APIView):
    """Liveness probe with cache and upstream counters."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):
        return Response(get_health_registry().snapshot(), status=status.HTTP_200_OK)
