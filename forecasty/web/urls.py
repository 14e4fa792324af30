"""Forecast URL configuration."""
from __future__ import annotations

from django.urls import path
from django.views.generic import RedirectView

from forecasty.web.views import ForecastAPIView, ForecastCreateView, ForecastFormView, HealthView

urlpatterns = [
    path("", ForecastFormView.as_view(), name="forecast-new"),
    path("forecasts/new", ForecastFormView.as_view(), name="forecast-form"),
    path("forecasts", ForecastCreateView.as_view(), name="forecast-create"),
    path("forecast", RedirectView.as_view(url="/"), name="forecast-redirect"),
    path("api/forecast", ForecastAPIView.as_view(), name="forecast-api"),
    path("up", HealthView.as_view(), name="health"),
]
