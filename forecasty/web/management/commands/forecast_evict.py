"""Management command to drop a cached forecast."""
from __future__ import annotations

from typing import Any

from django.core.management.base import BaseCommand, CommandError

from forecasty.core.abstractions import ValidationError
from forecasty.core.services.forecast_cache import CacheError
from forecasty.web.views import get_forecast_service


class Command(BaseCommand):
    help = "Remove the cached forecast for a ZIP code"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--zip", dest="zip_code", type=str, help="ZIP code to evict")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        cache = get_forecast_service().cache
        zip_code = options.get("zip_code")
        try:
            existed = cache.exists(zip_code)
            cache.delete(zip_code)
        except ValidationError as exc:
            raise CommandError(str(exc)) from exc
        except CacheError as exc:
            raise CommandError(f"Cache unavailable: {exc}") from exc

        key = cache.cache_key(zip_code)
        if existed:
            self.stdout.write(f"Evicted {key}")
        else:
            self.stdout.write(f"No cached forecast for {key}")
