"""Display formatting for forecast results."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from forecasty.core.abstractions import is_number
from forecasty.core.services.forecast_cache import ZIP_CODE_PATTERN
from forecasty.core.services.forecast_service import Forecast


def _format_temp(value: Optional[float]) -> str:
    if value is None:
        return "N/A"
    return f"{float(value):.1f}°F"


@dataclass(frozen=True)
class ForecastViewModel:
    address: str
    zip: str
    current_temp_f: Optional[float]
    high_temp_f: Optional[float] = None
    low_temp_f: Optional[float] = None
    from_cache: bool = False

    @classmethod
    def from_forecast(cls, forecast: Forecast) -> "ForecastViewModel":
        return cls(
            address=forecast.address,
            zip=forecast.location.postal_code,
            current_temp_f=forecast.weather.current_temp_f,
            high_temp_f=forecast.weather.high_temp_f,
            low_temp_f=forecast.weather.low_temp_f,
            from_cache=forecast.from_cache,
        )

    @property
    def formatted_current_temp(self) -> str:
        return _format_temp(self.current_temp_f)

    @property
    def formatted_high_temp(self) -> str:
        return _format_temp(self.high_temp_f)

    @property
    def formatted_low_temp(self) -> str:
        return _format_temp(self.low_temp_f)

    @property
    def cache_status_message(self) -> str:
        return "Result served from cache" if self.from_cache is True else "Fresh result"

    @property
    def cache_status_css_class(self) -> str:
        return "cache-hit" if self.from_cache is True else "cache-miss"

    @property
    def high_low_available(self) -> bool:
        return self.high_temp_f is not None and self.low_temp_f is not None

    @property
    def temperature_range(self) -> str:
        if not self.high_low_available:
            return "N/A"
        return f"{self.formatted_high_temp} / {self.formatted_low_temp}"

    @property
    def full_address_display(self) -> str:
        return f"{self.address} ({self.zip})"

    @property
    def errors(self) -> Dict[str, List[str]]:
        errors: Dict[str, List[str]] = {}
        if not (self.address or "").strip():
            errors.setdefault("address", []).append("can't be blank")
        if not (self.zip or "").strip():
            errors.setdefault("zip", []).append("can't be blank")
        elif not ZIP_CODE_PATTERN.match(self.zip):
            errors.setdefault("zip", []).append("must be a valid ZIP code")
        if not is_number(self.current_temp_f):
            errors.setdefault("current_temp_f", []).append("is not a number")
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def as_dict(self) -> Dict[str, object]:
        return {
            "address": self.address,
            "zip": self.zip,
            "current_temp_f": self.current_temp_f,
            "high_temp_f": self.high_temp_f,
            "low_temp_f": self.low_temp_f,
            "current_temp": self.formatted_current_temp,
            "temperature_range": self.temperature_range,
            "from_cache": self.from_cache,
            "cache_status": self.cache_status_message,
        }


__all__ = ["ForecastViewModel"]
