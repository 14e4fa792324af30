"""Address geocoding backed by geopy."""
from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from geopy.exc import GeopyError
from geopy.geocoders import get_geocoder_for_service
from geopy.geocoders.base import Geocoder

from forecasty.core.abstractions import GeocodeResult


logger = logging.getLogger(__name__)

# Services that only return a postcode when address details are requested.
_QUERY_OPTIONS: Dict[str, Dict[str, Any]] = {
    "nominatim": {"addressdetails": True},
}


class GeocodingError(RuntimeError):
    """Raised when the geocoding provider fails (network, quota, bad response)."""


def build_geocoder(lookup: str, *, user_agent: str, timeout: float) -> Geocoder:
    geocoder_cls = get_geocoder_for_service(lookup)
    return geocoder_cls(user_agent=user_agent, timeout=timeout)


def query_options_for(lookup: str) -> Dict[str, Any]:
    return dict(_QUERY_OPTIONS.get(lookup.lower(), {}))


class GeocodingService:
    """Convert a free-form address into coordinates and a postal code.

    An address that cannot be resolved, or resolves without a postal code, is
    a normal outcome and yields ``None``.  Only provider failures raise
    :class:`GeocodingError`.
    """

    def __init__(self, geocoder: Any, query_options: Optional[Mapping[str, Any]] = None) -> None:
        self._geocoder = geocoder
        self._query_options = dict(query_options or {})

    def geocode(self, address: Optional[str]) -> Optional[GeocodeResult]:
        if address is None or not str(address).strip():
            return None

        try:
            location = self._geocoder.geocode(str(address), exactly_one=True, **self._query_options)
        except GeopyError as exc:
            logger.error("Geocoding failed for address '%s': %s", address, exc)
            raise GeocodingError(f"Unable to geocode address: {exc}") from exc

        if location is None:
            logger.info("No geocoding result for address '%s'", address)
            return None
        return self._build_result(location)

    def _build_result(self, location: Any) -> Optional[GeocodeResult]:
        postal_code = extract_postal_code(getattr(location, "raw", None) or {})
        if not postal_code:
            logger.info("Geocoding result for '%s' has no postal code", getattr(location, "address", ""))
            return None
        return GeocodeResult(
            latitude=location.latitude,
            longitude=location.longitude,
            postal_code=postal_code,
        )


def extract_postal_code(raw: Mapping[str, Any]) -> Optional[str]:
    for field in ("postal_code", "postcode"):
        value = _clean_postal_code(raw.get(field))
        if value:
            return value
    address = raw.get("address")
    if isinstance(address, Mapping):
        return _clean_postal_code(address.get("postcode"))
    return None


def _clean_postal_code(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value).strip() or None


__all__ = [
    "GeocodingError",
    "GeocodingService",
    "build_geocoder",
    "extract_postal_code",
    "query_options_for",
]
