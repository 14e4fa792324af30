from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests
from requests import Response


class WeatherServiceError(RuntimeError):
    """Base weather provider error."""


class WeatherAPIError(WeatherServiceError):
    """Raised for transport failures and non-success HTTP statuses."""


class WeatherTimeoutError(WeatherServiceError):
    """Raised when the upstream request exceeds the configured timeout."""


class InvalidResponseError(WeatherServiceError):
    """Raised when the payload cannot be decoded or lacks required fields."""


@dataclass
class RequestConfig:
    timeout: float = 10.0


class HTTPProvider:
    """Base class that owns the HTTP session, timeout and error translation."""

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")

    def _handle_response(self, response: Response) -> Response:
        if response.status_code >= 400:
            self._log.error("Provider returned %s: %s", response.status_code, response.text)
            message = f"Weather API error: {response.status_code}"
            if response.text:
                message += f" - {response.text}"
            raise WeatherAPIError(message)
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise WeatherTimeoutError(f"Weather API request timed out: {exc}") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise WeatherAPIError(f"Weather API request failed: {exc}") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> object:
        try:
            return response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise InvalidResponseError(f"Invalid JSON response: {exc}") from exc


__all__ = [
    "HTTPProvider",
    "InvalidResponseError",
    "RequestConfig",
    "WeatherAPIError",
    "WeatherServiceError",
    "WeatherTimeoutError",
]
