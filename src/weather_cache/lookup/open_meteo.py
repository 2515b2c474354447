"""Async Open-Meteo client for geocoding and historical weather.

Transport failures and 5xx responses are retried with backoff behind a
circuit breaker; anything still failing surfaces as ExternalServiceError.
"""

from __future__ import annotations

import logging
import typing as t
from datetime import date

import httpx
from pydantic import ValidationError as PydanticValidationError

from weather_cache.errors import ExternalServiceError, ValidationError
from weather_cache.utils.config import OpenMeteoConfig
from weather_cache.utils.resilience import CircuitBreaker, CircuitOpenError, with_retries

from .models import DAILY_VARIABLES, HOURLY_VARIABLES, Location, WeatherPayload

_logger = logging.getLogger(__name__)

JSON = t.Dict[str, t.Any]


def validate_coordinates(latitude: float, longitude: float) -> None:
    if not -90 <= latitude <= 90:
        raise ValidationError(f"Latitude must be between -90 and 90, got {latitude}", "lat")
    if not -180 <= longitude <= 180:
        raise ValidationError(f"Longitude must be between -180 and 180, got {longitude}", "lon")


def validate_date_range(start: str, end: str) -> None:
    try:
        start_date = date.fromisoformat(start)
        end_date = date.fromisoformat(end)
    except (TypeError, ValueError) as e:
        raise ValidationError("Dates must use the YYYY-MM-DD format", "start") from e
    if start_date > end_date:
        raise ValidationError("Start date must not be after end date", "start")


class OpenMeteoClient:
    def __init__(
        self,
        config: t.Optional[OpenMeteoConfig] = None,
        *,
        circuit_breaker: t.Optional[CircuitBreaker] = None,
        transport: t.Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._config = config or OpenMeteoConfig()
        if self._config.retry_attempts < 1:
            raise ValueError(f"retry_attempts must be at least 1, got {self._config.retry_attempts!r}")
        self._breaker = circuit_breaker or CircuitBreaker(name="open-meteo")
        self._transport = transport
        self._headers: t.Dict[str, str] = {"Accept": "application/json"}
        if self._config.api_key:
            self._headers["X-API-Key"] = self._config.api_key

    def _create_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            headers=self._headers,
            timeout=self._config.timeout_seconds,
            transport=self._transport,
        )

    async def _get_json(self, url: str, params: t.Dict[str, t.Any]) -> JSON:
        async def _attempt() -> httpx.Response:
            async with self._create_client() as client:
                response = await client.get(url, params=params)
                if response.status_code >= 500:
                    response.raise_for_status()
                return response

        try:
            response = await self._breaker.run(
                lambda: with_retries(
                    _attempt,
                    self._config.retry_attempts,
                    self._config.retry_backoff_ms,
                    retry_on=(httpx.TransportError, httpx.HTTPStatusError),
                )
            )
        except CircuitOpenError as e:
            raise ExternalServiceError(f"Open-Meteo unavailable: {e}") from e
        except httpx.HTTPStatusError as e:
            raise ExternalServiceError(f"Open-Meteo returned an error: {e}", e.response.status_code) from e
        except httpx.HTTPError as e:
            raise ExternalServiceError(f"Failed to call Open-Meteo: {e}") from e

        if response.status_code >= 400:
            raise ExternalServiceError(
                f"Open-Meteo returned status {response.status_code}", response.status_code
            )
        try:
            data = response.json()
        except ValueError as e:
            raise ExternalServiceError("Open-Meteo returned invalid JSON", response.status_code) from e
        if not isinstance(data, dict):
            raise ExternalServiceError("Open-Meteo returned an unexpected payload", response.status_code)
        if data.get("error"):
            raise ExternalServiceError(f"Open-Meteo error: {data.get('reason', 'unknown')}", response.status_code)
        return data

    async def search_locations(self, query: str, count: int = 5) -> t.List[Location]:
        name = (query or "").strip()
        if not name:
            raise ValidationError('Query parameter "q" is required', "q")

        data = await self._get_json(f"{self._config.geocoding_url}/search", {"name": name, "count": count})
        # no "results" key means no matches
        results = data.get("results", [])
        if not isinstance(results, list):
            raise ExternalServiceError("Invalid geocoding response: results is not a list")

        locations: t.List[Location] = []
        for item in results:
            try:
                locations.append(Location.model_validate(item))
            except PydanticValidationError as e:
                _logger.warning("Skipping invalid location from geocoding API: %s", e)
        return locations

    async def historical_weather(
        self,
        latitude: float,
        longitude: float,
        start: str,
        end: str,
        timezone: str = "UTC",
    ) -> WeatherPayload:
        validate_coordinates(latitude, longitude)
        validate_date_range(start, end)
        if not (timezone or "").strip():
            raise ValidationError("Timezone is required", "timezone")

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "start_date": start,
            "end_date": end,
            "daily": ",".join(DAILY_VARIABLES),
            "hourly": ",".join(HOURLY_VARIABLES),
            "timezone": timezone,
        }
        data = await self._get_json(f"{self._config.archive_url}/archive", params)
        try:
            return WeatherPayload.model_validate(data)
        except PydanticValidationError as e:
            raise ExternalServiceError(f"Invalid weather response: {e.error_count()} validation errors") from e

    async def reverse_geocode(self, latitude: float, longitude: float) -> Location:
        validate_coordinates(latitude, longitude)
        try:
            data = await self._get_json(
                f"{self._config.geocoding_url}/reverse",
                {"latitude": latitude, "longitude": longitude},
            )
            results = data.get("results")
            if not isinstance(results, list) or not results:
                raise ExternalServiceError("Invalid reverse geocode response: no results found")
            return Location.model_validate(results[0])
        except (ExternalServiceError, PydanticValidationError) as e:
            _logger.warning("Reverse geocoding failed for %s, %s (%s); using fallback location", latitude, longitude, e)
            return fallback_location(latitude, longitude)


def fallback_location(latitude: float, longitude: float) -> Location:
    return Location(
        id=0,
        name=f"Location at {latitude:.4f}, {longitude:.4f}",
        latitude=latitude,
        longitude=longitude,
        elevation=0,
        feature_code="PPL",
        country_code="XX",
        country="Unknown",
        timezone="UTC",
        is_fallback=True,
    )
