from __future__ import annotations

import typing as t

from weather_cache.registry import CacheRegistry

from .memoize import cached_call, reverse_key, search_key, weather_key
from .models import Location, WeatherPayload
from .open_meteo import OpenMeteoClient


class WeatherService:
    """Open-Meteo lookups memoized in the registry's namespace caches."""

    def __init__(self, client: OpenMeteoClient, caches: CacheRegistry) -> None:
        self._client = client
        self._caches = caches

    async def search(self, query: str) -> t.List[Location]:
        return await cached_call(
            self._caches.search,
            search_key(query),
            lambda: self._client.search_locations(query),
        )

    async def weather(
        self,
        latitude: float,
        longitude: float,
        start: str,
        end: str,
        timezone: str = "UTC",
    ) -> WeatherPayload:
        return await cached_call(
            self._caches.weather,
            weather_key(latitude, longitude, start, end, timezone),
            lambda: self._client.historical_weather(latitude, longitude, start, end, timezone),
        )

    async def reverse_geocode(self, latitude: float, longitude: float) -> Location:
        return await cached_call(
            self._caches.reverse,
            reverse_key(latitude, longitude),
            lambda: self._client.reverse_geocode(latitude, longitude),
            # fallback records are synthesized locally; retry upstream next time
            cache_if=lambda location: not location.is_fallback,
        )
