"""Memoized Open-Meteo lookups."""

from .memoize import cached_call, reverse_key, search_key, weather_key
from .models import Location, WeatherPayload
from .open_meteo import OpenMeteoClient, fallback_location
from .service import WeatherService

__all__ = [
    "cached_call",
    "search_key",
    "weather_key",
    "reverse_key",
    "Location",
    "WeatherPayload",
    "OpenMeteoClient",
    "fallback_location",
    "WeatherService",
]
