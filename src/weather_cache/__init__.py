"""weather_cache

Time-bounded, capacity-bounded cache engine for memoizing remote weather
lookups, plus the backend-for-frontend service that uses it.
"""

from .cache import (
    AccessOrderTracker,
    CacheEntry,
    CacheEntryStore,
    CacheError,
    CacheStats,
    CleanupScheduler,
    InvalidArgument,
    StatsAccumulator,
    TTLCache,
)
from .errors import ExternalServiceError, ValidationError, WeatherCacheError
from .registry import CacheRegistry
from .utils.config import AppConfig, CacheConfig, NamespaceConfig, OpenMeteoConfig

__all__ = [
    "TTLCache",
    "CacheEntry",
    "CacheEntryStore",
    "AccessOrderTracker",
    "CleanupScheduler",
    "StatsAccumulator",
    "CacheStats",
    "CacheError",
    "InvalidArgument",
    "CacheRegistry",
    "AppConfig",
    "CacheConfig",
    "NamespaceConfig",
    "OpenMeteoConfig",
    "WeatherCacheError",
    "ValidationError",
    "ExternalServiceError",
]

__version__ = "0.1.0"
