"""Time-bounded, capacity-bounded cache engine."""

from .entry import CacheEntry
from .errors import CacheError, InvalidArgument
from .order import AccessOrderTracker
from .scheduler import CleanupScheduler
from .stats import CacheStats, StatsAccumulator
from .store import MISSING, CacheEntryStore
from .ttl_cache import TTLCache

__all__ = [
    "AccessOrderTracker",
    "CacheEntry",
    "CacheEntryStore",
    "CacheError",
    "CacheStats",
    "CleanupScheduler",
    "InvalidArgument",
    "MISSING",
    "StatsAccumulator",
    "TTLCache",
]
