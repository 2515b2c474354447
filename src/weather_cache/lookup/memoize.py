from __future__ import annotations

import time
import typing as t

from weather_cache.cache import TTLCache
from weather_cache.monitoring.metrics import lookup_latency_seconds

V = t.TypeVar("V")

_MISS = object()


async def cached_call(
    cache: TTLCache[V],
    key: str,
    fetch: t.Callable[[], t.Awaitable[V]],
    ttl_seconds: t.Optional[float] = None,
    cache_if: t.Optional[t.Callable[[V], bool]] = None,
) -> V:
    """Return the cached value for key, or await fetch() and cache its result.

    Nothing is cached when fetch raises (the exception propagates) or when
    ``cache_if`` rejects the result.
    """
    cached = cache.get(key, t.cast(V, _MISS))
    if cached is not _MISS:
        return cached
    started = time.perf_counter()
    value = await fetch()
    lookup_latency_seconds.observe(time.perf_counter() - started, namespace=cache.name)
    if cache_if is None or cache_if(value):
        cache.set(key, value, ttl_seconds)
    return value


def _coord(value: float) -> str:
    return f"{float(value):.4f}"


def search_key(query: str) -> str:
    return f"search:{query.strip().lower()}"


def weather_key(latitude: float, longitude: float, start: str, end: str, timezone: str) -> str:
    return f"weather:{_coord(latitude)}:{_coord(longitude)}:{start}:{end}:{timezone}"


def reverse_key(latitude: float, longitude: float) -> str:
    return f"reverse:{_coord(latitude)}:{_coord(longitude)}"
