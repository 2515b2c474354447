"""Unit tests for cached_call and cache key builders."""

from unittest.mock import AsyncMock

import pytest

from weather_cache.cache import TTLCache
from weather_cache.errors import ExternalServiceError
from weather_cache.lookup.memoize import cached_call, reverse_key, search_key, weather_key
from weather_cache.monitoring.metrics import lookup_latency_seconds


@pytest.mark.asyncio
class TestCachedCall:
    async def test_miss_fetches_and_caches(self, clock):
        cache = TTLCache(max_size=10, ttl_seconds=60, clock=clock, name="search")
        fetch = AsyncMock(return_value=["result"])

        first = await cached_call(cache, "k", fetch)
        second = await cached_call(cache, "k", fetch)

        assert first == second == ["result"]
        fetch.assert_awaited_once()
        assert lookup_latency_seconds.count(namespace="search") == 1

    async def test_errors_are_not_cached(self, clock):
        cache = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        fetch = AsyncMock(side_effect=ExternalServiceError("down"))

        with pytest.raises(ExternalServiceError):
            await cached_call(cache, "k", fetch)

        assert cache.has("k") is False

    async def test_refetches_after_expiry(self, clock):
        cache = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        fetch = AsyncMock(side_effect=["old", "new"])

        assert await cached_call(cache, "k", fetch, ttl_seconds=5) == "old"
        clock.advance(6)
        assert await cached_call(cache, "k", fetch, ttl_seconds=5) == "new"
        assert fetch.await_count == 2

    async def test_cache_if_rejects_result(self, clock):
        cache = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        fetch = AsyncMock(return_value={"fallback": True})

        await cached_call(cache, "k", fetch, cache_if=lambda v: not v["fallback"])

        assert cache.has("k") is False

    async def test_cached_falsy_values_are_hits(self, clock):
        cache = TTLCache(max_size=10, ttl_seconds=60, clock=clock)
        fetch = AsyncMock(return_value=[])

        await cached_call(cache, "k", fetch)
        await cached_call(cache, "k", fetch)

        fetch.assert_awaited_once()


class TestKeys:
    def test_search_key_normalizes(self):
        assert search_key("  New York ") == search_key("new york") == "search:new york"

    def test_weather_key(self):
        key = weather_key(40.71427, -74.00597, "2024-01-01", "2024-01-07", "America/New_York")
        assert key == "weather:40.7143:-74.0060:2024-01-01:2024-01-07:America/New_York"

    def test_reverse_key(self):
        assert reverse_key(1, 2.123456) == "reverse:1.0000:2.1235"
