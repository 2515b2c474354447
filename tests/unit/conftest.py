"""Shared fixtures for unit tests."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from weather_cache.lookup.models import Location, WeatherPayload
from weather_cache.monitoring.metrics import cache_evictions_total, cache_requests_total, lookup_latency_seconds
from weather_cache.registry import CacheRegistry
from weather_cache.utils.config import CacheConfig, NamespaceConfig


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def reset_metrics():
    yield
    cache_requests_total.reset()
    cache_evictions_total.reset()
    lookup_latency_seconds.reset()


@pytest.fixture
def namespace_config():
    return NamespaceConfig(
        search=CacheConfig(default_ttl_seconds=60, max_size=10, cleanup_interval_seconds=30),
        weather=CacheConfig(default_ttl_seconds=120, max_size=5, cleanup_interval_seconds=60),
        reverse=CacheConfig(default_ttl_seconds=120, max_size=5, cleanup_interval_seconds=60),
    )


@pytest.fixture
def registry(namespace_config, clock):
    return CacheRegistry(namespace_config, clock=clock)


@pytest.fixture
def sample_location():
    return Location(
        id=5128581,
        name="New York",
        latitude=40.71427,
        longitude=-74.00597,
        elevation=10.0,
        feature_code="PPL",
        country_code="US",
        country="United States",
        timezone="America/New_York",
    )


@pytest.fixture
def sample_weather_payload():
    return WeatherPayload.model_validate(
        {
            "latitude": 40.7,
            "longitude": -74.0,
            "timezone": "America/New_York",
            "daily": {"time": ["2024-01-01"], "temperature_2m_max": [5.2]},
            "hourly": {"time": ["2024-01-01T00:00"], "temperature_2m": [1.3]},
        }
    )


@pytest.fixture
def mock_client(sample_location, sample_weather_payload):
    """Mock OpenMeteoClient."""
    client = AsyncMock()
    client.search_locations = AsyncMock(return_value=[sample_location])
    client.historical_weather = AsyncMock(return_value=sample_weather_payload)
    client.reverse_geocode = AsyncMock(return_value=sample_location)
    return client
