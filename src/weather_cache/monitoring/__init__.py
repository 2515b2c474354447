"""In-process counters and histograms for cache and lookup activity."""

from .metrics import (
    Counter,
    Histogram,
    cache_evictions_total,
    cache_requests_total,
    lookup_latency_seconds,
)

__all__ = [
    "Counter",
    "Histogram",
    "cache_requests_total",
    "cache_evictions_total",
    "lookup_latency_seconds",
]
