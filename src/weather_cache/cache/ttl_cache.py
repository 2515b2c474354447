from __future__ import annotations

import asyncio
import logging
import time
import typing as t

from weather_cache.monitoring.metrics import cache_evictions_total, cache_requests_total

from .errors import InvalidArgument
from .scheduler import CleanupScheduler
from .stats import CacheStats
from .store import MISSING, CacheEntryStore, Clock

_logger = logging.getLogger(__name__)

V = t.TypeVar("V")


class TTLCache(t.Generic[V]):
    """LRU + TTL cache for one lookup namespace.

    Wraps a CacheEntryStore with a default TTL, a background cleanup
    scheduler and stats/metrics reporting. All operations are synchronous and
    must be called from a single thread (normally the event loop thread that
    also runs the cleanup timer).
    """

    def __init__(
        self,
        max_size: int = 1000,
        ttl_seconds: float = 300.0,
        cleanup_interval_seconds: float = 60.0,
        *,
        name: str = "default",
        clock: t.Optional[Clock] = None,
        loop: t.Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        if not ttl_seconds > 0:
            raise InvalidArgument(f"default ttl must be positive, got {ttl_seconds!r}")
        self._name = name
        self._ttl = float(ttl_seconds)
        self._store: CacheEntryStore[V] = CacheEntryStore(
            max_size=max_size,
            cleanup_interval_seconds=cleanup_interval_seconds,
            clock=clock or time.monotonic,
        )
        self._scheduler = CleanupScheduler(
            self.cleanup,
            cleanup_interval_seconds,
            name=name,
            loop=loop,
        )

    @property
    def name(self) -> str:
        return self._name

    @property
    def ttl(self) -> float:
        return self._ttl

    @property
    def store(self) -> CacheEntryStore[V]:
        return self._store

    @property
    def cleanup_running(self) -> bool:
        return self._scheduler.running

    def get(self, key: str, default: t.Optional[V] = None) -> t.Optional[V]:
        value = self._store.get(key)
        if value is MISSING:
            cache_requests_total.inc(namespace=self._name, result="miss")
            return default
        cache_requests_total.inc(namespace=self._name, result="hit")
        return value

    def set(self, key: str, value: V, ttl_seconds: t.Optional[float] = None) -> None:
        ttl = self._ttl if ttl_seconds is None else ttl_seconds
        evicted = self._store.set(key, value, ttl)
        if evicted is not None:
            cache_evictions_total.inc(namespace=self._name, reason="capacity")

    def has(self, key: str) -> bool:
        return self._store.has(key)

    def delete(self, key: str) -> bool:
        return self._store.remove(key)

    def clear(self) -> None:
        self._store.clear()
        _logger.debug("Cleared cache %s", self._name)

    def size(self) -> int:
        return self._store.size()

    def __len__(self) -> int:
        return self._store.size()

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._store.has(key)

    def cleanup(self) -> int:
        removed = self._store.sweep()
        if removed:
            cache_evictions_total.inc(removed, namespace=self._name, reason="sweep")
        return removed

    def start_cleanup(self) -> None:
        self._scheduler.start()

    def stop_cleanup(self) -> None:
        self._scheduler.stop()

    def get_stats(self) -> CacheStats:
        return self._store.stats.snapshot(
            size=self._store.size(),
            max_size=self._store.max_size,
            ttl=self._ttl,
            cleanup_interval=self._store.cleanup_interval,
        )
