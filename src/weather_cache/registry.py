from __future__ import annotations

import logging
import typing as t

from .cache import TTLCache
from .cache.store import Clock
from .utils.config import NamespaceConfig

_logger = logging.getLogger(__name__)


class CacheRegistry:
    """One TTLCache per lookup namespace (search, weather, reverse).

    Built once by the owning app and passed to whatever needs a cache, so
    tests and multiple apps never share cache state.
    """

    def __init__(self, config: t.Optional[NamespaceConfig] = None, clock: t.Optional[Clock] = None) -> None:
        self._config = config or NamespaceConfig()
        self._caches: t.Dict[str, TTLCache[t.Any]] = {}
        for name, cache_config in self._config.items():
            self._caches[name] = TTLCache(
                max_size=cache_config.max_size,
                ttl_seconds=cache_config.default_ttl_seconds,
                cleanup_interval_seconds=cache_config.cleanup_interval_seconds,
                name=name,
                clock=clock,
            )

    @property
    def search(self) -> TTLCache[t.Any]:
        return self._caches["search"]

    @property
    def weather(self) -> TTLCache[t.Any]:
        return self._caches["weather"]

    @property
    def reverse(self) -> TTLCache[t.Any]:
        return self._caches["reverse"]

    def get(self, name: str) -> TTLCache[t.Any]:
        try:
            return self._caches[name]
        except KeyError:
            raise KeyError(f"unknown cache namespace: {name}") from None

    def names(self) -> t.List[str]:
        return list(self._caches)

    def start_all(self) -> None:
        for cache in self._caches.values():
            cache.start_cleanup()

    def stop_all(self) -> None:
        for cache in self._caches.values():
            cache.stop_cleanup()

    def clear_all(self) -> None:
        for cache in self._caches.values():
            cache.clear()
        _logger.info("Cleared %d caches", len(self._caches))

    def stats(self) -> t.Dict[str, t.Dict[str, t.Any]]:
        return {name: cache.get_stats().as_dict() for name, cache in self._caches.items()}
