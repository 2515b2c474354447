from __future__ import annotations

import typing as t
from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class CacheStats:
    size: int
    max_size: int
    ttl: float
    cleanup_interval: float
    hits: int
    misses: int
    hit_rate: float

    def as_dict(self) -> t.Dict[str, t.Any]:
        return asdict(self)


class StatsAccumulator:
    """Hit/miss counters fed by ``get`` outcomes; reset only by ``reset()``."""

    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0

    @property
    def requests(self) -> int:
        return self.hits + self.misses

    @property
    def hit_rate(self) -> float:
        total = self.requests
        if total == 0:
            return 0.0
        return self.hits / total * 100

    def snapshot(self, *, size: int, max_size: int, ttl: float, cleanup_interval: float) -> CacheStats:
        return CacheStats(
            size=size,
            max_size=max_size,
            ttl=ttl,
            cleanup_interval=cleanup_interval,
            hits=self.hits,
            misses=self.misses,
            hit_rate=self.hit_rate,
        )
