from __future__ import annotations

import logging
import time
import typing as t

from .entry import CacheEntry
from .errors import InvalidArgument
from .order import AccessOrderTracker
from .stats import StatsAccumulator

_logger = logging.getLogger(__name__)

V = t.TypeVar("V")
Clock = t.Callable[[], float]


class _Missing:
    __slots__ = ()

    def __repr__(self) -> str:
        return "MISSING"


MISSING: t.Any = _Missing()


class CacheEntryStore(t.Generic[V]):
    """Key to entry table with lazy expiry and pre-insert LRU eviction.

    The table and the recency tracker always hold the same key set. Keys
    whose lifetime fits inside one cleanup interval are also kept in a
    candidate set so a sweep can usually avoid scanning the whole table.
    """

    def __init__(
        self,
        max_size: int,
        cleanup_interval_seconds: float,
        clock: t.Optional[Clock] = None,
        stats: t.Optional[StatsAccumulator] = None,
    ) -> None:
        if max_size < 1:
            raise InvalidArgument(f"max_size must be at least 1, got {max_size!r}")
        if not cleanup_interval_seconds > 0:
            raise InvalidArgument(f"cleanup interval must be positive, got {cleanup_interval_seconds!r}")
        self._max_size = int(max_size)
        self._cleanup_interval = float(cleanup_interval_seconds)
        self._clock = clock or time.monotonic
        self._table: t.Dict[str, CacheEntry[V]] = {}
        self._order = AccessOrderTracker()
        self._candidates: t.Set[str] = set()
        self.stats = stats or StatsAccumulator()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def cleanup_interval(self) -> float:
        return self._cleanup_interval

    def get(self, key: str) -> t.Any:
        """Return the live value for key, or MISSING."""
        entry = self._table.get(key)
        if entry is None:
            self.stats.record_miss()
            return MISSING
        now = self._clock()
        if entry.is_expired(now):
            self.remove(key)
            self.stats.record_miss()
            return MISSING
        entry.last_accessed_at = now
        self._order.touch(key)
        self.stats.record_hit()
        return entry.value

    def set(self, key: str, value: V, ttl_seconds: float) -> t.Optional[str]:
        """Insert or replace key; returns the key evicted to make room, if any."""
        entry = CacheEntry.create(value, ttl_seconds, self._clock())
        evicted: t.Optional[str] = None
        if key not in self._table and len(self._table) >= self._max_size:
            evicted = self._order.evict_oldest()
            if evicted is not None:
                del self._table[evicted]
                self._candidates.discard(evicted)
                _logger.debug("Evicted least recently used key %s", evicted)
        self._table[key] = entry
        self._order.touch(key)
        if entry.lifetime <= self._cleanup_interval:
            self._candidates.add(key)
        else:
            self._candidates.discard(key)
        return evicted

    def has(self, key: str) -> bool:
        entry = self._table.get(key)
        if entry is None:
            return False
        if entry.is_expired(self._clock()):
            self.remove(key)
            return False
        return True

    def remove(self, key: str) -> bool:
        if self._table.pop(key, None) is None:
            return False
        self._order.remove(key)
        self._candidates.discard(key)
        return True

    def clear(self) -> None:
        self._table.clear()
        self._order.clear()
        self._candidates.clear()
        self.stats.reset()

    def size(self) -> int:
        return len(self._table)

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, key: object) -> bool:
        return key in self._table

    def keys(self) -> t.List[str]:
        """Keys from least to most recently used."""
        return list(self._order)

    def peek(self, key: str) -> t.Optional[CacheEntry[V]]:
        return self._table.get(key)

    @property
    def candidate_count(self) -> int:
        return len(self._candidates)

    def sweep(self) -> int:
        """Remove expired entries and return how many were removed.

        Checks only the candidate set when it is non-empty; otherwise scans
        every entry. Checked candidates are dropped, expired or not, so the
        sweep after a candidate pass falls back to a full scan.
        """
        now = self._clock()
        if self._candidates:
            expired = [k for k in self._candidates if self._table[k].is_expired(now)]
            scanned = len(self._candidates)
            self._candidates.clear()
        else:
            expired = [k for k, entry in self._table.items() if entry.is_expired(now)]
            scanned = len(self._table)
        for key in expired:
            self.remove(key)
        if expired:
            _logger.debug("Swept %d expired entries (scanned %d)", len(expired), scanned)
        return len(expired)
