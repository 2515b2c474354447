from __future__ import annotations

import typing as t
from dataclasses import dataclass

from .errors import InvalidArgument

V = t.TypeVar("V")


@dataclass
class CacheEntry(t.Generic[V]):
    value: V
    expires_at: float
    created_at: float
    last_accessed_at: float

    @classmethod
    def create(cls, value: V, ttl_seconds: float, now: float) -> "CacheEntry[V]":
        """Build an entry expiring ``ttl_seconds`` after ``now``.

        Raises InvalidArgument for a non-positive TTL, so an entry with
        ``expires_at <= created_at`` can never exist.
        """
        if not ttl_seconds > 0:
            raise InvalidArgument(f"ttl must be positive, got {ttl_seconds!r}")
        return cls(value=value, expires_at=now + ttl_seconds, created_at=now, last_accessed_at=now)

    @property
    def lifetime(self) -> float:
        return self.expires_at - self.created_at

    def is_expired(self, now: float) -> bool:
        return self.expires_at <= now
