from __future__ import annotations


class CacheError(Exception):
    """Base error for the cache engine."""


class InvalidArgument(CacheError, ValueError):
    """Raised when a TTL, size or interval is not strictly positive."""
