"""Configuration and resilience helpers."""

from .config import AppConfig, CacheConfig, NamespaceConfig, OpenMeteoConfig
from .resilience import CircuitBreaker, CircuitBreakerConfig, CircuitOpenError, CircuitState, with_retries

__all__ = [
    "AppConfig",
    "CacheConfig",
    "NamespaceConfig",
    "OpenMeteoConfig",
    "CircuitBreaker",
    "CircuitBreakerConfig",
    "CircuitOpenError",
    "CircuitState",
    "with_retries",
]
