from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return float(raw.strip())
    except ValueError:
        return default


@dataclass
class CacheConfig:
    default_ttl_seconds: float = 300.0
    max_size: int = 1000
    cleanup_interval_seconds: float = 60.0


@dataclass
class NamespaceConfig:
    search: CacheConfig = dataclasses.field(
        default_factory=lambda: CacheConfig(default_ttl_seconds=5 * 60, max_size=500, cleanup_interval_seconds=5 * 60)
    )
    weather: CacheConfig = dataclasses.field(
        default_factory=lambda: CacheConfig(default_ttl_seconds=30 * 60, max_size=200, cleanup_interval_seconds=10 * 60)
    )
    reverse: CacheConfig = dataclasses.field(
        default_factory=lambda: CacheConfig(default_ttl_seconds=30 * 60, max_size=300, cleanup_interval_seconds=5 * 60)
    )

    def items(self) -> List[tuple]:
        return [(f.name, getattr(self, f.name)) for f in dataclasses.fields(self)]


@dataclass
class OpenMeteoConfig:
    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1"
    archive_url: str = "https://archive-api.open-meteo.com/v1"
    api_key: Optional[str] = None
    timeout_seconds: float = 10.0
    retry_attempts: int = 3
    retry_backoff_ms: List[int] = dataclasses.field(default_factory=lambda: [100, 500, 2000])


@dataclass
class AppConfig:
    environment: str = "development"  # development | test | production
    host: str = "127.0.0.1"
    port: int = 3001
    caches: NamespaceConfig = dataclasses.field(default_factory=NamespaceConfig)
    open_meteo: OpenMeteoConfig = dataclasses.field(default_factory=OpenMeteoConfig)

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AppConfig":
        caches = data.get("caches", {})
        top = {k: v for k, v in data.items() if k in ("environment", "host", "port")}
        return cls(
            caches=NamespaceConfig(
                **{name: CacheConfig(**values) for name, values in caches.items()},
            ),
            open_meteo=OpenMeteoConfig(**data.get("open_meteo", {})),
            **top,
        )

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "AppConfig":
        env = os.environ if env is None else env
        defaults = cls()

        def cache_from_env(prefix: str, base: CacheConfig) -> CacheConfig:
            return CacheConfig(
                default_ttl_seconds=_env_float(env, f"{prefix}_CACHE_TTL_SECONDS", base.default_ttl_seconds),
                max_size=_env_int(env, f"{prefix}_CACHE_MAX_SIZE", base.max_size),
                cleanup_interval_seconds=_env_float(
                    env, f"{prefix}_CACHE_CLEANUP_SECONDS", base.cleanup_interval_seconds
                ),
            )

        api_key = (env.get("OPEN_METEO_API_KEY") or "").strip() or None
        return cls(
            environment=env.get("ENVIRONMENT", defaults.environment).strip(),
            host=env.get("HOST", defaults.host).strip(),
            port=_env_int(env, "PORT", defaults.port),
            caches=NamespaceConfig(
                search=cache_from_env("SEARCH", defaults.caches.search),
                weather=cache_from_env("WEATHER", defaults.caches.weather),
                reverse=cache_from_env("REVERSE", defaults.caches.reverse),
            ),
            open_meteo=OpenMeteoConfig(
                api_key=api_key,
                timeout_seconds=_env_float(env, "OPEN_METEO_TIMEOUT_SECONDS", defaults.open_meteo.timeout_seconds),
                retry_attempts=max(1, _env_int(env, "OPEN_METEO_RETRY_ATTEMPTS", defaults.open_meteo.retry_attempts)),
            ),
        )
