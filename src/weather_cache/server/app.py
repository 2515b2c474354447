"""Backend-for-frontend ASGI app.

Proxies location search, reverse geocoding and historical weather to
Open-Meteo through the namespace caches, and exposes cache introspection
outside production.
"""

from __future__ import annotations

import contextlib
import logging
import time
import typing as t
from collections.abc import AsyncIterator
from datetime import datetime, timezone

from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route

from weather_cache.errors import ExternalServiceError, ValidationError
from weather_cache.lookup.open_meteo import OpenMeteoClient
from weather_cache.lookup.service import WeatherService
from weather_cache.registry import CacheRegistry
from weather_cache.utils.config import AppConfig

_logger = logging.getLogger(__name__)


def _string_param(request: Request, name: str, default: t.Optional[str] = None) -> str:
    value = (request.query_params.get(name) or "").strip()
    if value:
        return value
    if default is not None:
        return default
    raise ValidationError(f'Query parameter "{name}" is required', name)


def _float_param(request: Request, name: str) -> float:
    raw = _string_param(request, name)
    try:
        return float(raw)
    except ValueError:
        raise ValidationError(f'Query parameter "{name}" must be a number', name) from None


def _error_body(message: str, status_code: int, field: t.Optional[str] = None) -> t.Dict[str, t.Any]:
    body: t.Dict[str, t.Any] = {"error": message, "statusCode": status_code}
    if field:
        body["field"] = field
    return body


def create_app(
    config: t.Optional[AppConfig] = None,
    *,
    registry: t.Optional[CacheRegistry] = None,
    client: t.Optional[OpenMeteoClient] = None,
) -> Starlette:
    config = config or AppConfig()
    caches = registry or CacheRegistry(config.caches)
    service = WeatherService(client or OpenMeteoClient(config.open_meteo), caches)
    started_at = time.monotonic()

    async def health(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "status": "ok",
                "timestamp": datetime.now(timezone.utc).isoformat(),
                "uptime": round(time.monotonic() - started_at, 3),
                "environment": config.environment,
            }
        )

    async def search(request: Request) -> JSONResponse:
        query = _string_param(request, "q")
        locations = await service.search(query)
        return JSONResponse([location.model_dump() for location in locations])

    async def weather(request: Request) -> JSONResponse:
        payload = await service.weather(
            _float_param(request, "lat"),
            _float_param(request, "lon"),
            _string_param(request, "start"),
            _string_param(request, "end"),
            _string_param(request, "timezone", "UTC"),
        )
        return JSONResponse(payload.model_dump(include={"daily", "hourly"}))

    async def reverse_geocode(request: Request) -> JSONResponse:
        location = await service.reverse_geocode(_float_param(request, "lat"), _float_param(request, "lon"))
        return JSONResponse(location.model_dump())

    async def cache_stats(request: Request) -> JSONResponse:
        if config.is_production:
            return JSONResponse({"message": "Endpoint not available in production"}, status_code=404)
        return JSONResponse(caches.stats())

    async def cache_clear(request: Request) -> JSONResponse:
        if config.is_production:
            return JSONResponse({"message": "Endpoint not available in production"}, status_code=404)
        caches.clear_all()
        return JSONResponse({"message": "All caches cleared"})

    async def on_validation_error(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(_error_body(str(exc), 400, getattr(exc, "field", None)), status_code=400)

    async def on_external_error(request: Request, exc: Exception) -> JSONResponse:
        _logger.error("Upstream lookup failed for %s: %s", request.url.path, exc)
        return JSONResponse(_error_body(str(exc), 502), status_code=502)

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        caches.start_all()
        _logger.info("Application started (environment=%s)", config.environment)
        try:
            yield
        finally:
            _logger.info("Application shutting down...")
            caches.stop_all()

    app = Starlette(
        debug=not config.is_production,
        routes=[
            Route("/api/health", health),
            Route("/api/search", search),
            Route("/api/weather", weather),
            Route("/api/reverse-geocode", reverse_geocode),
            Route("/api/cache-stats", cache_stats),
            Route("/api/cache-clear", cache_clear, methods=["POST"]),
        ],
        exception_handlers={
            ValidationError: on_validation_error,
            ExternalServiceError: on_external_error,
        },
        lifespan=lifespan,
    )
    app.state.caches = caches
    app.state.config = config
    return app
