from __future__ import annotations


class WeatherCacheError(Exception):
    """Base error for the weather lookup service."""


class ValidationError(WeatherCacheError):
    """Raised when request input is invalid."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field


class ExternalServiceError(WeatherCacheError):
    """Raised when Open-Meteo fails or returns an unusable payload."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
