from __future__ import annotations

import typing as t

from pydantic import BaseModel, ConfigDict, Field


class Location(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int = 0
    name: str
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    elevation: t.Optional[float] = None
    feature_code: t.Optional[str] = None
    country_code: t.Optional[str] = None
    country: t.Optional[str] = None
    timezone: str = "UTC"
    admin1: t.Optional[str] = None
    is_fallback: bool = False


class WeatherSeries(BaseModel):
    """Column-oriented series as returned by the archive API."""

    model_config = ConfigDict(extra="allow")

    time: t.List[str]


class WeatherPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    latitude: t.Optional[float] = None
    longitude: t.Optional[float] = None
    timezone: t.Optional[str] = None
    daily: WeatherSeries
    hourly: WeatherSeries


DAILY_VARIABLES = (
    "weathercode",
    "temperature_2m_max",
    "temperature_2m_min",
    "apparent_temperature_max",
    "apparent_temperature_min",
    "sunrise",
    "sunset",
    "precipitation_sum",
    "rain_sum",
    "showers_sum",
    "snowfall_sum",
    "precipitation_hours",
    "windspeed_10m_max",
    "windgusts_10m_max",
    "winddirection_10m_dominant",
    "shortwave_radiation_sum",
    "et0_fao_evapotranspiration",
)

HOURLY_VARIABLES = (
    "temperature_2m",
    "relativehumidity_2m",
    "dewpoint_2m",
    "apparent_temperature",
    "pressure_msl",
    "surface_pressure",
    "precipitation",
    "rain",
    "snowfall",
    "weathercode",
    "cloudcover",
    "cloudcover_low",
    "cloudcover_mid",
    "cloudcover_high",
    "shortwave_radiation",
    "direct_radiation",
    "diffuse_radiation",
    "direct_normal_irradiance",
    "windspeed_10m",
    "winddirection_10m",
    "windgusts_10m",
    "temperature_80m",
)
