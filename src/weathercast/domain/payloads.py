"""Schemas for the OpenWeatherMap geocoding, current weather and forecast payloads.

Only the fields the application reads are declared; everything else in the
upstream responses is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# 9999-12-01T00:00:00Z; later epochs overflow datetime once shifted into a local zone.
MAX_TIMESTAMP = 253399622400


class GeocodingMatch(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    name: str
    lat: float
    lon: float
    country: str = ""


class WeatherDescriptor(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    main: str
    description: str = ""


class CurrentMain(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    temp: float
    feels_like: float
    humidity: int
    pressure: int


class Wind(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    speed: float


class CurrentSys(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    country: str = ""


class CurrentWeatherPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    name: str = ""
    dt: int = Field(ge=0, le=MAX_TIMESTAMP)
    visibility: float
    main: CurrentMain
    wind: Wind
    sys: CurrentSys = Field(default_factory=CurrentSys)
    weather: list[WeatherDescriptor] = Field(min_length=1)


class ForecastMain(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    temp: float
    humidity: int


class ForecastEntry(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    dt: int = Field(ge=0, le=MAX_TIMESTAMP)
    main: ForecastMain
    weather: list[WeatherDescriptor] = Field(min_length=1)


class ForecastPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", allow_inf_nan=False)

    entries: list[ForecastEntry] = Field(alias="list")
