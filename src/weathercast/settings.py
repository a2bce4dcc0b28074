from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal
from urllib.parse import urlparse
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigurationError

PROJECT_ROOT = Path(__file__).resolve().parents[2]

PLACEHOLDER_API_KEY = "YOUR_OPENWEATHERMAP_API_KEY"


class UiSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    title: str = "Weather"


class OpenWeatherSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    base_url: str = "https://api.openweathermap.org/data/2.5"
    geo_url: str = "https://api.openweathermap.org/geo/1.0"
    timeout_seconds: float = Field(default=10.0, ge=1, le=60)

    @field_validator("base_url", "geo_url")
    @classmethod
    def validate_url(cls, value: str) -> str:
        text = value.strip().rstrip("/")
        parsed = urlparse(text)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("openweather urls must be absolute http(s) URLs")
        return text


class ForecastSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    days: int = Field(default=5, ge=1, le=5)


class WeatherYamlSettings(BaseModel):
    model_config = ConfigDict(extra="ignore")

    ui: UiSettings = Field(default_factory=UiSettings)
    openweather: OpenWeatherSettings = Field(default_factory=OpenWeatherSettings)
    forecast: ForecastSettings = Field(default_factory=ForecastSettings)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    weather_env: Literal["dev", "test", "prod"] = "dev"
    weather_timezone: str = "UTC"
    weather_config_path: Path = Path("config/weathercast.yaml")
    weather_log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    openweather_api_key: str = ""

    @field_validator("weather_timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: {value}") from exc
        return value

    @field_validator("weather_log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: object) -> object:
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @field_validator("openweather_api_key")
    @classmethod
    def strip_api_key(cls, value: str) -> str:
        return value.strip()


class AppSettings(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    env: EnvSettings
    yaml: WeatherYamlSettings
    project_root: Path
    config_path: Path
    timezone: ZoneInfo

    @property
    def api_key_configured(self) -> bool:
        key = self.env.openweather_api_key
        return bool(key) and key != PLACEHOLDER_API_KEY

    def require_api_key(self) -> str:
        if not self.api_key_configured:
            raise ConfigurationError(
                "Error: Please set your OpenWeatherMap API key (OPENWEATHER_API_KEY)"
            )
        return self.env.openweather_api_key


def _resolve_project_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


def _load_yaml_settings(path: Path) -> WeatherYamlSettings:
    if not path.exists():
        raise FileNotFoundError(f"Weather config file not found: {path}")

    raw_config = yaml.safe_load(path.read_text(encoding="utf-8"))
    if raw_config is None:
        raw_config = {}
    if not isinstance(raw_config, dict):
        raise ValueError("Weather config must be a YAML mapping/object at the top level")
    return WeatherYamlSettings.model_validate(raw_config)


def build_settings(env: EnvSettings) -> AppSettings:
    config_path = _resolve_project_path(env.weather_config_path)
    return AppSettings(
        env=env,
        yaml=_load_yaml_settings(config_path),
        project_root=PROJECT_ROOT,
        config_path=config_path,
        timezone=ZoneInfo(env.weather_timezone),
    )


@lru_cache(maxsize=1)
def load_settings() -> AppSettings:
    return build_settings(EnvSettings())
