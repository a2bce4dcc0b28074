from __future__ import annotations

from pathlib import Path
from zoneinfo import ZoneInfo

import httpx
import pytest

from weathercast.settings import AppSettings, EnvSettings, WeatherYamlSettings

# 2023-11-14T00:00:00Z
DAY_ONE_MIDNIGHT_UTC = 1699920000
HOUR = 3600
DAY = 24 * HOUR


def make_settings(
    *,
    api_key: str = "test-key",
    timezone_name: str = "UTC",
    forecast_days: int = 5,
) -> AppSettings:
    env = EnvSettings(
        openweather_api_key=api_key,
        weather_timezone=timezone_name,
        weather_env="test",
    )
    yaml_settings = WeatherYamlSettings.model_validate({"forecast": {"days": forecast_days}})
    return AppSettings(
        env=env,
        yaml=yaml_settings,
        project_root=Path("."),
        config_path=Path("config/weathercast.yaml"),
        timezone=ZoneInfo(timezone_name),
    )


def forecast_entry(dt: int, temp: float, main: str = "Clouds", humidity: int = 60) -> dict:
    return {
        "dt": dt,
        "main": {"temp": temp, "humidity": humidity, "feels_like": temp - 1},
        "weather": [{"main": main, "description": main.lower()}],
    }


@pytest.fixture
def settings() -> AppSettings:
    return make_settings()


@pytest.fixture
def current_payload() -> dict:
    return {
        "name": "Paris",
        "dt": 1700000000,
        "visibility": 8500,
        "main": {"temp": 21.6, "feels_like": 20.4, "humidity": 55, "pressure": 1012},
        "wind": {"speed": 5.2, "deg": 180},
        "sys": {"country": "FR"},
        "weather": [{"id": 804, "main": "Clouds", "description": "overcast clouds"}],
    }


@pytest.fixture
def forecast_payload() -> dict:
    return {
        "cod": "200",
        "list": [
            forecast_entry(DAY_ONE_MIDNIGHT_UTC, 10, "Rain"),
            forecast_entry(DAY_ONE_MIDNIGHT_UTC + 3 * HOUR, 15, "Clouds"),
            forecast_entry(DAY_ONE_MIDNIGHT_UTC + 6 * HOUR, 12, "Clear"),
            forecast_entry(DAY_ONE_MIDNIGHT_UTC + DAY, 5, "Snow"),
            forecast_entry(DAY_ONE_MIDNIGHT_UTC + DAY + 3 * HOUR, 9, "Clouds"),
        ],
    }


@pytest.fixture
def geocoding_payload() -> list:
    return [{"name": "Paris", "lat": 48.8566, "lon": 2.3522, "country": "FR", "state": "Ile-de-France"}]


@pytest.fixture
def openweather_transport(current_payload, forecast_payload, geocoding_payload):
    """Mock OpenWeatherMap: "Nowhere" geocodes to nothing, everything else to Paris."""
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        path = request.url.path
        if path.endswith("/geo/1.0/direct"):
            if request.url.params.get("q") == "Nowhere":
                return httpx.Response(200, json=[])
            return httpx.Response(200, json=geocoding_payload)
        if path.endswith("/data/2.5/weather"):
            return httpx.Response(200, json=current_payload)
        if path.endswith("/data/2.5/forecast"):
            return httpx.Response(200, json=forecast_payload)
        return httpx.Response(404, json={"cod": "404", "message": "not found"})

    transport = httpx.MockTransport(handler)
    transport.calls = calls
    return transport
