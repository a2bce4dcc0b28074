from __future__ import annotations

import logging
from typing import Any

import httpx

from ...errors import MalformedResponse
from .base import WeatherFetchFailed

LOGGER = logging.getLogger(__name__)

OPENWEATHER_BASE_URL = "https://api.openweathermap.org/data/2.5"
UNITS = "metric"


class OpenWeatherMapFetcher:
    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str,
        base_url: str = OPENWEATHER_BASE_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def _fetch_json(self, endpoint: str, lat: float, lon: float, *, failure: str) -> dict[str, Any]:
        params = {"lat": lat, "lon": lon, "units": UNITS, "appid": self._api_key}
        try:
            response = await self._client.get(f"{self._base_url}/{endpoint}", params=params)
        except httpx.HTTPError as exc:
            raise WeatherFetchFailed(failure) from exc

        if response.status_code != httpx.codes.OK:
            LOGGER.warning("OpenWeatherMap /%s returned HTTP %s", endpoint, response.status_code)
            raise WeatherFetchFailed(failure)

        try:
            payload = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Unexpected OpenWeatherMap /{endpoint} response shape") from exc

        if not isinstance(payload, dict):
            raise MalformedResponse(f"Unexpected OpenWeatherMap /{endpoint} response shape")
        return payload

    async def fetch_current(self, lat: float, lon: float) -> dict[str, Any]:
        payload = await self._fetch_json("weather", lat, lon, failure="Failed to fetch weather")
        LOGGER.debug("Current weather fetched: %s", payload)
        return payload

    async def fetch_forecast(self, lat: float, lon: float) -> dict[str, Any]:
        payload = await self._fetch_json("forecast", lat, lon, failure="Failed to fetch forecast")
        LOGGER.debug("Forecast fetched: %d sample(s)", len(payload.get("list") or []))
        return payload
