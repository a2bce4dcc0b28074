from __future__ import annotations

from typing import Any, Protocol

from ...errors import WeatherFetchFailed


class WeatherFetcher(Protocol):
    async def fetch_current(self, lat: float, lon: float) -> dict[str, Any]:
        """Fetch the raw current-conditions payload for the provided coordinates."""

    async def fetch_forecast(self, lat: float, lon: float) -> dict[str, Any]:
        """Fetch the raw sub-daily forecast payload for the provided coordinates."""


__all__ = ["WeatherFetcher", "WeatherFetchFailed"]
