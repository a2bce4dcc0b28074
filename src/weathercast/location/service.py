from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from ..domain.models import ResolvedLocation
from ..domain.payloads import GeocodingMatch
from ..errors import LocationNotFound, MalformedResponse

LOGGER = logging.getLogger(__name__)

OPENWEATHER_GEO_URL = "https://api.openweathermap.org/geo/1.0"
NOT_FOUND_MESSAGE = "Location not found"


class LocationResolver:
    """Turns a free-text place name into coordinates with the OpenWeatherMap geocoder."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        api_key: str,
        geo_url: str = OPENWEATHER_GEO_URL,
    ) -> None:
        self._client = client
        self._api_key = api_key
        self._geo_url = geo_url.rstrip("/")

    async def _fetch_matches(self, query: str) -> Any:
        params = {"q": query, "limit": 1, "appid": self._api_key}
        try:
            response = await self._client.get(f"{self._geo_url}/direct", params=params)
        except httpx.HTTPError as exc:
            raise LocationNotFound(NOT_FOUND_MESSAGE) from exc

        if response.status_code != httpx.codes.OK:
            LOGGER.warning("Geocoding for '%s' returned HTTP %s", query, response.status_code)
            raise LocationNotFound(NOT_FOUND_MESSAGE)

        try:
            return response.json()
        except ValueError as exc:
            raise MalformedResponse("Unexpected geocoding response shape") from exc

    async def resolve(self, query: str) -> ResolvedLocation:
        payload = await self._fetch_matches(query)
        if not isinstance(payload, list):
            raise MalformedResponse("Unexpected geocoding response shape")
        if not payload:
            raise LocationNotFound(NOT_FOUND_MESSAGE)

        try:
            match = GeocodingMatch.model_validate(payload[0])
            location = ResolvedLocation(
                latitude=match.lat,
                longitude=match.lon,
                display_name=match.name,
                country_code=match.country,
            )
        except ValidationError as exc:
            raise MalformedResponse("Unexpected geocoding response shape") from exc

        LOGGER.debug("Coordinates fetched: %s", location)
        return location
