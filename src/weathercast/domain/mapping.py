from __future__ import annotations

import logging
from datetime import datetime, timezone, tzinfo
from typing import Any

from pydantic import ValidationError

from ..errors import MalformedResponse
from .models import CurrentConditions, ForecastSample, ResolvedLocation
from .payloads import CurrentWeatherPayload, ForecastPayload

LOGGER = logging.getLogger(__name__)

MS_TO_KMH = 3.6
METERS_PER_KM = 1000


def _format_label(city: str, country: str) -> str:
    city_text = city.strip()
    country_text = country.strip()
    if city_text and country_text:
        return f"{city_text}, {country_text}"
    return city_text or country_text


def map_current_conditions(
    raw: Any,
    location: ResolvedLocation,
    *,
    tz: tzinfo = timezone.utc,
) -> CurrentConditions:
    """Normalize a raw current-weather payload for display.

    The label is built from the payload's own ``name``/``sys.country`` fields
    rather than from ``location``, since the weather service reports its own
    canonical station name. Points without a named station (open water) fall
    back to the resolved location's name. ``location`` also contributes the
    coordinates.
    """
    try:
        payload = CurrentWeatherPayload.model_validate(raw)
    except ValidationError as exc:
        raise MalformedResponse("Unexpected current weather response shape") from exc

    condition = payload.weather[0]
    try:
        conditions = CurrentConditions(
            location_label=_format_label(payload.name, payload.sys.country) or location.display_name,
            temperature=round(payload.main.temp),
            feels_like=round(payload.main.feels_like),
            description=condition.description,
            condition_category=condition.main.lower(),
            humidity=payload.main.humidity,
            wind_speed=round(payload.wind.speed * MS_TO_KMH),
            pressure=payload.main.pressure,
            visibility=round(payload.visibility / METERS_PER_KM),
            observed_at=datetime.fromtimestamp(payload.dt, tz=tz),
            latitude=location.latitude,
            longitude=location.longitude,
        )
    except (ValueError, OverflowError, OSError) as exc:
        raise MalformedResponse("Unexpected current weather values") from exc
    LOGGER.debug("Processed current weather: %s", conditions)
    return conditions


def parse_forecast_samples(raw: Any) -> list[ForecastSample]:
    try:
        payload = ForecastPayload.model_validate(raw)
    except ValidationError as exc:
        raise MalformedResponse("Unexpected forecast response shape") from exc

    return [
        ForecastSample(
            timestamp_seconds=entry.dt,
            temperature=entry.main.temp,
            condition_category=entry.weather[0].main.lower(),
            condition_main=entry.weather[0].main,
            humidity=entry.main.humidity,
        )
        for entry in payload.entries
    ]
