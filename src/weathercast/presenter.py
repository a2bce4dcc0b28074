from __future__ import annotations

import logging
from datetime import date, datetime

from .domain.models import CurrentConditions, DailyForecastSummary, ViewState, ViewStateKind
from .view.base import DayCard, ResultsPanel, ViewSurface

LOGGER = logging.getLogger(__name__)

DEFAULT_GLYPH = "🌤️"

CONDITION_GLYPHS = {
    "clear": "☀️",
    "clouds": "☁️",
    "rain": "🌧️",
    "drizzle": "🌦️",
    "thunderstorm": "⛈️",
    "snow": "❄️",
    "mist": "🌫️",
    "smoke": "💨",
    "haze": "🌫️",
    "dust": "🌪️",
    "fog": "🌫️",
    "sand": "🌪️",
    "ash": "💨",
    "squall": "💨",
    "tornado": "🌪️",
}


def glyph_for(category: str | None) -> str:
    if not category:
        return DEFAULT_GLYPH
    return CONDITION_GLYPHS.get(category.strip().lower(), DEFAULT_GLYPH)


def _format_long_date(value: datetime) -> str:
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def _format_card_date(value: date) -> str:
    return f"{value:%b} {value.day}"


def _format_coordinates(current: CurrentConditions) -> str | None:
    if current.latitude is None or current.longitude is None:
        return None
    return f"{current.latitude:.3f}, {current.longitude:.3f}"


def build_day_card(summary: DailyForecastSummary) -> DayCard:
    return DayCard(
        date_label=_format_card_date(summary.calendar_day),
        glyph=glyph_for(summary.condition_category),
        temp_range=f"{summary.high_temp}° / {summary.low_temp}°",
        description=summary.representative_description,
    )


def build_results_panel(
    current: CurrentConditions,
    forecast: list[DailyForecastSummary],
) -> ResultsPanel:
    return ResultsPanel(
        location_label=current.location_label,
        date_label=_format_long_date(current.observed_at),
        coordinates=_format_coordinates(current),
        glyph=glyph_for(current.condition_category),
        temperature_display=f"{current.temperature}°C",
        description=current.description,
        feels_like_display=f"{current.feels_like}°C",
        humidity_display=f"{current.humidity}%",
        wind_display=f"{current.wind_speed} km/h",
        pressure_display=f"{current.pressure} mb",
        visibility_display=f"{current.visibility} km",
        day_cards=[build_day_card(summary) for summary in forecast],
    )


class Presenter:
    """Owns the view state and keeps exactly one surface region visible.

    Every transition writes all three regions, hiding the two that do not
    belong to the new state, so a surface never keeps stale visibility from an
    earlier transition.
    """

    def __init__(self, surface: ViewSurface) -> None:
        self._surface = surface
        self._state = ViewState.idle()
        self._apply(loading=False, error=None, results=None)

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def surface(self) -> ViewSurface:
        return self._surface

    def _apply(
        self,
        *,
        loading: bool,
        error: str | None,
        results: ResultsPanel | None,
    ) -> None:
        visible = sum((loading, error is not None, results is not None))
        if visible > 1:
            raise RuntimeError("only one view region may be visible at a time")
        self._surface.set_loading(loading)
        self._surface.set_error(error)
        self._surface.set_results(results)

    def show_loading(self) -> None:
        self._state = ViewState.loading()
        self._apply(loading=True, error=None, results=None)

    def show_error(self, message: str) -> None:
        self._state = ViewState.error(message)
        self._apply(loading=False, error=message, results=None)

    def show_results(
        self,
        current: CurrentConditions,
        forecast: list[DailyForecastSummary],
    ) -> None:
        panel = build_results_panel(current, forecast)
        self._state = ViewState.displaying(current, forecast)
        self._apply(loading=False, error=None, results=panel)

    def clear_input(self) -> None:
        self._surface.clear_input()

    def visible_regions(self) -> dict[str, bool]:
        kind = self._state.kind
        return {
            "loading": kind is ViewStateKind.LOADING,
            "error": kind is ViewStateKind.ERROR,
            "results": kind is ViewStateKind.DISPLAYING,
        }
