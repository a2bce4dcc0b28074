from __future__ import annotations

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field


class DayCard(BaseModel):
    model_config = ConfigDict(extra="ignore")

    date_label: str
    glyph: str
    temp_range: str
    description: str


class ResultsPanel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    location_label: str
    date_label: str
    coordinates: str | None = None
    glyph: str
    temperature_display: str
    description: str
    feels_like_display: str
    humidity_display: str
    wind_display: str
    pressure_display: str
    visibility_display: str
    uv_index_display: str = "N/A"
    day_cards: list[DayCard] = Field(default_factory=list)


class ViewSurface(Protocol):
    """The three mutually exclusive regions of the weather view, plus the search input."""

    def set_loading(self, visible: bool) -> None:
        """Show or hide the loading indicator."""

    def set_error(self, message: str | None) -> None:
        """Show the error banner with ``message``, or hide it when ``None``."""

    def set_results(self, panel: ResultsPanel | None) -> None:
        """Show the results panel, or hide it when ``None``."""

    def clear_input(self) -> None:
        """Empty the location field."""
