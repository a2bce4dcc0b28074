from datetime import date, datetime, timezone

import pytest

from weathercast.domain.models import CurrentConditions, DailyForecastSummary, ViewStateKind
from weathercast.presenter import CONDITION_GLYPHS, DEFAULT_GLYPH, Presenter, glyph_for
from weathercast.view.html import HtmlViewSurface


class RecordingSurface(HtmlViewSurface):
    def __init__(self):
        super().__init__()
        self.calls = []

    def set_loading(self, visible):
        self.calls.append(("loading", visible))
        super().set_loading(visible)

    def set_error(self, message):
        self.calls.append(("error", message))
        super().set_error(message)

    def set_results(self, panel):
        self.calls.append(("results", panel))
        super().set_results(panel)

    def clear_input(self):
        self.calls.append(("clear_input", None))
        super().clear_input()

    def visible_count(self):
        return sum((self.loading_visible, self.error_visible, self.results_visible))


@pytest.fixture
def current() -> CurrentConditions:
    return CurrentConditions(
        location_label="Paris, FR",
        temperature=22,
        feels_like=20,
        description="overcast clouds",
        condition_category="clouds",
        humidity=55,
        wind_speed=19,
        pressure=1012,
        visibility=8,
        observed_at=datetime(2023, 11, 14, 22, 13, 20, tzinfo=timezone.utc),
        latitude=48.8566,
        longitude=2.3522,
    )


@pytest.fixture
def forecast() -> list[DailyForecastSummary]:
    return [
        DailyForecastSummary(
            calendar_day=date(2023, 11, 14),
            high_temp=15,
            low_temp=10,
            condition_category="rain",
            representative_description="Rain",
        ),
        DailyForecastSummary(
            calendar_day=date(2023, 11, 15),
            high_temp=9,
            low_temp=5,
            condition_category="volcano",
            representative_description="Volcano",
        ),
    ]


def test_glyph_table_has_fifteen_categories():
    assert len(CONDITION_GLYPHS) == 15
    assert glyph_for("clear") == "☀️"
    assert glyph_for("Thunderstorm") == "⛈️"
    assert glyph_for("volcano") == DEFAULT_GLYPH
    assert glyph_for(None) == DEFAULT_GLYPH


def test_presenter_starts_idle_with_all_regions_hidden():
    surface = RecordingSurface()
    presenter = Presenter(surface)

    assert presenter.state.kind is ViewStateKind.IDLE
    assert surface.visible_count() == 0
    assert presenter.visible_regions() == {"loading": False, "error": False, "results": False}


def test_each_transition_shows_exactly_one_region(current, forecast):
    surface = RecordingSurface()
    presenter = Presenter(surface)

    presenter.show_results(current, forecast)
    assert surface.results_visible
    assert surface.visible_count() == 1

    presenter.show_loading()
    assert surface.loading_visible
    assert surface.visible_count() == 1
    assert presenter.state.kind is ViewStateKind.LOADING

    presenter.show_error("❌ Location not found")
    assert surface.error_message == "❌ Location not found"
    assert surface.visible_count() == 1
    assert presenter.state.message == "❌ Location not found"

    presenter.show_loading()
    assert not surface.error_visible
    assert surface.visible_count() == 1


def test_every_transition_writes_all_three_regions():
    surface = RecordingSurface()
    presenter = Presenter(surface)
    surface.calls.clear()

    presenter.show_error("boom")

    assert [name for name, _ in surface.calls] == ["loading", "error", "results"]
    assert surface.calls[0] == ("loading", False)
    assert surface.calls[2] == ("results", None)


def test_results_panel_formatting(current, forecast):
    surface = RecordingSurface()
    presenter = Presenter(surface)

    presenter.show_results(current, forecast)
    panel = surface.results

    assert panel.location_label == "Paris, FR"
    assert panel.date_label == "Tuesday, November 14, 2023"
    assert panel.coordinates == "48.857, 2.352"
    assert panel.glyph == "☁️"
    assert panel.temperature_display == "22°C"
    assert panel.feels_like_display == "20°C"
    assert panel.humidity_display == "55%"
    assert panel.wind_display == "19 km/h"
    assert panel.pressure_display == "1012 mb"
    assert panel.visibility_display == "8 km"
    assert panel.uv_index_display == "N/A"

    first, second = panel.day_cards
    assert first.date_label == "Nov 14"
    assert first.glyph == "🌧️"
    assert first.temp_range == "15° / 10°"
    assert first.description == "Rain"
    assert second.glyph == DEFAULT_GLYPH

    assert presenter.state.report.current == current
    assert presenter.state.report.forecast == forecast


def test_clear_input_empties_query():
    surface = RecordingSurface()
    surface.remember_query("Paris")
    presenter = Presenter(surface)

    presenter.clear_input()

    assert surface.query == ""
