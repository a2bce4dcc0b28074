from __future__ import annotations

import asyncio
import logging

from .adapters.weather import WeatherFetcher
from .domain.forecast import aggregate_forecast
from .domain.mapping import map_current_conditions, parse_forecast_samples
from .domain.models import ViewState, WeatherReport
from .errors import WeatherAppError
from .location.service import LocationResolver
from .presenter import Presenter
from .settings import AppSettings

LOGGER = logging.getLogger(__name__)

ERROR_PREFIX = "❌"


class SearchOrchestrator:
    """Runs one location search from submission to a terminal view state.

    A new submission supersedes any search still in flight: the older search
    is cancelled and makes no further transition, and its caller receives the
    terminal state of the search that replaced it.
    """

    def __init__(
        self,
        settings: AppSettings,
        resolver: LocationResolver,
        fetcher: WeatherFetcher,
        presenter: Presenter,
    ) -> None:
        self._settings = settings
        self._resolver = resolver
        self._fetcher = fetcher
        self._presenter = presenter
        self._inflight: asyncio.Task[ViewState] | None = None

    @property
    def state(self) -> ViewState:
        return self._presenter.state

    @property
    def presenter(self) -> Presenter:
        return self._presenter

    async def lookup(self, query: str) -> WeatherReport:
        location_query = query.strip()
        if not location_query:
            raise ValueError("location query must not be empty")

        self._settings.require_api_key()
        location = await self._resolver.resolve(location_query)

        current_task = asyncio.ensure_future(
            self._fetcher.fetch_current(location.latitude, location.longitude)
        )
        forecast_task = asyncio.ensure_future(
            self._fetcher.fetch_forecast(location.latitude, location.longitude)
        )
        try:
            raw_current, raw_forecast = await asyncio.gather(current_task, forecast_task)
        except BaseException:
            for task in (current_task, forecast_task):
                task.cancel()
            raise

        timezone = self._settings.timezone
        current = map_current_conditions(raw_current, location, tz=timezone)
        forecast = aggregate_forecast(
            parse_forecast_samples(raw_forecast),
            tz=timezone,
            max_days=self._settings.yaml.forecast.days,
        )
        return WeatherReport(current=current, forecast=forecast)

    async def _run_search(self, location_query: str) -> ViewState:
        LOGGER.info("Searching weather for '%s'", location_query)
        try:
            self._settings.require_api_key()
        except WeatherAppError as exc:
            LOGGER.error("OpenWeatherMap API key is not configured")
            self._presenter.show_error(f"{ERROR_PREFIX} {exc}")
            return self._presenter.state

        self._presenter.show_loading()
        try:
            report = await self.lookup(location_query)
        except WeatherAppError as exc:
            LOGGER.warning("Search for '%s' failed: %s", location_query, exc, exc_info=True)
            self._presenter.show_error(f"{ERROR_PREFIX} {exc}")
            return self._presenter.state

        self._presenter.show_results(report.current, report.forecast)
        self._presenter.clear_input()
        LOGGER.info("Search for '%s' displayed %d forecast day(s)", location_query, len(report.forecast))
        return self._presenter.state

    async def submit(self, query: str) -> ViewState:
        location_query = query.strip()
        if not location_query:
            return self._presenter.state

        previous = self._inflight
        if previous is not None and not previous.done():
            LOGGER.info("Superseding in-flight search")
            previous.cancel()

        task = asyncio.ensure_future(self._run_search(location_query))
        self._inflight = task
        waiting = task
        try:
            while True:
                try:
                    if waiting is task:
                        return await task
                    return await asyncio.shield(waiting)
                except asyncio.CancelledError:
                    if not waiting.cancelled() or self._inflight is waiting:
                        raise
                    if self._inflight is None:
                        return self._presenter.state
                    # Superseded: report the terminal state of the search that replaced this one.
                    waiting = self._inflight
        finally:
            if self._inflight is task and task.done():
                self._inflight = None
