from __future__ import annotations

import logging
import logging.config
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import httpx
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .adapters.weather import OpenWeatherMapFetcher
from .errors import ConfigurationError, LocationNotFound, MalformedResponse, WeatherFetchFailed
from .location.service import LocationResolver
from .orchestrator import SearchOrchestrator
from .presenter import Presenter
from .sessions import SESSION_COOKIE, SessionRegistry
from .settings import AppSettings, load_settings
from .view.html import HtmlViewSurface

LOGGER = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
WEB_DIR = BASE_DIR / "web"
TEMPLATES_DIR = WEB_DIR / "templates"
STATIC_DIR = WEB_DIR / "static"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))

ERROR_STATUS_CODES = {
    ConfigurationError: 503,
    LocationNotFound: 404,
    WeatherFetchFailed: 502,
    MalformedResponse: 502,
}


def configure_logging(level: str) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                    "level": level,
                },
            },
            "root": {
                "handlers": ["console"],
                "level": level,
            },
        }
    )


def build_orchestrator(settings: AppSettings, client: httpx.AsyncClient) -> SearchOrchestrator:
    api_key = settings.env.openweather_api_key
    resolver = LocationResolver(
        client,
        api_key=api_key,
        geo_url=settings.yaml.openweather.geo_url,
    )
    fetcher = OpenWeatherMapFetcher(
        client,
        api_key=api_key,
        base_url=settings.yaml.openweather.base_url,
    )
    presenter = Presenter(HtmlViewSurface())
    return SearchOrchestrator(settings, resolver, fetcher, presenter)


def _get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def _get_session(request: Request) -> SearchOrchestrator:
    registry: SessionRegistry = request.app.state.sessions
    session_id, orchestrator = registry.get(request.cookies.get(SESSION_COOKIE))
    request.state.session_id = session_id
    return orchestrator


def _page_context(request: Request, orchestrator: SearchOrchestrator) -> dict[str, Any]:
    settings = _get_settings(request)
    surface: HtmlViewSurface = orchestrator.presenter.surface
    return {
        "request": request,
        "title": settings.yaml.ui.title,
        "api_key_configured": settings.api_key_configured,
        "state": orchestrator.state.kind.value,
        **surface.context(),
    }


def _render(request: Request, name: str, context: dict[str, Any]) -> HTMLResponse:
    response = templates.TemplateResponse(request, name, context)
    response.set_cookie(SESSION_COOKIE, request.state.session_id, httponly=True, samesite="lax")
    return response


def create_app(
    settings: AppSettings | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(application: FastAPI):
        app_settings = settings or load_settings()
        configure_logging(app_settings.env.weather_log_level)
        if not app_settings.api_key_configured:
            LOGGER.warning("OPENWEATHER_API_KEY is not set; searches will fail until it is configured")

        client = httpx.AsyncClient(
            timeout=app_settings.yaml.openweather.timeout_seconds,
            headers={"User-Agent": "weathercast/0.1"},
            transport=transport,
        )
        application.state.settings = app_settings
        application.state.client = client
        application.state.orchestrator = build_orchestrator(app_settings, client)
        application.state.sessions = SessionRegistry(lambda: build_orchestrator(app_settings, client))
        application.state.started_at_utc = datetime.now(timezone.utc)
        LOGGER.info("Weather app loaded")

        try:
            yield
        finally:
            await client.aclose()

    application = FastAPI(title="Weathercast", version="0.1.0", lifespan=lifespan)
    application.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

    @application.get("/", response_class=HTMLResponse)
    async def index_page(request: Request) -> HTMLResponse:
        orchestrator = _get_session(request)
        return _render(request, "index.html", _page_context(request, orchestrator))

    @application.get("/search", response_class=HTMLResponse)
    async def search(request: Request, location: str = "") -> HTMLResponse:
        orchestrator = _get_session(request)
        surface: HtmlViewSurface = orchestrator.presenter.surface
        if location.strip():
            surface.remember_query(location)
        await orchestrator.submit(location)

        if request.headers.get("HX-Request") == "true":
            return _render(
                request,
                "components/weather_regions.html",
                {**_page_context(request, orchestrator), "oob_input": True},
            )
        return _render(request, "index.html", _page_context(request, orchestrator))

    @application.get("/partials/weather", response_class=HTMLResponse)
    async def partial_weather(request: Request) -> HTMLResponse:
        orchestrator = _get_session(request)
        return _render(request, "components/weather_regions.html", _page_context(request, orchestrator))

    @application.get("/api/weather", response_class=JSONResponse)
    async def weather_api(request: Request, location: str = "") -> JSONResponse:
        if not location.strip():
            raise HTTPException(status_code=400, detail="location must not be empty")

        orchestrator: SearchOrchestrator = request.app.state.orchestrator
        try:
            report = await orchestrator.lookup(location)
        except (ConfigurationError, LocationNotFound, WeatherFetchFailed, MalformedResponse) as exc:
            LOGGER.warning("API lookup for '%s' failed: %s", location, exc)
            raise HTTPException(status_code=ERROR_STATUS_CODES[type(exc)], detail=str(exc)) from exc
        return JSONResponse(report.model_dump(mode="json"))

    @application.get("/health", response_class=JSONResponse)
    async def health(request: Request) -> JSONResponse:
        app_settings = _get_settings(request)
        return JSONResponse(
            {
                "status": "ok",
                "service": "weathercast",
                "environment": app_settings.env.weather_env,
                "timezone": app_settings.env.weather_timezone,
                "api_key_configured": app_settings.api_key_configured,
                "active_sessions": len(request.app.state.sessions),
                "started_at_utc": request.app.state.started_at_utc.isoformat(),
                "timestamp_utc": datetime.now(timezone.utc).isoformat(),
            }
        )

    return application


app = create_app()
