from __future__ import annotations

from typing import Any

from .base import ResultsPanel


class HtmlViewSurface:
    """Holds region visibility for the server-rendered page.

    The Jinja2 templates read :meth:`context` and hide every region whose flag
    is off, so the page always mirrors the last transition the presenter made.
    """

    def __init__(self) -> None:
        self.loading_visible = False
        self.error_message: str | None = None
        self.results: ResultsPanel | None = None
        self.query = ""

    def set_loading(self, visible: bool) -> None:
        self.loading_visible = visible

    def set_error(self, message: str | None) -> None:
        self.error_message = message

    def set_results(self, panel: ResultsPanel | None) -> None:
        self.results = panel

    def clear_input(self) -> None:
        self.query = ""

    def remember_query(self, query: str) -> None:
        self.query = query

    @property
    def error_visible(self) -> bool:
        return self.error_message is not None

    @property
    def results_visible(self) -> bool:
        return self.results is not None

    def context(self) -> dict[str, Any]:
        return {
            "loading_visible": self.loading_visible,
            "error_visible": self.error_visible,
            "error_message": self.error_message,
            "results_visible": self.results_visible,
            "results": self.results,
            "query": self.query,
        }
