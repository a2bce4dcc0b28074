from .base import DayCard, ResultsPanel, ViewSurface
from .html import HtmlViewSurface

__all__ = ["DayCard", "HtmlViewSurface", "ResultsPanel", "ViewSurface"]
