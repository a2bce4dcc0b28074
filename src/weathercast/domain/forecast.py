from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime, timezone, tzinfo

from ..errors import MalformedResponse
from .models import DailyForecastSummary, ForecastSample

LOGGER = logging.getLogger(__name__)

MAX_FORECAST_DAYS = 5


def _calendar_day(sample: ForecastSample, tz: tzinfo) -> date:
    return datetime.fromtimestamp(sample.timestamp_seconds, tz=tz).date()


def group_samples_by_day(
    samples: Iterable[ForecastSample],
    *,
    tz: tzinfo = timezone.utc,
) -> dict[date, list[ForecastSample]]:
    # dict preserves insertion order, so days come out in first-seen order.
    groups: dict[date, list[ForecastSample]] = {}
    for sample in samples:
        groups.setdefault(_calendar_day(sample, tz), []).append(sample)
    return groups


def summarize_day(day: date, samples: list[ForecastSample]) -> DailyForecastSummary:
    if not samples:
        raise ValueError("cannot summarize a day without samples")

    temps = [sample.temperature for sample in samples]
    first = samples[0]
    return DailyForecastSummary(
        calendar_day=day,
        high_temp=round(max(temps)),
        low_temp=round(min(temps)),
        condition_category=first.condition_category,
        representative_description=first.condition_main,
    )


def aggregate_forecast(
    samples: Iterable[ForecastSample],
    *,
    tz: tzinfo = timezone.utc,
    max_days: int = MAX_FORECAST_DAYS,
) -> list[DailyForecastSummary]:
    """Reduce sub-daily samples to at most ``max_days`` per-day summaries.

    Days keep the order in which they first appear in ``samples``, which is not
    necessarily calendar order. Condition and description are taken from each
    day's first sample. Partial days at either end are kept as they are.
    """
    try:
        groups = group_samples_by_day(samples, tz=tz)
    except (ValueError, OverflowError, OSError) as exc:
        raise MalformedResponse("Forecast timestamp out of range") from exc
    summaries = [
        summarize_day(day, day_samples)
        for day, day_samples in list(groups.items())[: max(max_days, 0)]
    ]
    LOGGER.debug("Processed forecast: %d day(s) from %d group(s)", len(summaries), len(groups))
    return summaries
