"""Night shading intervals from daily sunrise/sunset times."""

import datetime
import logging
from typing import NamedTuple

from service.meteogram import models
from service.meteogram.calc.scales import TimeScale

logger = logging.getLogger(__name__)


class NightInterval(NamedTuple):
    start: datetime.datetime
    end: datetime.datetime
    # Pixel span, clipped to [0, x_max].
    x0: float
    x1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0


def _clipped(
    start: datetime.datetime,
    end: datetime.datetime,
    time_scale: TimeScale,
    x_max: float,
) -> NightInterval | None:
    x_start = time_scale(start)
    x_end = time_scale(end)
    if x_start >= x_max or x_end <= 0:
        return None
    x0 = max(0.0, x_start)
    x1 = min(x_max, x_end)
    if x1 - x0 <= 0:
        return None
    return NightInterval(start=start, end=end, x0=x0, x1=x1)


def night_intervals(
    daily: list[models.DailyRow],
    time_scale: TimeScale,
    x_max: float,
    chart_start: datetime.datetime | None = None,
) -> list[NightInterval]:
    """Returns the nights (sunset to next sunrise) visible on the chart.

    If the chart starts before the first sunrise, the stretch from chart_start
    to that sunrise is returned as an additional (first) interval.

    Intervals are in chronological order and never overlap.
    """
    if not daily:
        return []
    if chart_start is None:
        chart_start = time_scale.start

    result = []
    if chart_start < daily[0].sunrise:
        early = _clipped(chart_start, daily[0].sunrise, time_scale, x_max)
        if early:
            result.append(early)

    for today, tomorrow in zip(daily, daily[1:]):
        night = _clipped(today.sunset, tomorrow.sunrise, time_scale, x_max)
        if night:
            result.append(night)

    logger.debug("Found %d night intervals for %d days", len(result), len(daily))
    return result
