"""Sunny daytime stretches, coalesced into highlight ranges."""

import datetime
from typing import NamedTuple

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.calc.scales import TimeScale


class SunnyRange(NamedTuple):
    # Indices of the first and last sunny row (inclusive).
    start: int
    end: int
    # Padded pixel span.
    x0: float
    x1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0


def is_sunny(row: models.HourlyRow, day: models.DailyRow | None) -> bool:
    """True for daylight hours (sunrise <= t <= sunset) that are not overcast."""
    if day is None:
        return False
    is_day = day.sunrise <= row.instant <= day.sunset
    sunniness = (100 - row.cloud_cover) / 100
    return is_day and sunniness > bc.SUNNY_MIN_SUNNINESS


def sunny_indices(
    rows: list[models.HourlyRow], daily: list[models.DailyRow]
) -> list[int]:
    days: dict[datetime.date, models.DailyRow] = {d.date: d for d in daily}
    return [
        i for i, row in enumerate(rows) if is_sunny(row, days.get(row.instant.date()))
    ]


def group_consecutive(indices: list[int]) -> list[tuple[int, int]]:
    """Groups sorted indices into closed [start, end] runs of consecutive values.

    Example: [1, 2, 3, 7, 9, 10] -> [(1, 3), (7, 7), (9, 10)]
    """
    runs = []
    for i in indices:
        if runs and i == runs[-1][1] + 1:
            runs[-1] = (runs[-1][0], i)
        else:
            runs.append((i, i))
    return runs


def sunny_ranges(
    rows: list[models.HourlyRow],
    daily: list[models.DailyRow],
    time_scale: TimeScale,
    plot_width: float,
) -> list[SunnyRange]:
    """Returns one padded highlight range per run of consecutive sunny hours.

    Each range is widened on both sides by half of 1.5 average hour widths so
    that the run reads as one continuous shape.
    """
    if not rows or not daily:
        return []
    pill_width = (plot_width / bc.SUNNY_PILL_HOURS) * bc.SUNNY_PILL_WIDTH_HOURS
    padding = pill_width / 2
    result = []
    for start, end in group_consecutive(sunny_indices(rows, daily)):
        x0 = time_scale(rows[start].instant) - padding
        x1 = time_scale(rows[end].instant) + padding
        result.append(SunnyRange(start=start, end=end, x0=x0, x1=x1))
    return result
