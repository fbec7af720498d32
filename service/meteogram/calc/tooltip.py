"""Maps pointer positions to the nearest hourly sample."""

import bisect
import logging

from service.meteogram import models
from service.meteogram.base import dates
from service.meteogram.base import units
from service.meteogram.calc.scales import MeteogramScales

logger = logging.getLogger(__name__)


def nearest_index(instants_ms: list[float], t_ms: float) -> int | None:
    """Returns the index of the sample closest to t_ms.

    instants_ms must be sorted. If t_ms is exactly halfway between two
    samples, the later one wins.
    """
    if not instants_ms:
        return None
    i = bisect.bisect_left(instants_ms, t_ms, lo=1)
    if i >= len(instants_ms):
        return i - 1
    before, after = instants_ms[i - 1], instants_ms[i]
    return i if t_ms - before >= after - t_ms else i - 1


class TooltipEngine:
    """Two-state machine (idle / active) driven by pointer events.

    Pointer x positions are in container coordinates, i.e. including the
    left margin. Every move recomputes the state from scratch.
    """

    def __init__(
        self,
        rows: list[models.HourlyRow],
        scales: MeteogramScales | None,
        margin: models.Margin,
    ):
        self._rows = rows
        self._scales = scales
        self._margin = margin
        self._instants_ms = [dates.to_millis(r.instant) for r in rows]
        self._state = models.TooltipState()

    @property
    def state(self) -> models.TooltipState:
        return self._state

    def pointer_move(self, x: float) -> models.TooltipState:
        scales = self._scales
        if scales is None or scales.inner_width <= 0 or not self._rows:
            self._state = models.TooltipState()
            return self._state

        t_ms = scales.time.invert_millis(x - self._margin.left)
        i = nearest_index(self._instants_ms, t_ms)
        row = self._rows[i]
        self._state = models.TooltipState(
            active_row=row,
            anchor_x=scales.time(row.instant) + self._margin.left,
            anchor_y=scales.temperature(row.temperature) + self._margin.top,
        )
        return self._state

    def pointer_leave(self) -> models.TooltipState:
        self._state = models.TooltipState()
        return self._state


def tooltip_lines(row: models.HourlyRow, unit_system: units.UnitSystem) -> list[str]:
    """Returns the text lines shown in the tooltip overlay for row."""
    return [
        dates.hour_minute(row.instant),
        f"Temp: {units.format_temp(row.temperature, unit_system)}°",
        f"Rain: {units.format_precip(row.precipitation, unit_system)}"
        f"{units.unit_label('precip', unit_system)}",
        f"Wind: {units.format_speed(row.wind_speed, unit_system)} "
        f"{units.unit_label('speed', unit_system)} "
        f"{units.wind_direction(row.wind_direction)}",
        f"Cloud: {units.js_round(row.cloud_cover)}%",
    ]
