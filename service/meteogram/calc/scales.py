"""Continuous mappings from data values to plot pixels.

All scales are immutable. They are cheap to build and are rebuilt whenever
the rows or the viewport change.
"""

import datetime
import logging
import math
from typing import NamedTuple

import numpy as np

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import dates
from service.meteogram.base.errors import DegenerateViewportError, EmptyDatasetError

logger = logging.getLogger(__name__)

_E10 = math.sqrt(50)
_E5 = math.sqrt(10)
_E2 = math.sqrt(2)

# Candidate tick steps for time axes, in hours.
TIME_TICK_STEPS = [1, 3, 6, 12, 24, 48, 168]


def _is_missing(v) -> bool:
    return v is None or (isinstance(v, float) and math.isnan(v))


def tick_increment(start: float, stop: float, count: int) -> float:
    """Returns a "nice" tick step for count ticks between start and stop.

    Negative results denote the inverse of a fractional step (-10 means 0.1),
    which avoids floating point noise in the callers.
    """
    step = (stop - start) / max(0, count)
    power = math.floor(math.log10(step))
    error = step / math.pow(10, power)
    if error >= _E10:
        factor = 10
    elif error >= _E5:
        factor = 5
    elif error >= _E2:
        factor = 2
    else:
        factor = 1
    if power >= 0:
        return factor * math.pow(10, power)
    return -math.pow(10, -power) / factor


def nice_domain(start: float, stop: float, count: int = 10) -> tuple[float, float]:
    """Extends [start, stop] to round values, so that gridlines look clean.

    Example: (-3.2, 27.9) -> (-5, 30)
    """
    if stop < start:
        lo, hi = nice_domain(stop, start, count)
        return hi, lo
    if start == stop or count <= 0:
        return start, stop

    prestep = None
    for _ in range(10):
        step = tick_increment(start, stop, count)
        if step == prestep:
            break
        if step > 0:
            start = math.floor(start / step) * step
            stop = math.ceil(stop / step) * step
        elif step < 0:
            start = math.ceil(start * step) / step
            stop = math.floor(stop * step) / step
        else:
            break
        prestep = step
    return start, stop


class LinearScale:
    """A linear mapping from a numeric domain to a pixel range.

    Missing inputs (None, NaN) map to the start of the range. A degenerate
    domain (both ends equal) maps every value to the start of the range.
    """

    def __init__(
        self,
        domain: tuple[float, float],
        range: tuple[float, float],
        clamp: bool = False,
    ):
        self._d0, self._d1 = float(domain[0]), float(domain[1])
        self._r0, self._r1 = float(range[0]), float(range[1])
        self._clamp = clamp

    @property
    def domain(self) -> tuple[float, float]:
        return self._d0, self._d1

    @property
    def range(self) -> tuple[float, float]:
        return self._r0, self._r1

    def nice(self, count: int = 10) -> "LinearScale":
        return LinearScale(
            nice_domain(self._d0, self._d1, count), self.range, clamp=self._clamp
        )

    def __call__(self, value: float | None) -> float:
        if _is_missing(value) or self._d0 == self._d1:
            return self._r0
        t = (value - self._d0) / (self._d1 - self._d0)
        if self._clamp:
            t = min(max(t, 0.0), 1.0)
        return self._r0 + t * (self._r1 - self._r0)

    def invert(self, pixel: float | None) -> float:
        """Maps a pixel value back to the domain, clamped to the domain bounds."""
        if _is_missing(pixel) or self._r0 == self._r1:
            return self._d0
        t = (pixel - self._r0) / (self._r1 - self._r0)
        t = min(max(t, 0.0), 1.0)
        return self._d0 + t * (self._d1 - self._d0)

    def __repr__(self) -> str:
        return f"LinearScale(domain={self.domain}, range={self.range})"


class TimeScale:
    """A linear mapping from instants to pixels (over elapsed milliseconds)."""

    def __init__(
        self,
        start: datetime.datetime,
        end: datetime.datetime,
        range: tuple[float, float],
    ):
        self.start = start
        self.end = end
        self._linear = LinearScale((dates.to_millis(start), dates.to_millis(end)), range)

    @property
    def range(self) -> tuple[float, float]:
        return self._linear.range

    def __call__(self, instant: datetime.datetime | None) -> float:
        if instant is None:
            return self._linear.range[0]
        return self._linear(dates.to_millis(instant))

    def invert_millis(self, pixel: float | None) -> float:
        """Returns the epoch milliseconds at pixel, clamped to [start, end]."""
        return self._linear.invert(pixel)

    def invert(self, pixel: float | None) -> datetime.datetime:
        """Returns the instant at pixel, clamped to [start, end]."""
        return dates.from_millis(self.invert_millis(pixel), like=self.start)

    def contains(self, instant: datetime.datetime) -> bool:
        return self.start <= instant <= self.end

    def tick_step_hours(self, count: int = bc.TIME_AXIS_TICKS) -> int:
        """Picks the tick step geometrically closest to span / count."""
        span_hours = (self.end - self.start).total_seconds() / 3600
        target = span_hours / max(count, 1)
        i = 0
        while i < len(TIME_TICK_STEPS) and TIME_TICK_STEPS[i] <= target:
            i += 1
        if i == 0:
            return TIME_TICK_STEPS[0]
        if i == len(TIME_TICK_STEPS):
            return TIME_TICK_STEPS[-1]
        lo, hi = TIME_TICK_STEPS[i - 1], TIME_TICK_STEPS[i]
        return lo if target / lo < hi / target else hi

    def ticks(self, count: int = bc.TIME_AXIS_TICKS) -> list[datetime.datetime]:
        """Returns wall-clock aligned instants within [start, end]."""
        if self.end <= self.start:
            return []
        step = self.tick_step_hours(count)

        def aligned(t: datetime.datetime) -> bool:
            if step < 24:
                return t.hour % step == 0
            if not dates.is_midnight(t):
                return False
            if step == 168:
                return t.weekday() == 6  # Sundays
            return (t.day - 1) % (step // 24) == 0

        t = self.start.replace(minute=0, second=0, microsecond=0)
        if t < self.start:
            t += datetime.timedelta(hours=1)
        result = []
        while t <= self.end:
            if aligned(t):
                result.append(t)
            t += datetime.timedelta(hours=1)
        return result

    def __repr__(self) -> str:
        return f"TimeScale(start={self.start}, end={self.end}, range={self.range})"


class MeteogramScales(NamedTuple):
    time: TimeScale
    temperature: LinearScale
    precipitation: LinearScale
    cloud: LinearScale
    wind: LinearScale
    inner_width: float
    inner_height: float
    # Vertical center of the cloud band.
    cloud_center_y: float


def build_scales(
    rows: list[models.HourlyRow], viewport: models.Viewport
) -> MeteogramScales:
    """Derives all scales of the meteogram from rows and the viewport.

    Raises:
        EmptyDatasetError: if rows is empty.
        DegenerateViewportError: if the viewport leaves no room for a plot.
    """
    if not rows:
        raise EmptyDatasetError("Cannot build scales without rows")
    if viewport.is_degenerate():
        raise DegenerateViewportError(
            f"Viewport {viewport.width}x{viewport.height} is too small for a plot"
        )

    x_max = viewport.inner_width
    y_max = viewport.inner_height

    temps = np.array([r.temperature for r in rows], dtype=float)
    dews = np.array([r.dew_point for r in rows], dtype=float)
    precip = np.array([r.precipitation for r in rows], dtype=float)
    wind = np.array([r.wind_speed for r in rows], dtype=float)

    time_scale = TimeScale(rows[0].instant, rows[-1].instant, (0, x_max))

    temp_lo = float(np.nanmin(np.minimum(temps, dews))) - bc.TEMP_DOMAIN_PADDING
    temp_hi = float(np.nanmax(temps)) + bc.TEMP_DOMAIN_PADDING
    temp_scale = LinearScale((temp_lo, temp_hi), (y_max, 0)).nice()

    precip_scale = LinearScale(
        (0, max(float(np.nanmax(precip)), bc.PRECIP_DOMAIN_MIN_MAX)),
        (y_max, y_max * bc.PRECIP_BAND_TOP),
    )

    cloud_scale = LinearScale((0, 100), (0, bc.CLOUD_MAX_HALF_WIDTH))

    wind_scale = LinearScale(
        (0, max(bc.WIND_DOMAIN_MIN_MAX, float(np.nanmax(wind)))),
        (y_max, y_max * bc.WIND_BAND_TOP),
    )

    logger.debug(
        "Built scales for %d rows: temp=%s precip=%s wind=%s",
        len(rows),
        temp_scale.domain,
        precip_scale.domain,
        wind_scale.domain,
    )
    return MeteogramScales(
        time=time_scale,
        temperature=temp_scale,
        precipitation=precip_scale,
        cloud=cloud_scale,
        wind=wind_scale,
        inner_width=x_max,
        inner_height=y_max,
        cloud_center_y=y_max * bc.CLOUD_CENTER_FRACTION,
    )
