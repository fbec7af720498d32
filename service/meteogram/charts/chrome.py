"""Chart chrome: night shading, grid, time axis, cursor and definitions."""

import datetime

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import dates
from service.meteogram.calc.night import night_intervals
from service.meteogram.calc.scales import MeteogramScales

from . import colors
from .layers import TEMP_FILL_GRADIENT, TEMP_STROKE_GRADIENT, wind_mask


def night_layer(
    daily: list[models.DailyRow],
    scales: MeteogramScales,
    height: float,
    chart_start: datetime.datetime | None = None,
) -> models.Layer:
    prims: list[models.Primitive] = [
        models.RectPrimitive(
            part="night-shading-rect",
            x=night.x0,
            y=0,
            width=night.width,
            height=height,
            style={"fill": colors.NIGHT, "fill-opacity": 0.2, "filter": "blur(16px)"},
        )
        for night in night_intervals(
            daily, scales.time, scales.inner_width, chart_start=chart_start
        )
    ]
    return models.Layer(name="night", primitives=prims)


def grid_layer(
    scales: MeteogramScales, tick_count: int = bc.TIME_AXIS_TICKS
) -> models.Layer:
    """Vertical grid lines; midnight lines are solid and stronger."""
    prims: list[models.Primitive] = []
    for t in scales.time.ticks(tick_count):
        x = scales.time(t)
        midnight = dates.is_midnight(t)
        style = {
            "stroke": colors.GRID_MIDNIGHT if midnight else colors.GRID_HOUR,
            "stroke-width": 1.5 if midnight else 1,
        }
        if not midnight:
            style["stroke-dasharray"] = "4 4"
        prims.append(
            models.LinePrimitive(
                part="grid-line-midnight" if midnight else "grid-line",
                x1=x,
                y1=0,
                x2=x,
                y2=scales.inner_height,
                style=style,
            )
        )
    return models.Layer(name="grid", primitives=prims)


def tick_label(t: datetime.datetime) -> str:
    """Weekday ("MON") at midnight, the hour ("14") otherwise."""
    if dates.is_midnight(t):
        return dates.weekday_abbr(t)
    return str(t.hour)


def time_axis_layer(
    scales: MeteogramScales,
    axis_height: float = bc.MARGIN_BOTTOM,
    tick_count: int = bc.TIME_AXIS_TICKS,
) -> models.Layer:
    prims: list[models.Primitive] = []
    for t in scales.time.ticks(tick_count):
        is_day = dates.is_midnight(t)
        prims.append(
            models.TextPrimitive(
                part="time-axis-label",
                x=scales.time(t) + 4,
                y=scales.inner_height + axis_height / 2,
                text=tick_label(t),
                anchor="start",
                style={
                    "fill": colors.AXIS_DAY if is_day else colors.AXIS_HOUR,
                    "font-size": 12 if is_day else 11,
                    "font-weight": 700 if is_day else 400,
                    "dominant-baseline": "central",
                },
            )
        )
    return models.Layer(name="time-axis", primitives=prims)


def current_time_layer(
    scales: MeteogramScales, now: datetime.datetime | None, height: float
) -> models.Layer:
    """A vertical marker at now, if now is within the chart's time range.

    now must already be comparable with the row instants.
    """
    prims: list[models.Primitive] = []
    if now is not None and scales.time.contains(now):
        x = scales.time(now)
        prims.append(
            models.LinePrimitive(
                part="current-time-line",
                x1=x,
                y1=0,
                x2=x,
                y2=height + 12,
                style={"stroke": colors.CURRENT_TIME, "stroke-width": 1},
            )
        )
    return models.Layer(name="current-time", primitives=prims)


def cursor_layer(
    tooltip: models.TooltipState, margin: models.Margin, scales: MeteogramScales
) -> models.Layer:
    """Dashed vertical line under an active tooltip."""
    prims: list[models.Primitive] = []
    if tooltip.is_active:
        x = tooltip.anchor_x - margin.left
        prims.append(
            models.LinePrimitive(
                part="cursor-line",
                x1=x,
                y1=0,
                x2=x,
                y2=scales.inner_height,
                style={
                    "stroke": colors.TEXT,
                    "stroke-width": 1,
                    "stroke-dasharray": "4 2",
                },
            )
        )
    return models.Layer(name="cursor", primitives=prims)


def chart_defs(
    rows: list[models.HourlyRow], scales: MeteogramScales, viewport: models.Viewport
) -> models.ChartDefs:
    """Gradients anchored at fixed temperatures, and the wind line mask."""
    y_hot = scales.temperature(bc.TEMP_GRADIENT_HOT)
    y_cold = scales.temperature(bc.TEMP_GRADIENT_COLD)
    return models.ChartDefs(
        gradients=[
            models.LinearGradient(
                id=TEMP_FILL_GRADIENT,
                y1=y_hot,
                y2=y_cold,
                from_color=colors.TEMP_HOT,
                to_color=colors.TEMP_COLD,
                from_opacity=0.2,
                to_opacity=0.05,
                user_space=True,
            ),
            models.LinearGradient(
                id=TEMP_STROKE_GRADIENT,
                y1=y_hot,
                y2=y_cold,
                from_color=colors.TEMP_HOT,
                to_color=colors.TEMP_COLD,
                user_space=True,
            ),
        ],
        masks=[wind_mask(rows, scales, viewport)],
    )
