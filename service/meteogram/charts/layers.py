"""Visual layers of the meteogram.

Each layer is a pure function of the rows and the scales. Layers share no
state, so they can be evaluated in any order.
"""

import pandas as pd

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import units
from service.meteogram.calc import jitter
from service.meteogram.calc import precip
from service.meteogram.calc.scales import MeteogramScales
from service.meteogram.calc.sunny import sunny_ranges

from . import colors
from .curves import area_path, line_path

TEMP_FILL_GRADIENT = "temp-fill-gradient"
TEMP_STROKE_GRADIENT = "temp-stroke-gradient"
WIND_LINE_MASK = "wind-line-mask"


def _xs(rows: list[models.HourlyRow], scales: MeteogramScales) -> list[float]:
    return [scales.time(r.instant) for r in rows]


def daily_extremes(rows: list[models.HourlyRow]) -> list[tuple[int, int]]:
    """Returns (index of max, index of min) temperature per day of month.

    Days are in order of first appearance. Ties go to the earliest row.
    """
    if not rows:
        return []
    df = pd.DataFrame(
        {
            "day": [r.instant.day for r in rows],
            "temp": [r.temperature for r in rows],
        }
    )
    grouped = df.groupby("day", sort=False)["temp"]
    return list(zip(grouped.idxmax().tolist(), grouped.idxmin().tolist()))


def temperature_layer(
    rows: list[models.HourlyRow],
    scales: MeteogramScales,
    unit_system: units.UnitSystem = units.METRIC,
) -> models.Layer:
    xs = _xs(rows, scales)
    temp_ys = [scales.temperature(r.temperature) for r in rows]
    dew_ys = [scales.temperature(r.dew_point) for r in rows]
    y_max = scales.inner_height

    prims: list[models.Primitive] = [
        models.PathPrimitive(
            part="dew-point-line",
            d=line_path(zip(xs, dew_ys)),
            style={
                "fill": "none",
                "stroke": colors.DEW_POINT,
                "stroke-width": 2,
                "stroke-dasharray": "2 4",
                "stroke-opacity": 0.8,
            },
        ),
        models.PathPrimitive(
            part="temp-area",
            d=area_path(xs, [y_max] * len(xs), temp_ys),
            style={"fill": f"url(#{TEMP_FILL_GRADIENT})", "stroke": "transparent"},
        ),
        models.PathPrimitive(
            part="temp-line",
            d=line_path(zip(xs, temp_ys)),
            style={
                "fill": "none",
                "stroke": f"url(#{TEMP_STROKE_GRADIENT})",
                "stroke-width": 3,
            },
        ),
    ]

    label_style = {"fill": colors.TEXT, "font-size": 12, "font-weight": "bold"}
    for i_max, i_min in daily_extremes(rows):
        for typ, i, dy in [("max", i_max, -10), ("min", i_min, 20)]:
            prims.append(
                models.TextPrimitive(
                    part=f"temp-label-{typ}",
                    x=xs[i],
                    y=temp_ys[i] + dy,
                    text=f"{units.format_temp(rows[i].temperature, unit_system)}°",
                    style=label_style,
                )
            )
    return models.Layer(name="temperature", primitives=prims)


def precipitation_layer(
    rows: list[models.HourlyRow], scales: MeteogramScales
) -> models.Layer:
    """One bar per precipitating hour, split into a liquid and a solid part."""
    y_max = scales.inner_height
    half = bc.PRECIP_BAR_WIDTH / 2
    prims: list[models.Primitive] = []
    for row in rows:
        bar_h = y_max - scales.precipitation(row.precipitation)
        if bar_h <= 0:
            continue
        x = scales.time(row.instant) - half
        liquid_h, solid_h = precip.split_bar(bar_h, precip.row_snow_ratio(row))
        if liquid_h > 0:
            prims.append(
                models.RectPrimitive(
                    part="precip-bar-liquid",
                    x=x,
                    y=y_max - liquid_h,
                    width=bc.PRECIP_BAR_WIDTH,
                    height=liquid_h,
                    rx=2,
                    style={"fill": colors.RAIN, "fill-opacity": 0.3},
                )
            )
        if solid_h > 0:
            prims.append(
                models.RectPrimitive(
                    part="precip-bar-solid",
                    x=x,
                    y=y_max - bar_h,
                    width=bc.PRECIP_BAR_WIDTH,
                    height=solid_h,
                    rx=2,
                    style={"fill": colors.SNOW, "fill-opacity": 0.5},
                )
            )
    return models.Layer(name="precipitation", primitives=prims)


def _wind_marker_rows(rows: list[models.HourlyRow]):
    return [(i, r) for i, r in enumerate(rows) if i % bc.WIND_MARKER_EVERY == 0]


def wind_mask(
    rows: list[models.HourlyRow], scales: MeteogramScales, viewport: models.Viewport
) -> models.Mask:
    """Knocks circular holes into the wind line where markers are drawn."""
    return models.Mask(
        id=WIND_LINE_MASK,
        width=viewport.width,
        height=viewport.height,
        holes=[
            models.CirclePrimitive(
                part="wind-mask-circle",
                cx=scales.time(r.instant),
                cy=scales.wind(r.wind_speed),
                r=bc.WIND_MASK_RADIUS,
            )
            for _, r in _wind_marker_rows(rows)
        ],
    )


def wind_layer(rows: list[models.HourlyRow], scales: MeteogramScales) -> models.Layer:
    """Wind speed line with direction markers at every second hour.

    Markers point where the wind blows to (the direction is "from").
    """
    xs = _xs(rows, scales)
    ys = [scales.wind(r.wind_speed) for r in rows]
    prims: list[models.Primitive] = [
        models.PathPrimitive(
            part="wind-line",
            d=line_path(zip(xs, ys)),
            style={
                "fill": "none",
                "stroke": colors.WIND,
                "stroke-width": 2,
                "stroke-opacity": 0.8,
                "mask": f"url(#{WIND_LINE_MASK})",
            },
        )
    ]
    for i, row in _wind_marker_rows(rows):
        prims.append(
            models.GlyphPrimitive(
                part="wind-arrow",
                glyph="wind-arrow",
                x=xs[i],
                y=ys[i],
                size=8,
                rotation=(row.wind_direction + 180) % 360,
                style={"fill": colors.WIND},
            )
        )
    return models.Layer(name="wind", primitives=prims)


def cloud_layer(
    rows: list[models.HourlyRow],
    daily: list[models.DailyRow],
    scales: MeteogramScales,
) -> models.Layer:
    """Cloud band, sunny highlights and precipitation particles."""
    xs = _xs(rows, scales)
    center = scales.cloud_center_y
    halves = [scales.cloud(r.cloud_cover) for r in rows]

    prims: list[models.Primitive] = [
        models.PathPrimitive(
            part="cloud-area",
            d=area_path(
                xs, [center - h for h in halves], [center + h for h in halves]
            ),
            style={
                "fill": colors.TEXT,
                "fill-opacity": 0.15,
                "stroke": colors.CLOUD_STROKE,
                "stroke-width": 1,
            },
        )
    ]

    for rng in sunny_ranges(rows, daily, scales.time, scales.inner_width):
        prims.append(
            models.RectPrimitive(
                part="sunny-pill-group",
                x=rng.x0,
                y=center - 22,
                width=rng.width,
                height=8,
                rx=4,
                style={"fill": colors.SUN, "fill-opacity": 0.6, "filter": "blur(6px)"},
            )
        )

    for i, row in enumerate(rows):
        cloud_bottom = center + halves[i]
        for j, particle in enumerate(jitter.particles(row)):
            is_snow = particle.kind == "snowflake"
            prims.append(
                models.GlyphPrimitive(
                    part="snow-flake" if is_snow else "rain-droplet",
                    glyph=particle.kind,
                    x=xs[i] + particle.offset,
                    y=cloud_bottom
                    + 5
                    + j * bc.PARTICLE_SPACING
                    + bc.PARTICLE_SIZE / 2,
                    size=bc.PARTICLE_SIZE,
                    style={
                        "fill": colors.SNOW if is_snow else colors.RAIN,
                        "opacity": 0.8,
                    },
                )
            )
    return models.Layer(name="cloud", primitives=prims)
