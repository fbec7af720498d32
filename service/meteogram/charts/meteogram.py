"""The meteogram render pipeline.

Rendering is a pure function of (payload, viewport, unit system, now). There
is no incremental update path: a new forecast or a resized viewport simply
re-runs the pipeline.
"""

import datetime
import logging
from typing import Any

from service.meteogram import models
from service.meteogram.base import dates
from service.meteogram.base import units
from service.meteogram.calc import events
from service.meteogram.calc.normalize import normalize_forecast
from service.meteogram.calc.scales import MeteogramScales, build_scales
from service.meteogram.calc.tooltip import TooltipEngine

from . import chrome
from . import layers

logger = logging.getLogger(__name__)

SUPPRESSED_EMPTY = "empty_dataset"
SUPPRESSED_VIEWPORT = "degenerate_viewport"


def _aligned_now(
    forecast: models.NormalizedForecast, now: datetime.datetime | None
) -> datetime.datetime | None:
    if now is None or not forecast.hourly:
        return None
    return dates.align_instant(
        now, forecast.hourly[0].instant, forecast.utc_offset_seconds
    )


def scales_for(
    forecast: models.NormalizedForecast, viewport: models.Viewport
) -> MeteogramScales | None:
    """Returns the scales, or None if nothing can be drawn."""
    if not forecast.hourly or viewport.is_degenerate():
        return None
    return build_scales(forecast.hourly, viewport)


def tooltip_engine(
    forecast: models.NormalizedForecast, viewport: models.Viewport
) -> TooltipEngine:
    return TooltipEngine(
        forecast.hourly, scales_for(forecast, viewport), viewport.margin
    )


def render_forecast(
    forecast: models.NormalizedForecast,
    viewport: models.Viewport,
    unit_system: units.UnitSystem = units.METRIC,
    now: datetime.datetime | None = None,
    tooltip: models.TooltipState | None = None,
) -> models.MeteogramRender:
    """Renders already normalized rows. See render_meteogram."""
    rows = forecast.hourly
    result = models.MeteogramRender(
        width=viewport.width, height=viewport.height, margin=viewport.margin
    )
    if now is not None:
        result.next_precipitation = events.next_precipitation(
            rows, now, utc_offset_seconds=forecast.utc_offset_seconds
        )

    if not rows:
        logger.debug("No hourly rows, nothing to draw")
        result.suppressed_reason = SUPPRESSED_EMPTY
        return result
    if viewport.is_degenerate():
        logger.warning(
            "Suppressing render for degenerate viewport %sx%s",
            viewport.width,
            viewport.height,
        )
        result.suppressed_reason = SUPPRESSED_VIEWPORT
        return result

    scales = build_scales(rows, viewport)
    daily = forecast.daily

    result.defs = chrome.chart_defs(rows, scales, viewport)
    result.layers = [
        chrome.night_layer(daily, scales, viewport.height, chart_start=rows[0].instant),
        chrome.grid_layer(scales),
        layers.cloud_layer(rows, daily, scales),
        layers.precipitation_layer(rows, scales),
        layers.temperature_layer(rows, scales, unit_system),
        layers.wind_layer(rows, scales),
        chrome.current_time_layer(
            scales, _aligned_now(forecast, now), scales.inner_height
        ),
        chrome.cursor_layer(tooltip or models.TooltipState(), viewport.margin, scales),
        chrome.time_axis_layer(scales, axis_height=viewport.margin.bottom),
    ]
    logger.debug(
        "Rendered %d rows into %d primitives",
        len(rows),
        sum(len(l.primitives) for l in result.layers),
    )
    return result


def render_meteogram(
    payload: models.ForecastPayload | dict[str, Any],
    viewport: models.Viewport,
    unit_system: units.UnitSystem = units.METRIC,
    now: datetime.datetime | None = None,
    tooltip: models.TooltipState | None = None,
) -> models.MeteogramRender:
    """Renders payload into draw primitives, in plot coordinates.

    Empty forecasts and degenerate viewports produce a render without layers
    (see MeteogramRender.suppressed_reason) instead of failing.

    Raises:
        MalformedDatasetError: if the payload's arrays are misaligned or its
            timestamps cannot be parsed.
    """
    return render_forecast(
        normalize_forecast(payload), viewport, unit_system, now, tooltip
    )
