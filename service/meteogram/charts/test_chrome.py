import datetime

import pytest

from service.meteogram import models
from service.meteogram.calc.normalize import normalize_daily
from service.meteogram.testhelpers import make_daily, make_payload, make_rows, make_scales

from . import chrome
from . import layers


@pytest.fixture
def rows():
    return make_rows(n=48)


@pytest.fixture
def scales(rows):
    return make_scales(rows)


def test_tick_label():
    assert chrome.tick_label(datetime.datetime(2025, 1, 6)) == "MON"
    assert chrome.tick_label(datetime.datetime(2025, 1, 12)) == "SUN"
    assert chrome.tick_label(datetime.datetime(2025, 1, 6, 14)) == "14"
    assert chrome.tick_label(datetime.datetime(2025, 1, 6, 6)) == "6"


def test_grid_layer(scales):
    layer = chrome.grid_layer(scales)
    parts = [p.part for p in layer.primitives]
    assert len(parts) == 8
    assert parts[0] == "grid-line-midnight"
    assert parts[4] == "grid-line-midnight"
    assert parts.count("grid-line") == 6
    assert all(p.y2 == scales.inner_height for p in layer.primitives)
    assert "stroke-dasharray" in layer.primitives[1].style
    assert "stroke-dasharray" not in layer.primitives[0].style


def test_time_axis_layer(scales):
    layer = chrome.time_axis_layer(scales)
    texts = [p.text for p in layer.primitives]
    assert texts == ["MON", "6", "12", "18", "TUE", "6", "12", "18"]
    first = layer.primitives[0]
    assert first.x == 4
    assert first.y == 220
    assert first.anchor == "start"
    assert first.style["font-weight"] == 700
    assert layer.primitives[1].style["font-weight"] == 400


def test_current_time_layer(scales):
    now = datetime.datetime(2025, 1, 6, 12)
    layer = chrome.current_time_layer(scales, now, 200)
    assert len(layer.primitives) == 1
    line = layer.primitives[0]
    assert line.part == "current-time-line"
    assert line.x1 == pytest.approx(scales.time(now))
    assert line.y2 == 212


def test_current_time_outside_chart(scales):
    later = datetime.datetime(2025, 1, 9)
    assert chrome.current_time_layer(scales, later, 200).primitives == []
    assert chrome.current_time_layer(scales, None, 200).primitives == []


def test_cursor_layer(rows, scales):
    margin = models.Margin(left=30)
    idle = chrome.cursor_layer(models.TooltipState(), margin, scales)
    assert idle.primitives == []

    state = models.TooltipState(active_row=rows[1], anchor_x=130, anchor_y=80)
    layer = chrome.cursor_layer(state, margin, scales)
    (line,) = layer.primitives
    assert line.part == "cursor-line"
    assert line.x1 == 100
    assert line.x2 == 100


def test_night_layer(scales):
    daily = normalize_daily(make_payload(n=1, daily=make_daily(days=2)))
    layer = chrome.night_layer(daily, scales, 300)
    assert [p.part for p in layer.primitives] == ["night-shading-rect"] * 2
    assert all(p.height == 300 for p in layer.primitives)
    assert layer.primitives[0].x == 0


def test_chart_defs(rows, scales):
    vp = models.Viewport(width=480, height=300)
    defs = chrome.chart_defs(rows, scales, vp)
    fill, stroke = defs.gradients
    assert fill.id == layers.TEMP_FILL_GRADIENT
    assert stroke.id == layers.TEMP_STROKE_GRADIENT
    assert fill.user_space
    assert fill.y1 == pytest.approx(scales.temperature(40))
    assert fill.y2 == pytest.approx(scales.temperature(-10))
    assert fill.from_opacity == 0.2
    assert stroke.from_opacity == 1
    (mask,) = defs.masks
    assert mask.id == layers.WIND_LINE_MASK
    assert len(mask.holes) == 24
