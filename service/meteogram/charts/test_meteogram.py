import datetime

import pytest

from service.meteogram import models
from service.meteogram.base.errors import MalformedDatasetError
from service.meteogram.calc.normalize import normalize_forecast
from service.meteogram.testhelpers import make_daily, make_payload

from . import meteogram


VIEWPORT = models.Viewport(width=480, height=300)

LAYER_NAMES = [
    "night",
    "grid",
    "cloud",
    "precipitation",
    "temperature",
    "wind",
    "current-time",
    "cursor",
    "time-axis",
]


def _payload(**kwargs):
    return make_payload(n=48, daily=make_daily(days=2), **kwargs)


def test_render_layers_in_paint_order():
    render = meteogram.render_meteogram(_payload(), VIEWPORT)
    assert render.suppressed_reason is None
    assert [l.name for l in render.layers] == LAYER_NAMES
    assert render.width == 480
    assert render.height == 300
    assert render.margin == models.Margin()
    assert len(render.defs.gradients) == 2
    assert render.next_precipitation is None


def test_render_is_deterministic():
    payload = _payload(precipitation=[1.0] * 48, rain=[0.5] * 48)
    a = meteogram.render_meteogram(payload, VIEWPORT)
    b = meteogram.render_meteogram(payload, VIEWPORT)
    assert a == b


def test_render_with_now():
    precipitation = [0.0] * 48
    precipitation[15] = 2.0
    payload = _payload(precipitation=precipitation, rain=precipitation)
    now = datetime.datetime(2025, 1, 6, 12)
    render = meteogram.render_meteogram(payload, VIEWPORT, now=now)
    assert render.next_precipitation == models.PrecipitationEvent(
        kind="starts", precip_type="rain", time="2025-01-06T15:00"
    )
    assert len(render.layer("current-time").primitives) == 1


def test_render_with_tooltip():
    forecast = normalize_forecast(_payload())
    engine = meteogram.tooltip_engine(forecast, VIEWPORT)
    state = engine.pointer_move(100)
    render = meteogram.render_forecast(forecast, VIEWPORT, tooltip=state)
    (line,) = render.layer("cursor").primitives
    assert line.x1 == pytest.approx(state.anchor_x)


def test_empty_forecast_is_suppressed():
    render = meteogram.render_meteogram(make_payload(n=0), VIEWPORT)
    assert render.suppressed_reason == meteogram.SUPPRESSED_EMPTY
    assert render.layers == []


@pytest.mark.parametrize(
    "width,height",
    [
        (5, 300),
        (480, 100),
        (480, 50),
    ],
)
def test_degenerate_viewport_is_suppressed(width, height):
    render = meteogram.render_meteogram(
        _payload(), models.Viewport(width=width, height=height)
    )
    assert render.suppressed_reason == meteogram.SUPPRESSED_VIEWPORT
    assert render.layers == []


def test_degenerate_viewport_tooltip_stays_idle():
    forecast = normalize_forecast(_payload())
    engine = meteogram.tooltip_engine(forecast, models.Viewport(width=5, height=300))
    assert not engine.pointer_move(3).is_active


def test_malformed_payload_raises():
    with pytest.raises(MalformedDatasetError):
        meteogram.render_meteogram(make_payload(n=3, rain=[0.0]), VIEWPORT)


def test_imperial_labels():
    render = meteogram.render_meteogram(_payload(), VIEWPORT, unit_system="imperial")
    labels = [
        p.text
        for p in render.layer("temperature").primitives
        if p.part.startswith("temp-label")
    ]
    # 16.5°C and 5°C
    assert labels == ["62°", "41°", "62°", "41°"]


def test_missing_daily_data_skips_night_and_sun():
    render = meteogram.render_meteogram(
        make_payload(n=48, cloudcover=[0.0] * 48), VIEWPORT
    )
    assert render.layer("night").primitives == []
    cloud_parts = {p.part for p in render.layer("cloud").primitives}
    assert "sunny-pill-group" not in cloud_parts
