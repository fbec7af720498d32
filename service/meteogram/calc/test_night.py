import datetime

import pytest

from service.meteogram.calc.night import night_intervals
from service.meteogram.calc.normalize import normalize_daily
from service.meteogram.testhelpers import make_daily, make_payload, make_rows, make_scales


def _daily(**kwargs):
    return normalize_daily(make_payload(n=1, daily=make_daily(**kwargs)))


def test_early_interval_comes_first():
    rows = make_rows(n=48)
    scales = make_scales(rows)
    nights = night_intervals(_daily(days=2), scales.time, scales.inner_width)

    assert len(nights) == 2
    early, night = nights
    assert early.start == datetime.datetime(2025, 1, 6, 0, 0)
    assert early.end == datetime.datetime(2025, 1, 6, 7, 30)
    assert early.x0 == 0
    assert early.x1 == pytest.approx(7.5 * 480 / 47)

    assert night.start == datetime.datetime(2025, 1, 6, 16, 45)
    assert night.end == datetime.datetime(2025, 1, 7, 7, 30)
    assert night.x0 == pytest.approx(16.75 * 480 / 47)
    assert night.width == pytest.approx((31.5 - 16.75) * 480 / 47)


def test_no_early_interval_after_sunrise():
    rows = make_rows(n=24, start="2025-01-06T08:00")
    scales = make_scales(rows)
    nights = night_intervals(_daily(days=2), scales.time, scales.inner_width)
    assert len(nights) == 1
    assert nights[0].start == datetime.datetime(2025, 1, 6, 16, 45)


def test_intervals_are_clipped():
    rows = make_rows(n=20)
    scales = make_scales(rows)
    nights = night_intervals(_daily(days=3), scales.time, scales.inner_width)
    # The night starting at 16:45 is cut at the end of the chart (19:00), and
    # the second night is entirely off-chart.
    assert len(nights) == 2
    assert nights[-1].x1 == scales.inner_width


def test_chronological_and_disjoint():
    rows = make_rows(n=24 * 5)
    scales = make_scales(rows, width=1000)
    nights = night_intervals(_daily(days=5), scales.time, scales.inner_width)
    assert len(nights) == 5
    for a, b in zip(nights, nights[1:]):
        assert a.end <= b.start
        assert a.x1 <= b.x0


def test_explicit_chart_start():
    rows = make_rows(n=48)
    scales = make_scales(rows)
    nights = night_intervals(
        _daily(days=2),
        scales.time,
        scales.inner_width,
        chart_start=datetime.datetime(2025, 1, 6, 8),
    )
    assert len(nights) == 1


def test_no_daily_data():
    rows = make_rows(n=48)
    scales = make_scales(rows)
    assert night_intervals([], scales.time, scales.inner_width) == []
