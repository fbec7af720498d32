import pytest

from service.meteogram.base import units


@pytest.mark.parametrize(
    "c, system, expected",
    [
        (21.4, "metric", 21),
        (21.5, "metric", 22),
        (-2.5, "metric", -2),
        (0, "imperial", 32),
        (100, "imperial", 212),
        (-40, "imperial", -40),
    ],
)
def test_format_temp(c, system, expected):
    assert units.format_temp(c, system) == expected


def test_format_speed():
    assert units.format_speed(10, "metric") == 10
    assert units.format_speed(100, "imperial") == 62


def test_format_precip():
    assert units.format_precip(0, "metric") == "0"
    assert units.format_precip(1.2, "metric") == "1.2"
    assert units.format_precip(10, "imperial") == "0.39"
    assert units.format_precip(0, "imperial") == "0.00"


def test_unit_label():
    assert units.unit_label("temp", "metric") == "°C"
    assert units.unit_label("temp", "imperial") == "°F"
    assert units.unit_label("speed", "imperial") == "mph"
    assert units.unit_label("precip", "metric") == "mm"
    with pytest.raises(ValueError):
        units.unit_label("pressure", "metric")


@pytest.mark.parametrize(
    "degrees, expected",
    [
        (0, "N"),
        (11, "N"),
        (12, "NNE"),
        (90, "E"),
        (180, "S"),
        (270, "W"),
        (350, "N"),
        (359, "N"),
    ],
)
def test_wind_direction(degrees, expected):
    assert units.wind_direction(degrees) == expected
