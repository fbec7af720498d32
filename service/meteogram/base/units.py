"""Unit conversions and display formatting.

All geometry is computed in metric units (°C, km/h, mm). Conversion to the
selected unit system only happens when labels are formatted.
"""

import math
from typing import Literal

UnitSystem = Literal["metric", "imperial"]

METRIC = "metric"
IMPERIAL = "imperial"
UNIT_SYSTEMS = (METRIC, IMPERIAL)

COMPASS_POINTS = [
    "N",
    "NNE",
    "NE",
    "ENE",
    "E",
    "ESE",
    "SE",
    "SSE",
    "S",
    "SSW",
    "SW",
    "WSW",
    "W",
    "WNW",
    "NW",
    "NNW",
]


def js_round(x: float) -> int:
    """Rounds half up, like JavaScript's Math.round (Python rounds half to even)."""
    return math.floor(x + 0.5)


def to_fahrenheit(c: float) -> float:
    return c * 9 / 5 + 32


def to_mph(kmh: float) -> float:
    return kmh * 0.621371


def to_inches(mm: float) -> float:
    return mm * 0.0393701


def format_temp(c: float, system: UnitSystem) -> int:
    val = to_fahrenheit(c) if system == IMPERIAL else c
    return js_round(val)


def format_speed(kmh: float, system: UnitSystem) -> int:
    val = to_mph(kmh) if system == IMPERIAL else kmh
    return js_round(val)


def format_precip(mm: float, system: UnitSystem) -> str:
    """Inches need two decimals for small amounts, millimeters are shown as-is."""
    if system == IMPERIAL:
        return f"{to_inches(mm):.2f}"
    if float(mm).is_integer():
        return str(int(mm))
    return repr(float(mm))


def unit_label(kind: Literal["temp", "speed", "precip"], system: UnitSystem) -> str:
    labels = {
        "temp": ("°C", "°F"),
        "speed": ("km/h", "mph"),
        "precip": ("mm", "in"),
    }
    if kind not in labels:
        raise ValueError(f"Unknown unit kind: {kind}")
    metric, imperial = labels[kind]
    return imperial if system == IMPERIAL else metric


def wind_direction(degrees: float) -> str:
    """Returns the 16-point compass name for a bearing in degrees."""
    return COMPASS_POINTS[js_round(degrees / 22.5) % 16]
