import altair as alt
from itertools import cycle, islice

import pandas as pd


# Colors of the meteogram layers (tailwind palette names).
COLORS_METEOGRAM = {
    # Temperature gradient: hot -> cold
    "Amber": "#fbbf24",
    "Blue": "#3b82f6",
    # Dew point
    "Cyan": "#22d3ee",
    # Liquid precipitation
    "SkyBlue": "#60a5fa",
    # Solid precipitation
    "Snow": "#e2e8f0",
    # Wind
    "Red": "#ef4444",
    # Sunny highlights
    "Sun": "#fde047",
    # Night shading, cursor, labels
    "Black": "#000000",
    "White": "#ffffff",
}

# Short name for concise code.
_M = COLORS_METEOGRAM

TEMP_HOT = _M["Amber"]
TEMP_COLD = _M["Blue"]
DEW_POINT = _M["Cyan"]
RAIN = _M["SkyBlue"]
SNOW = _M["Snow"]
WIND = _M["Red"]
SUN = _M["Sun"]
NIGHT = _M["Black"]
TEXT = _M["White"]

GRID_MIDNIGHT = "rgba(255,255,255,0.3)"
GRID_HOUR = "rgba(255,255,255,0.1)"
AXIS_DAY = "#ffffff"
AXIS_HOUR = "rgba(255,255,255,0.5)"
CURRENT_TIME = "rgba(255,255,255,0.4)"
CLOUD_STROKE = "rgba(255,255,255,0.4)"


class Palette:
    """Represents a possibly rotated version of a given color palette.

    Useful to create color scales for nominal measurements.
    """

    def _get_colors(self) -> list[str]:
        """Returns a list of the hex colors defined in this palette."""
        raise NotImplementedError(f"_get_colors not implemented by {self.__class__}")

    def first_n(self, n: int) -> list[str]:
        return list(islice(cycle(self._get_colors()), n))

    def scale(self, data: pd.Series | list[str]):
        domain = list(pd.unique(pd.Series(data)))
        range = self.first_n(len(domain))
        return alt.Scale(domain=domain, range=range)

    def __str__(self) -> str:
        return f"{self.__class__.__name__}({self._get_colors()})"


class Custom(Palette):
    """A custom color palette that uses the given hex color(s)."""

    def __init__(self, colors: str | list[str]):
        if isinstance(colors, str):
            colors = [colors]
        self._colors = colors

    @classmethod
    def named(cls, color, *args) -> "Custom":
        """Creates a custom palette from meteogram color names."""
        return cls([COLORS_METEOGRAM[c] for c in (color, *args)])

    def _get_colors(self) -> list[str]:
        return self._colors
