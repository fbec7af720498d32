"""Rain/snow decomposition of hourly precipitation."""

from service.meteogram import models
from service.meteogram.base import constants as bc


def snow_ratio(precipitation: float, rain: float = 0, showers: float = 0) -> float:
    """Returns the fraction of precipitation that falls as snow, in [0, 1].

    Everything that is not rain or showers counts as snow. Zero (or negative)
    precipitation has a snow ratio of 0.
    """
    if precipitation <= 0:
        return 0.0
    return min(max(1 - (rain + showers) / precipitation, 0.0), 1.0)


def row_snow_ratio(row: models.HourlyRow) -> float:
    return snow_ratio(row.precipitation, row.rain, row.showers)


def is_snow_dominant(row: models.HourlyRow) -> bool:
    return row_snow_ratio(row) > bc.SNOW_DOMINANT_RATIO


def precip_type(row: models.HourlyRow) -> models.PrecipType | None:
    """Returns "rain" or "snow" for precipitating rows, None otherwise."""
    if row.precipitation <= 0:
        return None
    return "snow" if is_snow_dominant(row) else "rain"


def split_bar(bar_height: float, ratio: float) -> tuple[float, float]:
    """Splits a precipitation bar into (liquid, solid) heights.

    The liquid part is anchored at the bottom, the solid part is stacked on top.
    """
    return bar_height * (1 - ratio), bar_height * ratio
