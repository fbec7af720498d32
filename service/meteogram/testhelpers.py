import datetime
from typing import Any
import pandas as pd
from pandas.testing import assert_frame_equal
import unittest

from service.meteogram import models
from service.meteogram.calc.normalize import normalize_hourly
from service.meteogram.calc.scales import MeteogramScales, build_scales


class PandasTestCase(unittest.TestCase):
    def assertSeriesValuesEqual(self, series: pd.Series, expected_values: list[Any]):
        """Check only the values of a Series (ignore index, dtype, name)."""
        self.assertEqual(series.tolist(), expected_values)

    def assertFrameEqual(self, actual: pd.DataFrame, expected: pd.DataFrame, **kwargs):
        """Wrapper around assert_frame_equal with relaxed defaults."""
        kwargs.setdefault("check_dtype", False)
        kwargs.setdefault("check_column_type", False)
        kwargs.setdefault("check_index_type", False)
        assert_frame_equal(actual, expected, **kwargs)

    def assertColumnNames(self, df: pd.DataFrame, expected_names):
        self.assertEqual(df.columns.to_list(), expected_names)


def hour_strings(n: int, start: str = "2025-01-06T00:00") -> list[str]:
    """Returns n hourly ISO timestamps (minute precision) starting at start."""
    t0 = datetime.datetime.fromisoformat(start)
    return [
        (t0 + datetime.timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(n)
    ]


def make_daily(
    start: str = "2025-01-06",
    days: int = 2,
    sunrise: str = "07:30",
    sunset: str = "16:45",
) -> dict[str, list[str]]:
    d0 = datetime.date.fromisoformat(start)
    dates = [(d0 + datetime.timedelta(days=i)).isoformat() for i in range(days)]
    return {
        "time": dates,
        "sunrise": [f"{d}T{sunrise}" for d in dates],
        "sunset": [f"{d}T{sunset}" for d in dates],
    }


def make_payload(
    n: int = 48,
    start: str = "2025-01-06T00:00",
    daily: dict[str, list[str]] | None = None,
    **hourly: list[float] | None,
) -> dict[str, Any]:
    """Builds an open-meteo style payload with plausible defaults.

    Keyword arguments override hourly arrays by their payload name, e.g.
    precipitation=[...]. Passing None removes an optional array.
    """
    data: dict[str, Any] = {
        "time": hour_strings(n, start),
        "temperature_2m": [5.0 + (i % 24) * 0.5 for i in range(n)],
        "precipitation": [0.0] * n,
        "rain": [0.0] * n,
        "showers": [0.0] * n,
        "snowfall": [0.0] * n,
        "cloudcover": [50.0] * n,
        "windspeed_10m": [10.0] * n,
        "winddirection_10m": [270.0] * n,
    }
    for k, v in hourly.items():
        if v is None:
            data.pop(k, None)
        else:
            data[k] = v
    payload: dict[str, Any] = {"hourly": data}
    if daily is not None:
        payload["daily"] = daily
    return payload


def make_rows(**kwargs) -> list[models.HourlyRow]:
    return normalize_hourly(make_payload(**kwargs))


def make_scales(
    rows: list[models.HourlyRow], width: float = 480, height: float = 300
) -> MeteogramScales:
    return build_scales(rows, models.Viewport(width=width, height=height))
