"""Turns parallel-array forecast payloads into ordered row objects."""

import logging
from typing import Any

import pandas as pd
from pydantic import ValidationError

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import dates
from service.meteogram.base.errors import MalformedDatasetError

logger = logging.getLogger(__name__)

# Payload field name -> HourlyRow field name, for fields that must be present.
_REQUIRED_HOURLY = {
    "temperature_2m": "temperature",
    "precipitation": "precipitation",
    "cloudcover": "cloud_cover",
    "windspeed_10m": "wind_speed",
    "winddirection_10m": "wind_direction",
}

# Optional fields. Missing values are derived in _fill_defaults.
_OPTIONAL_HOURLY = {
    "apparent_temperature": "apparent_temperature",
    "dewpoint_2m": "dew_point",
    "rain": "rain",
    "showers": "showers",
    "snowfall": "snowfall",
}


def _validate_payload(payload: models.ForecastPayload | dict[str, Any]):
    if isinstance(payload, models.ForecastPayload):
        return payload
    try:
        return models.ForecastPayload.model_validate(payload)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(p) for p in err["loc"])
        raise MalformedDatasetError(
            "Invalid forecast payload", field=field, detail=err["msg"]
        ) from e


def _parse_times(values: list[str], field: str) -> list:
    try:
        return dates.parse_instants(values)
    except (ValueError, TypeError) as e:
        raise MalformedDatasetError(
            "Unparseable timestamp", field=field, detail=str(e)
        ) from e


def _check_lengths(arrays: dict[str, list | None], n: int):
    for name, values in arrays.items():
        if values is not None and len(values) != n:
            raise MalformedDatasetError(
                "Array lengths differ",
                field=name,
                detail=f"expected {n} values, got {len(values)}",
            )


def _fill_defaults(df: pd.DataFrame) -> pd.DataFrame:
    """Derives values for absent optional fields (column-wise, per missing value)."""
    df = df.copy()
    df["apparent_temperature"] = df["apparent_temperature"].fillna(df["temperature"])
    df["dew_point"] = df["dew_point"].fillna(df["temperature"] - bc.DEW_POINT_OFFSET)
    for col in ["rain", "showers", "snowfall"]:
        df[col] = df[col].fillna(0.0)
    return df


def hourly_frame(payload: models.ForecastPayload | dict[str, Any]) -> pd.DataFrame:
    """Joins the hourly arrays of payload into a DataFrame (one row per hour).

    Columns use HourlyRow field names. Absent optional fields are filled with
    their derived defaults.

    Raises:
        MalformedDatasetError: arrays of unequal length, unparseable or
            non-increasing timestamps.
    """
    hourly = _validate_payload(payload).hourly
    n = len(hourly.time)
    payload_arrays = {
        name: getattr(hourly, name) for name in {**_REQUIRED_HOURLY, **_OPTIONAL_HOURLY}
    }
    _check_lengths(payload_arrays, n)

    instants = _parse_times(hourly.time, "hourly.time")
    data = {"time": hourly.time, "instant": instants}
    for name, col in {**_REQUIRED_HOURLY, **_OPTIONAL_HOURLY}.items():
        values = payload_arrays[name]
        data[col] = pd.Series(
            values if values is not None else [None] * n, dtype=float
        )
    df = pd.DataFrame(data)

    if not (df["instant"].is_monotonic_increasing and df["instant"].is_unique):
        raise MalformedDatasetError(
            "Timestamps are not strictly increasing", field="hourly.time"
        )

    return _fill_defaults(df)


def normalize_hourly(payload: models.ForecastPayload | dict[str, Any]) -> list[models.HourlyRow]:
    """Returns the ordered HourlyRows of payload."""
    df = hourly_frame(payload)
    rows = []
    for rec in df.to_dict(orient="records"):
        rec["instant"] = pd.Timestamp(rec["instant"]).to_pydatetime()
        rows.append(models.HourlyRow(**rec))
    logger.debug("Normalized %d hourly rows", len(rows))
    return rows


def normalize_daily(payload: models.ForecastPayload | dict[str, Any]) -> list[models.DailyRow]:
    """Returns the DailyRows of payload, or [] if it has no daily data."""
    daily = _validate_payload(payload).daily
    if daily is None or not daily.time:
        return []
    n = len(daily.time)
    _check_lengths({"sunrise": daily.sunrise, "sunset": daily.sunset}, n)

    days = _parse_times(daily.time, "daily.time")
    sunrises = _parse_times(daily.sunrise, "daily.sunrise")
    sunsets = _parse_times(daily.sunset, "daily.sunset")
    if (sunrises[0].tzinfo is None) != (sunsets[0].tzinfo is None):
        raise MalformedDatasetError(
            "Sunrise and sunset mix naive and timezone-aware values",
            field="daily.sunset",
        )

    rows = []
    for d, sunrise, sunset in zip(days, sunrises, sunsets):
        if sunset < sunrise:
            raise MalformedDatasetError(
                "Sunset before sunrise", field="daily.sunset", detail=str(d.date())
            )
        rows.append(models.DailyRow(date=d.date(), sunrise=sunrise, sunset=sunset))
    return rows


def normalize_forecast(
    payload: models.ForecastPayload | dict[str, Any],
) -> models.NormalizedForecast:
    """Normalizes hourly and daily data of payload.

    Raises:
        MalformedDatasetError: if hourly and daily timestamps mix naive and
            timezone-aware values (they could not be compared).
    """
    payload = _validate_payload(payload)
    hourly = normalize_hourly(payload)
    daily = normalize_daily(payload)
    if hourly and daily:
        if (hourly[0].instant.tzinfo is None) != (daily[0].sunrise.tzinfo is None):
            raise MalformedDatasetError(
                "Hourly and daily timestamps mix naive and timezone-aware values",
                field="daily.sunrise",
            )
    return models.NormalizedForecast(
        hourly=hourly, daily=daily, utc_offset_seconds=payload.utc_offset_seconds
    )


def rows_to_frame(rows: list[models.HourlyRow]) -> pd.DataFrame:
    """Returns rows as a DataFrame indexed by instant."""
    if not rows:
        return pd.DataFrame(columns=list(models.HourlyRow.model_fields)).set_index(
            "instant"
        )
    df = pd.DataFrame([r.model_dump() for r in rows])
    return df.set_index("instant")
