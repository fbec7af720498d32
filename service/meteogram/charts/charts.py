from typing import TypeAlias, Union
import altair as alt
import pandas as pd

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import units
from service.meteogram.base.errors import EmptyDatasetError
from service.meteogram.calc import precip
from service.meteogram.calc.normalize import rows_to_frame

from . import colors

AltairChart: TypeAlias = Union[alt.Chart, alt.LayerChart]

# Used for HTML exports.
VEGA_VERSION = "5.33.0"
VEGA_LITE_VERSION = "5.23.0"
VEGA_EMBED_VERSION = "6.29.0"


def meteogram_chart_data(
    rows: list[models.HourlyRow], unit_system: units.UnitSystem = units.METRIC
) -> pd.DataFrame:
    """Returns one row per hour with values converted to unit_system for display."""
    if not rows:
        raise EmptyDatasetError("No hourly data for meteogram chart")
    df = rows_to_frame(rows).reset_index()
    if unit_system == units.IMPERIAL:
        df["temp_display"] = units.to_fahrenheit(df["temperature"])
        df["dew_point_display"] = units.to_fahrenheit(df["dew_point"])
        df["precip_display"] = units.to_inches(df["precipitation"])
        df["wind_display"] = units.to_mph(df["wind_speed"])
    else:
        df["temp_display"] = df["temperature"]
        df["dew_point_display"] = df["dew_point"]
        df["precip_display"] = df["precipitation"]
        df["wind_display"] = df["wind_speed"]
    df["precip_type"] = [precip.precip_type(r) or "none" for r in rows]
    df["wind_compass"] = df["wind_direction"].map(units.wind_direction)
    return df


def meteogram_chart(
    rows: list[models.HourlyRow],
    unit_system: units.UnitSystem = units.METRIC,
    title: str = "Meteogram",
) -> alt.LayerChart:
    """Creates a Vega-Lite meteogram: temperature, dew point, precipitation, wind.

    Precipitation and wind use independent y axes.
    """
    df = meteogram_chart_data(rows, unit_system)
    temp_unit = units.unit_label("temp", unit_system)
    precip_unit = units.unit_label("precip", unit_system)
    speed_unit = units.unit_label("speed", unit_system)

    base = alt.Chart(df).encode(
        x=alt.X("instant:T", title=None, axis=alt.Axis(format="%a %H:%M")),
    )

    temp_scale = alt.Scale(nice=True, zero=False)
    temperature = base.mark_line(
        color=colors.TEMP_HOT, strokeWidth=3, interpolate="monotone"
    ).encode(
        y=alt.Y("temp_display:Q", title=f"Temperature ({temp_unit})", scale=temp_scale),
    )
    dew_point = base.mark_line(
        color=colors.DEW_POINT, strokeDash=[2, 4], interpolate="monotone"
    ).encode(y=alt.Y("dew_point_display:Q", scale=temp_scale))

    precip_floor = bc.PRECIP_DOMAIN_MIN_MAX
    if unit_system == units.IMPERIAL:
        precip_floor = units.to_inches(precip_floor)
    precip_max = max(df["precip_display"].max(), precip_floor)
    precipitation = base.mark_bar(width=bc.PRECIP_BAR_WIDTH, opacity=0.5).encode(
        y=alt.Y(
            "precip_display:Q",
            title=f"Precipitation ({precip_unit})",
            # Keep bars in the lower part of the chart.
            scale=alt.Scale(domain=[0, precip_max / (1 - bc.PRECIP_BAND_TOP)]),
        ),
        color=alt.Color(
            "precip_type:N",
            scale=colors.Custom.named("SkyBlue", "Snow", "Black").scale(
                ["rain", "snow", "none"]
            ),
            legend=None,
        ),
    )

    wind_max = max(df["wind_speed"].max(), bc.WIND_DOMAIN_MIN_MAX)
    if unit_system == units.IMPERIAL:
        wind_max = units.to_mph(wind_max)
    wind = base.mark_line(color=colors.WIND, interpolate="monotone").encode(
        y=alt.Y(
            "wind_display:Q",
            title=f"Wind ({speed_unit})",
            scale=alt.Scale(domain=[0, wind_max / (1 - bc.WIND_BAND_TOP)]),
        ),
    )

    nearest = alt.selection_point(
        nearest=True, on="mouseover", fields=["instant"], empty=False
    )
    cursor = (
        base.mark_rule(color=colors.TEXT, strokeDash=[4, 2])
        .encode(
            opacity=alt.condition(nearest, alt.value(0.8), alt.value(0)),
            tooltip=[
                alt.Tooltip("instant:T", title="Time", format="%H:%M"),
                alt.Tooltip("temp_display:Q", title=f"Temp ({temp_unit})", format=".0f"),
                alt.Tooltip(
                    "precip_display:Q", title=f"Precip ({precip_unit})", format=".2f"
                ),
                alt.Tooltip("wind_display:Q", title=f"Wind ({speed_unit})", format=".0f"),
                alt.Tooltip("wind_compass:N", title="Wind from"),
                alt.Tooltip("cloud_cover:Q", title="Cloud (%)", format=".0f"),
            ],
        )
        .add_params(nearest)
    )

    return (
        alt.layer(alt.layer(temperature, dew_point), precipitation, wind, cursor)
        .resolve_scale(y="independent")
        .properties(
            width="container",
            autosize={"type": "fit", "contains": "padding"},
            title=title,
        )
    )
