import datetime
from typing import Annotated, Literal, Union
from pydantic import BaseModel, ConfigDict, Field

from service.meteogram.base import constants as bc


class HourlyPayload(BaseModel):
    """Hourly forecast fields as parallel arrays (index i is the same hour)."""

    time: list[str]
    temperature_2m: list[float]
    precipitation: list[float]
    cloudcover: list[float]
    windspeed_10m: list[float]
    winddirection_10m: list[float]
    apparent_temperature: list[float | None] | None = None
    dewpoint_2m: list[float | None] | None = None
    rain: list[float | None] | None = None
    showers: list[float | None] | None = None
    snowfall: list[float | None] | None = None


class DailyPayload(BaseModel):
    time: list[str] = []
    sunrise: list[str] = []
    sunset: list[str] = []


class CurrentConditions(BaseModel):
    temperature: float
    windspeed: float
    winddirection: float
    weathercode: int | None = None
    time: str
    windgusts: float | None = None


class ForecastPayload(BaseModel):
    """A forecast as delivered by the fetch layer (open-meteo layout)."""

    hourly: HourlyPayload
    daily: DailyPayload | None = None
    current_weather: CurrentConditions | None = None
    # Offset of the (naive) local timestamps from UTC.
    utc_offset_seconds: int = 0


class HourlyRow(BaseModel):
    # The payload's timestamp string. Seeds deterministic particle jitter.
    time: str
    instant: datetime.datetime
    temperature: float
    apparent_temperature: float
    dew_point: float
    precipitation: float
    rain: float = 0
    showers: float = 0
    snowfall: float = 0
    cloud_cover: float
    wind_speed: float
    wind_direction: float

    model_config = ConfigDict(frozen=True)


class DailyRow(BaseModel):
    date: datetime.date
    sunrise: datetime.datetime
    sunset: datetime.datetime

    model_config = ConfigDict(frozen=True)


class Margin(BaseModel):
    top: float = bc.MARGIN_TOP
    right: float = bc.MARGIN_RIGHT
    bottom: float = bc.MARGIN_BOTTOM
    left: float = bc.MARGIN_LEFT

    model_config = ConfigDict(frozen=True)


class Viewport(BaseModel):
    """Pixel box of the chart container."""

    width: float
    height: float
    margin: Margin = Margin()

    model_config = ConfigDict(frozen=True)

    @property
    def inner_width(self) -> float:
        return max(self.width - self.margin.left - self.margin.right, 0)

    @property
    def inner_height(self) -> float:
        return max(self.height - self.margin.top - self.margin.bottom, 0)

    def is_degenerate(self) -> bool:
        return (
            self.width < bc.MIN_CHART_WIDTH
            or self.inner_width <= 0
            or self.inner_height <= 0
        )


class TooltipState(BaseModel):
    active_row: HourlyRow | None = None
    anchor_x: float = 0
    anchor_y: float = 0

    model_config = ConfigDict(frozen=True)

    @property
    def is_active(self) -> bool:
        return self.active_row is not None


PrecipType = Literal["rain", "snow"]


class PrecipitationEvent(BaseModel):
    kind: Literal["starts", "ends", "changes"]
    # The precipitation type the event refers to. For "changes" this is the
    # new type.
    precip_type: PrecipType
    from_type: PrecipType | None = Field(default=None, alias="from")
    to_type: PrecipType | None = Field(default=None, alias="to")
    time: str

    model_config = ConfigDict(frozen=True, populate_by_name=True)


Style = dict[str, str | float | None]


class PathPrimitive(BaseModel):
    kind: Literal["path"] = "path"
    part: str
    d: str
    style: Style = {}


class RectPrimitive(BaseModel):
    kind: Literal["rect"] = "rect"
    part: str
    x: float
    y: float
    width: float
    height: float
    rx: float = 0
    style: Style = {}


class CirclePrimitive(BaseModel):
    kind: Literal["circle"] = "circle"
    part: str
    cx: float
    cy: float
    r: float
    style: Style = {}


class LinePrimitive(BaseModel):
    kind: Literal["line"] = "line"
    part: str
    x1: float
    y1: float
    x2: float
    y2: float
    style: Style = {}


class TextPrimitive(BaseModel):
    kind: Literal["text"] = "text"
    part: str
    x: float
    y: float
    text: str
    anchor: Literal["start", "middle", "end"] = "middle"
    style: Style = {}


class GlyphPrimitive(BaseModel):
    """A positioned icon. (x, y) is the glyph center."""

    kind: Literal["glyph"] = "glyph"
    part: str
    glyph: Literal["droplet", "snowflake", "wind-arrow"]
    x: float
    y: float
    size: float
    rotation: float = 0
    style: Style = {}


Primitive = Annotated[
    Union[
        PathPrimitive,
        RectPrimitive,
        CirclePrimitive,
        LinePrimitive,
        TextPrimitive,
        GlyphPrimitive,
    ],
    Field(discriminator="kind"),
]


class Layer(BaseModel):
    name: str
    primitives: list[Primitive] = []


class LinearGradient(BaseModel):
    id: str
    x1: float = 0
    y1: float = 0
    x2: float = 0
    y2: float = 1
    from_color: str
    to_color: str
    from_opacity: float = 1
    to_opacity: float = 1
    # "userSpaceOnUse" anchors the gradient in plot coordinates.
    user_space: bool = False


class Mask(BaseModel):
    """A knock-out mask: everything is visible except the given circles."""

    id: str
    width: float
    height: float
    holes: list[CirclePrimitive] = []


class ChartDefs(BaseModel):
    gradients: list[LinearGradient] = []
    masks: list[Mask] = []


class MeteogramRender(BaseModel):
    width: float
    height: float
    margin: Margin
    defs: ChartDefs = ChartDefs()
    layers: list[Layer] = []
    next_precipitation: PrecipitationEvent | None = None
    # Set if nothing was drawn, e.g. "empty_dataset".
    suppressed_reason: str | None = None

    def layer(self, name: str) -> Layer | None:
        return next((l for l in self.layers if l.name == name), None)


class NormalizedForecast(BaseModel):
    """Hourly and daily rows derived from a single forecast payload."""

    hourly: list[HourlyRow]
    daily: list[DailyRow] = []
    utc_offset_seconds: int = 0

    model_config = ConfigDict(frozen=True)
