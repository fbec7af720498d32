from altair.utils import spec_to_html
from contextlib import asynccontextmanager
import datetime
import logging
from fastapi import FastAPI, Request, status, Response
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel

from service.meteogram.base import logging_config as _  # configure logging

from service.meteogram import models
from service.meteogram.base import units
from service.meteogram.base.errors import EmptyDatasetError, MalformedDatasetError
from service.meteogram.calc import events
from service.meteogram.calc.normalize import normalize_forecast
from service.meteogram.calc.tooltip import tooltip_lines
from service.meteogram.charts import charts
from service.meteogram.charts import meteogram
from service.meteogram.charts.svg import to_svg
from service.meteogram.env import MeteogramSettings


logger = logging.getLogger("app")


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = MeteogramSettings.from_env()
    logger.info(
        "Starting with unit_system=%s, default viewport %dx%d",
        settings.unit_system,
        settings.width,
        settings.height,
    )
    app.state.settings = settings

    yield

    logger.info("Shutting down")


# Always create the app, we're running this thing with uvicorn ONLY.
app = FastAPI(lifespan=lifespan)


class MeteogramRequest(BaseModel):
    payload: models.ForecastPayload
    viewport: models.Viewport | None = None
    unit_system: units.UnitSystem | None = None
    now: datetime.datetime | None = None


class TooltipRequest(MeteogramRequest):
    # Pointer position in container coordinates (margin included).
    pointer_x: float


class TooltipResponse(BaseModel):
    state: models.TooltipState
    lines: list[str] = []


class NextPrecipitationRequest(BaseModel):
    payload: models.ForecastPayload
    now: datetime.datetime


class NextPrecipitationResponse(BaseModel):
    event: models.PrecipitationEvent | None = None
    text: str | None = None


def _settings(request: Request) -> MeteogramSettings:
    return request.app.state.settings


def _viewport(request: Request, req: MeteogramRequest) -> models.Viewport:
    return req.viewport or _settings(request).viewport()


def _unit_system(request: Request, req: MeteogramRequest) -> units.UnitSystem:
    return req.unit_system or _settings(request).unit_system


def _render_html(request: Request, charts_: dict[str, charts.AltairChart]) -> Response:
    # NOTE: chart.to_html() fixes the vega versions and they cannot be
    # overridden, so we go through spec_to_html.
    if c := request.query_params.get("chart"):
        if c not in charts_:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "detail": f"Invalid chart= query param, must be {','.join(charts_)}"
                },
            )
        chart = charts_[c]
    else:
        # Arbitrarily pick the first chart
        chart = next(iter(charts_.values()))

    html = spec_to_html(
        chart.to_dict(),
        mode="vega-lite",
        vega_version=charts.VEGA_VERSION,
        vegalite_version=charts.VEGA_LITE_VERSION,
        vegaembed_version=charts.VEGA_EMBED_VERSION,
        base_url="https://unpkg.com",
    )
    return HTMLResponse(content=html)


def _vega_chart(request: Request, charts_: dict[str, charts.AltairChart]) -> Response:
    if "text/html" in request.headers.get("accept", ""):
        return _render_html(request, charts_)

    specs = {name: chart.to_dict() for name, chart in charts_.items()}
    return JSONResponse(
        content={
            "vega_specs": specs,
        }
    )


@app.exception_handler(MalformedDatasetError)
async def malformed_dataset_handler(request, exc: MalformedDatasetError):
    logger.info("Rejecting malformed forecast: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": str(exc), "field": exc.field},
    )


@app.exception_handler(EmptyDatasetError)
async def empty_dataset_handler(request, exc: EmptyDatasetError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)},
    )


@app.get("/health")
def health():
    """Health check endpoint for cloud deployments."""
    return {"status": "ok"}


@app.post("/meteogram")
def post_meteogram(request: Request, req: MeteogramRequest) -> Response:
    """Renders the meteogram as draw primitives (JSON) or as an SVG document."""
    render = meteogram.render_meteogram(
        req.payload,
        _viewport(request, req),
        unit_system=_unit_system(request, req),
        now=req.now,
    )
    if "image/svg+xml" in request.headers.get("accept", ""):
        return Response(content=to_svg(render), media_type="image/svg+xml")
    return JSONResponse(content=render.model_dump(mode="json", by_alias=True))


@app.post("/meteogram/tooltip")
def post_tooltip(request: Request, req: TooltipRequest) -> TooltipResponse:
    forecast = normalize_forecast(req.payload)
    engine = meteogram.tooltip_engine(forecast, _viewport(request, req))
    state = engine.pointer_move(req.pointer_x)
    lines = []
    if state.active_row is not None:
        lines = tooltip_lines(state.active_row, _unit_system(request, req))
    return TooltipResponse(state=state, lines=lines)


@app.post("/meteogram/next-precipitation")
def post_next_precipitation(req: NextPrecipitationRequest) -> NextPrecipitationResponse:
    forecast = normalize_forecast(req.payload)
    event = events.next_precipitation(
        forecast.hourly, req.now, utc_offset_seconds=forecast.utc_offset_seconds
    )
    if event is None:
        return NextPrecipitationResponse()
    return NextPrecipitationResponse(
        event=event,
        text=events.describe_event(
            event, req.now, utc_offset_seconds=forecast.utc_offset_seconds
        ),
    )


@app.post("/meteogram/vega")
def post_meteogram_vega(request: Request, req: MeteogramRequest) -> Response:
    forecast = normalize_forecast(req.payload)
    chart = charts.meteogram_chart(forecast.hourly, _unit_system(request, req))
    return _vega_chart(request, {"meteogram": chart})
