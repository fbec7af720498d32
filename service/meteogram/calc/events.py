"""Finds the next start, end or type change of precipitation."""

import bisect
import datetime

from service.meteogram import models
from service.meteogram.base import constants as bc
from service.meteogram.base import dates
from service.meteogram.base import units
from service.meteogram.calc import precip


def next_precipitation(
    rows: list[models.HourlyRow],
    now: datetime.datetime,
    utc_offset_seconds: int = 0,
    horizon_hours: int = bc.PRECIP_HORIZON_HOURS,
) -> models.PrecipitationEvent | None:
    """Scans forward from the first row at or after now, up to horizon_hours.

    If that first row is already precipitating, the scan looks for the end of
    the precipitation or a change between rain and snow. Otherwise it looks
    for the first onset.

    Returns:
        The first qualifying event, or None if there are no rows at or after
        now or nothing happens within the horizon.
    """
    if not rows:
        return None
    now = dates.align_instant(now, rows[0].instant, utc_offset_seconds)
    limit = now + datetime.timedelta(hours=horizon_hours)

    start = bisect.bisect_left([r.instant for r in rows], now)
    if start >= len(rows):
        return None

    current = precip.precip_type(rows[start])
    if current is not None:
        for row in rows[start + 1 :]:
            if row.instant > limit:
                break
            typ = precip.precip_type(row)
            if typ is None:
                return models.PrecipitationEvent(
                    kind="ends", precip_type=current, time=row.time
                )
            if typ != current:
                return models.PrecipitationEvent(
                    kind="changes",
                    precip_type=typ,
                    from_type=current,
                    to_type=typ,
                    time=row.time,
                )
    else:
        for row in rows[start:]:
            if row.instant > limit:
                break
            typ = precip.precip_type(row)
            if typ is not None:
                return models.PrecipitationEvent(
                    kind="starts", precip_type=typ, time=row.time
                )
    return None


def _relative(delta: datetime.timedelta) -> str:
    minutes = units.js_round(delta.total_seconds() / 60)
    if minutes <= 0:
        return "now"
    if minutes < 60:
        return f"in {minutes} minute{'s' if minutes != 1 else ''}"
    hours = units.js_round(minutes / 60)
    return f"in {hours} hour{'s' if hours != 1 else ''}"


def describe_event(
    event: models.PrecipitationEvent,
    now: datetime.datetime,
    utc_offset_seconds: int = 0,
) -> str:
    """Returns a status line like "Rain in 3 hours" or "Snow ending in 2 hours"."""
    when = dates.parse_instant(event.time)
    now = dates.align_instant(now, when, utc_offset_seconds)
    rel = _relative(when - now)
    name = event.precip_type.capitalize()
    if event.kind == "ends":
        return f"{name} ending {rel}"
    if event.kind == "changes":
        return f"{event.from_type.capitalize()} → {event.to_type.capitalize()} {rel}"
    return f"{name} {rel}"
