import datetime
import re

import pandas as pd

# A time part followed by a UTC offset, e.g. "T14:00Z" or "T14:00+02:00".
_TZ_SUFFIX = re.compile(r"T[0-9:.]+(Z|[+-]\d{2}(:?\d{2})?)$")


def parse_instants(values: list[str]) -> list[datetime.datetime]:
    """Parses ISO-8601 timestamps as returned by forecast APIs.

    Values with a UTC offset ("Z", "+02:00") are returned as aware datetimes in
    UTC, so the offset may change within a series (e.g. across a DST switch).
    Values without an offset are returned naive.

    Raises:
        ValueError if a value cannot be parsed, or if naive and aware values
        are mixed.
    """
    aware = {bool(_TZ_SUFFIX.search(v)) for v in values}
    if len(aware) > 1:
        raise ValueError("timestamps mix naive and timezone-aware values")
    parsed = pd.to_datetime(
        pd.Series(values, dtype=object), format="ISO8601", utc=True in aware
    )
    if parsed.isna().any():
        raise ValueError("missing timestamp")
    return [pd.Timestamp(ts).to_pydatetime() for ts in parsed]


def parse_instant(s: str) -> datetime.datetime:
    """Parses a single timestamp, see parse_instants."""
    if not isinstance(s, str):
        raise ValueError(f"not a timestamp string: {s!r}")
    return parse_instants([s])[0]


def to_millis(d: datetime.datetime) -> float:
    """Returns milliseconds since the epoch.

    Naive datetimes are treated as UTC. Only differences between values of the
    same kind (naive or aware) are meaningful.
    """
    if d.tzinfo is None:
        d = d.replace(tzinfo=datetime.timezone.utc)
    return d.timestamp() * 1000


def from_millis(ms: float, like: datetime.datetime) -> datetime.datetime:
    """Inverse of to_millis. The result has the same kind (naive/aware) as `like`."""
    d = datetime.datetime.fromtimestamp(ms / 1000, tz=datetime.timezone.utc)
    if like.tzinfo is None:
        return d.replace(tzinfo=None)
    return d.astimezone(like.tzinfo)


def align_instant(
    d: datetime.datetime, like: datetime.datetime, utc_offset_seconds: int = 0
) -> datetime.datetime:
    """Returns d in a form that can be compared with `like`.

    Forecast timestamps are usually naive local wall-clock times. An aware `d`
    is shifted to that wall clock using utc_offset_seconds. A naive `d` compared
    against aware timestamps is assumed to be in UTC.
    """
    if like.tzinfo is None and d.tzinfo is not None:
        local = d.astimezone(datetime.timezone.utc) + datetime.timedelta(
            seconds=utc_offset_seconds
        )
        return local.replace(tzinfo=None)
    if like.tzinfo is not None and d.tzinfo is None:
        return d.replace(tzinfo=datetime.timezone.utc)
    return d


def is_midnight(d: datetime.datetime) -> bool:
    return d.hour == 0 and d.minute == 0 and d.second == 0


def weekday_abbr(d: datetime.datetime) -> str:
    """Upper-case abbreviated weekday name, e.g. "MON"."""
    return WEEKDAY_ABBRS[d.weekday()]


def hour_minute(d: datetime.datetime) -> str:
    return d.strftime("%H:%M")


WEEKDAY_ABBRS = ["MON", "TUE", "WED", "THU", "FRI", "SAT", "SUN"]
