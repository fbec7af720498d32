import datetime

import pytest

from service.meteogram.base import dates


def test_parse_instant_minute_precision():
    assert dates.parse_instant("2025-01-06T14:00") == datetime.datetime(2025, 1, 6, 14)


def test_parse_instant_utc_suffix():
    d = dates.parse_instant("2025-01-06T14:00Z")
    assert d.tzinfo is not None
    assert d.utcoffset() == datetime.timedelta(0)


def test_parse_instant_invalid():
    with pytest.raises(ValueError):
        dates.parse_instant("yesterday")


def test_millis_roundtrip_naive():
    d = datetime.datetime(2025, 1, 6, 14, 30)
    assert dates.from_millis(dates.to_millis(d), like=d) == d


def test_align_instant_aware_to_local_wall_clock():
    now = datetime.datetime(2025, 1, 6, 4, 0, tzinfo=datetime.timezone.utc)
    like = datetime.datetime(2025, 1, 6, 0, 0)
    assert dates.align_instant(now, like, utc_offset_seconds=3600) == (
        datetime.datetime(2025, 1, 6, 5, 0)
    )


def test_align_instant_naive_against_aware():
    now = datetime.datetime(2025, 1, 6, 4, 0)
    like = datetime.datetime(2025, 1, 6, 0, 0, tzinfo=datetime.timezone.utc)
    assert dates.align_instant(now, like).tzinfo == datetime.timezone.utc


def test_weekday_abbr():
    assert dates.weekday_abbr(datetime.datetime(2025, 1, 6)) == "MON"
    assert dates.weekday_abbr(datetime.datetime(2025, 1, 12)) == "SUN"



def test_parse_instants_offsets_change():
    utc = datetime.timezone.utc
    assert dates.parse_instants(
        ["2025-10-26T02:00+02:00", "2025-10-26T02:00+01:00"]
    ) == [
        datetime.datetime(2025, 10, 26, 0, tzinfo=utc),
        datetime.datetime(2025, 10, 26, 1, tzinfo=utc),
    ]


def test_parse_instants_dates_are_naive():
    assert dates.parse_instants(["2025-01-06", "2025-01-07"]) == [
        datetime.datetime(2025, 1, 6),
        datetime.datetime(2025, 1, 7),
    ]


def test_parse_instants_mixed_awareness():
    with pytest.raises(ValueError):
        dates.parse_instants(["2025-01-06T00:00", "2025-01-06T01:00Z"])
