import pytest
from fastapi.testclient import TestClient

from .app import app
from .testhelpers import make_daily, make_payload


@pytest.fixture
def client(monkeypatch):
    for k in ["METEOGRAM_UNIT_SYSTEM", "METEOGRAM_WIDTH", "METEOGRAM_HEIGHT"]:
        monkeypatch.delenv(k, raising=False)
    monkeypatch.setenv("METEOGRAM_MARGIN", "60,0,40,0")
    # Entering the context runs the lifespan, which loads the settings.
    with TestClient(app) as c:
        yield c


def _payload(**kwargs):
    return make_payload(n=48, daily=make_daily(days=2), **kwargs)


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_meteogram_json(client):
    resp = client.post(
        "/meteogram",
        json={"payload": _payload(), "viewport": {"width": 480, "height": 300}},
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["width"] == 480
    assert data["suppressed_reason"] is None
    assert [l["name"] for l in data["layers"]][:2] == ["night", "grid"]


def test_meteogram_default_viewport(client):
    resp = client.post("/meteogram", json={"payload": _payload()})
    assert resp.status_code == 200
    assert resp.json()["width"] == 800


def test_meteogram_svg(client):
    resp = client.post(
        "/meteogram",
        json={"payload": _payload()},
        headers={"Accept": "image/svg+xml"},
    )
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("image/svg+xml")
    assert resp.text.startswith("<svg")


def test_meteogram_next_precipitation(client):
    precipitation = [0.0] * 48
    precipitation[20] = 1.0
    resp = client.post(
        "/meteogram",
        json={
            "payload": _payload(precipitation=precipitation, rain=precipitation),
            "now": "2025-01-06T18:00:00",
        },
    )
    assert resp.status_code == 200
    assert resp.json()["next_precipitation"] == {
        "kind": "starts",
        "precip_type": "rain",
        "from": None,
        "to": None,
        "time": "2025-01-06T20:00",
    }


def test_meteogram_empty(client):
    resp = client.post("/meteogram", json={"payload": make_payload(n=0)})
    assert resp.status_code == 200
    assert resp.json()["suppressed_reason"] == "empty_dataset"


def test_meteogram_malformed(client):
    resp = client.post("/meteogram", json={"payload": make_payload(n=3, rain=[0.0])})
    assert resp.status_code == 422
    assert resp.json()["field"] == "rain"


def test_tooltip(client):
    resp = client.post(
        "/meteogram/tooltip",
        json={
            "payload": make_payload(n=3),
            "viewport": {"width": 480, "height": 300},
            "pointer_x": 250,
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["state"]["active_row"]["time"] == "2025-01-06T01:00"
    assert data["state"]["anchor_x"] == pytest.approx(240)
    assert data["lines"] == [
        "01:00",
        "Temp: 6°",
        "Rain: 0mm",
        "Wind: 10 km/h W",
        "Cloud: 50%",
    ]


def test_tooltip_imperial(client):
    resp = client.post(
        "/meteogram/tooltip",
        json={"payload": make_payload(n=3), "unit_system": "imperial", "pointer_x": 0},
    )
    assert resp.status_code == 200
    assert resp.json()["lines"][1] == "Temp: 41°"


def test_tooltip_degenerate_viewport(client):
    resp = client.post(
        "/meteogram/tooltip",
        json={
            "payload": make_payload(n=3),
            "viewport": {"width": 5, "height": 300},
            "pointer_x": 2,
        },
    )
    assert resp.status_code == 200
    assert resp.json() == {
        "state": {"active_row": None, "anchor_x": 0, "anchor_y": 0},
        "lines": [],
    }


def test_next_precipitation(client):
    snowfall = [0.0] * 48
    precipitation = [0.0] * 48
    for i in (3, 4):
        precipitation[i] = 1.0
        snowfall[i] = 0.7
    resp = client.post(
        "/meteogram/next-precipitation",
        json={
            "payload": _payload(precipitation=precipitation, snowfall=snowfall),
            "now": "2025-01-06T00:00:00",
        },
    )
    assert resp.status_code == 200
    data = resp.json()
    assert data["event"]["kind"] == "starts"
    assert data["event"]["precip_type"] == "snow"
    assert data["text"] == "Snow in 3 hours"


def test_next_precipitation_none(client):
    resp = client.post(
        "/meteogram/next-precipitation",
        json={"payload": _payload(), "now": "2025-01-06T00:00:00"},
    )
    assert resp.status_code == 200
    assert resp.json() == {"event": None, "text": None}


def test_vega(client):
    resp = client.post("/meteogram/vega", json={"payload": _payload()})
    assert resp.status_code == 200
    assert "meteogram" in resp.json()["vega_specs"]


def test_vega_html(client):
    resp = client.post(
        "/meteogram/vega",
        json={"payload": _payload()},
        headers={"Accept": "text/html"},
    )
    assert resp.status_code == 200
    assert "vega-embed" in resp.text


def test_vega_invalid_chart_param(client):
    resp = client.post(
        "/meteogram/vega?chart=nope",
        json={"payload": _payload()},
        headers={"Accept": "text/html"},
    )
    assert resp.status_code == 400


def test_vega_empty(client):
    resp = client.post("/meteogram/vega", json={"payload": make_payload(n=0)})
    assert resp.status_code == 404
