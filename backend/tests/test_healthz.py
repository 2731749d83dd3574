from app.main import app
from tests.http_client import SyncASGIClient


def test_healthz_200():
    client = SyncASGIClient(app)
    resp = client.get("/healthz")

    assert resp.status_code == 200
    assert resp.json() == {"ok": "true"}


def test_healthz_reflects_any_origin_with_credentials():
    client = SyncASGIClient(app)
    resp = client.get("/healthz", headers={"Origin": "http://localhost:5173"})

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://localhost:5173"
    assert resp.headers["access-control-allow-credentials"] == "true"


def test_cors_preflight_for_teach_endpoint():
    client = SyncASGIClient(app)
    resp = client.request(
        "OPTIONS",
        "/api/teach",
        headers={
            "Origin": "http://ui.example",
            "Access-Control-Request-Method": "POST",
            "Access-Control-Request-Headers": "content-type",
        },
    )

    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "http://ui.example"
