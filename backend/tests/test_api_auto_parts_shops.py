from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from api.routes import auto_parts_shops as shops_router


@pytest.fixture
def client(session_factory, monkeypatch):
    monkeypatch.setattr(shops_router, "SessionLocal", session_factory)
    app = FastAPI()
    app.include_router(shops_router.router, prefix="/api/auto-parts-shops")
    return TestClient(app)


def test_shop_lifecycle(client):
    resp = client.post(
        "/api/auto-parts-shops",
        json={"name": "Parts R Us", "address": "5 Side St", "latitude": 10.5, "longitude": 20.25, "rating": 4.2},
    )
    assert resp.status_code == 201
    shop_id = resp.json()["id"]

    assert [s["id"] for s in client.get("/api/auto-parts-shops").json()] == [shop_id]

    resp = client.put(f"/api/auto-parts-shops/{shop_id}", json={"name": "Parts Galore"})
    assert resp.status_code == 200
    assert resp.json()["name"] == "Parts Galore"
    assert resp.json()["latitude"] == 10.5

    assert client.delete(f"/api/auto-parts-shops/{shop_id}").status_code == 204
    resp = client.get(f"/api/auto-parts-shops/{shop_id}")
    assert resp.status_code == 404
    assert resp.json()["detail"] == f"Auto parts shop with ID {shop_id} not found"


def test_shop_rating_out_of_range(client):
    resp = client.post(
        "/api/auto-parts-shops",
        json={"name": "Parts", "latitude": 0, "longitude": 0, "rating": 7},
    )
    assert resp.status_code == 422
