from fastapi import FastAPI
from fastapi.testclient import TestClient
import pytest

from api.routes import services as services_router
from domain.models import Garage
from repositories import GaragesRepository


@pytest.fixture
def client(session_factory, monkeypatch):
    monkeypatch.setattr(services_router, "SessionLocal", session_factory)
    with session_factory() as session:
        GaragesRepository().create_garage(
            session, Garage(id="g1", name="Speedy", latitude=0.0, longitude=0.0)
        )
    app = FastAPI()
    app.include_router(services_router.router, prefix="/api/services")
    return TestClient(app)


def test_service_lifecycle(client):
    resp = client.post(
        "/api/services",
        json={"garage_id": "g1", "name": "Oil Change", "description": "Synthetic", "price": 49.99},
    )
    assert resp.status_code == 201
    service = resp.json()
    assert service["price"] == 49.99

    assert client.get(f"/api/services/{service['id']}").json()["name"] == "Oil Change"
    assert [s["id"] for s in client.get("/api/services/garage/g1").json()] == [service["id"]]
    assert len(client.get("/api/services").json()) == 1

    resp = client.put(f"/api/services/{service['id']}", json={"description": "Full synthetic"})
    assert resp.status_code == 200
    assert resp.json()["description"] == "Full synthetic"
    assert resp.json()["price"] == 49.99

    assert client.delete(f"/api/services/{service['id']}").status_code == 204
    assert client.get(f"/api/services/{service['id']}").status_code == 404


def test_create_service_for_unknown_garage_is_400(client):
    resp = client.post("/api/services", json={"garage_id": "ghost", "name": "Oil Change", "price": 10})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Garage with ID ghost not found"


def test_negative_price_rejected(client):
    resp = client.post("/api/services", json={"garage_id": "g1", "name": "Oil Change", "price": -1})
    assert resp.status_code == 422


def test_missing_service_is_404(client):
    assert client.put("/api/services/nope", json={"price": 1}).status_code == 404
    assert client.delete("/api/services/nope").status_code == 404
