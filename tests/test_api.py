import pytest
from fastapi.testclient import TestClient

from rectmeasure.api import app, get_store
from rectmeasure.persistence import MemoryStorage, RecordStore

PAIR = {
    "rectangles": [
        {"x": 0, "y": 0, "width": 100, "height": 100},
        {"x": 100, "y": 100, "width": 100, "height": 100},
    ]
}


@pytest.fixture
def api_store():
    return RecordStore(MemoryStorage())


@pytest.fixture
def client(api_store):
    app.dependency_overrides[get_store] = lambda: api_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_distance_endpoint(client):
    response = client.post("/distance", json=PAIR)
    assert response.status_code == 200
    body = response.json()
    assert body["distance"] == pytest.approx(141.42, abs=0.01)
    assert body["centers"] == [{"x": 50, "y": 50}, {"x": 150, "y": 150}]


def test_create_and_list_records(client, api_store):
    response = client.post("/records", json=PAIR)
    assert response.status_code == 201
    created = response.json()
    assert set(created) == {"id", "rectangles", "distance", "createdAt"}
    assert created["distance"] == pytest.approx(141.42, abs=0.01)

    listed = client.get("/records").json()["records"]
    assert listed == [created]
    assert api_store.get(created["id"]) is not None


def test_create_requires_exactly_two_rectangles(client, api_store):
    single = {"rectangles": PAIR["rectangles"][:1]}
    assert client.post("/records", json=single).status_code == 422
    triple = {"rectangles": PAIR["rectangles"] * 2}
    assert client.post("/records", json=triple).status_code == 422
    assert api_store.list() == []


def test_negative_dimensions_rejected(client):
    bad = {"rectangles": [PAIR["rectangles"][0], {"x": 0, "y": 0, "width": -5, "height": 1}]}
    assert client.post("/distance", json=bad).status_code == 422


def test_get_record(client):
    created = client.post("/records", json=PAIR).json()
    assert client.get(f"/records/{created['id']}").json() == created
    assert client.get("/records/missing").status_code == 404


def test_delete_record_and_unknown_id(client):
    first = client.post("/records", json=PAIR).json()
    second = client.post("/records", json=PAIR).json()

    assert client.delete(f"/records/{first['id']}").status_code == 204
    assert client.delete("/records/missing").status_code == 204
    ids = [record["id"] for record in client.get("/records").json()["records"]]
    assert ids == [second["id"]]


def test_clear_records(client):
    client.post("/records", json=PAIR)
    assert client.delete("/records").status_code == 204
    assert client.get("/records").json() == {"records": []}
