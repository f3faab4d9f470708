from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fleet import BuildingConfig
from server import app as server_app


@pytest.fixture
def client():
    server_app.manager.rebuild(BuildingConfig())
    return TestClient(server_app.app)


def test_state_starts_running(client):
    response = client.get("/state")
    assert response.status_code == 200
    payload = response.json()
    assert payload["time"] == 0
    assert payload["building"]["system_status"] == "running"
    assert payload["building"]["num_elevators"] == 8
    assert payload["report"].startswith("BuildingReport:\n")


def test_add_request_and_step(client):
    response = client.post("/requests", json={"start_floor": 2, "end_floor": 3})
    assert response.status_code == 200
    assert response.json()["building"]["up_requests"] == ["3->4"]

    response = client.post("/step", json={"ticks": 1})
    payload = response.json()
    assert payload["time"] == 1
    assert payload["building"]["up_requests"] == []
    assert payload["building"]["elevators"][0]["text"] == "[1|^|C  ]< -- --  2  3 -- -- -- -- -- -- -->"


def test_invalid_request_conflict(client):
    response = client.post("/requests", json={"start_floor": 4, "end_floor": 4})
    assert response.status_code == 409


def test_step_validates_ticks(client):
    assert client.post("/step", json={"ticks": 0}).status_code == 422


def test_stop_then_start(client):
    client.post("/step", json={"ticks": 7})
    response = client.post("/stop")
    assert response.json()["building"]["system_status"] == "stopping"

    assert client.post("/start").status_code == 409

    client.post("/step", json={"ticks": 2})
    assert client.get("/state").json()["building"]["system_status"] == "out_of_service"
    assert client.post("/requests", json={"start_floor": 1, "end_floor": 2}).status_code == 409

    response = client.post("/start")
    assert response.status_code == 200
    assert response.json()["started"] is True
    assert response.json()["building"]["system_status"] == "running"


def test_random_requests_are_seeded(client):
    first = client.post("/requests/random", json={"count": 5, "seed": 4}).json()
    assert first["accepted"] == 5
    queued = first["building"]["up_requests"] + first["building"]["down_requests"]

    server_app.manager.rebuild(BuildingConfig())
    second = client.post("/requests/random", json={"count": 5, "seed": 4}).json()
    assert second["building"]["up_requests"] + second["building"]["down_requests"] == queued


def test_configure_building(client):
    response = client.post(
        "/building",
        json={"num_floors": 4, "num_elevators": 2, "elevator_capacity": 1, "autostart": False},
    )
    assert response.status_code == 200
    building = response.json()["building"]
    assert building["num_floors"] == 4
    assert building["system_status"] == "out_of_service"


def test_configure_building_rejects_invalid(client):
    response = client.post("/building", json={"num_floors": 1})
    assert response.status_code == 400
    assert "floors" in response.json()["detail"]


def test_websocket_sends_current_state(client):
    with client.websocket_connect("/ws/stream") as websocket:
        payload = websocket.receive_json()
        websocket.send_text("refresh")
        refreshed = websocket.receive_json()
    assert payload["building"]["system_status"] == "running"
    assert refreshed == payload
