from fastapi.testclient import TestClient

import showbook.app as app_module
from showbook.app import create_app
from showbook.core.config import Settings
from showbook.core.locks import LocalShowLocks
from showbook.storage.memory import MemoryStorage


API = "/api/v1"


def test_health(client):
    response = client.get(f"{API}/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_seeded_shows_listed_by_start_time(client):
    response = client.get(f"{API}/shows")
    assert response.status_code == 200
    shows = response.json()
    assert [show["id"] for show in shows] == ["s1", "s2", "s3"]
    assert shows[0]["total_seats"] == 30
    assert shows[1]["type"] == "trip"
    assert shows[2]["total_seats"] is None
    assert shows[2]["type"] == "appointment"


def test_create_show_with_defaults(client):
    response = client.post(f"{API}/shows", json={})
    assert response.status_code == 201
    show = response.json()
    assert show["name"] == "Untitled"
    assert show["type"] == "show"
    assert show["total_seats"] is None
    assert show["price"] is None

    fetched = client.get(f"{API}/shows/{show['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["id"] == show["id"]


def test_create_show_rejects_negative_capacity(client):
    response = client.post(f"{API}/shows", json={"name": "Broken", "total_seats": -1})
    assert response.status_code == 422


def test_create_show_rejects_unknown_type(client):
    response = client.post(f"{API}/shows", json={"name": "Concert", "type": "concert"})
    assert response.status_code == 422


def test_create_show_with_taken_id(client):
    response = client.post(f"{API}/shows", json={"id": "s1"})
    assert response.status_code == 409
    assert "already exists" in response.json()["error"]


def test_get_unknown_show(client):
    response = client.get(f"{API}/shows/unknown")
    assert response.status_code == 404
    assert response.json() == {"error": "Show unknown not found"}


def test_booking_flow(client):
    alice = client.post(f"{API}/bookings", json={"show_id": "s1", "seats": [1, 2], "name": "Alice"})
    assert alice.status_code == 201
    assert alice.json()["seats"] == [1, 2]
    assert alice.json()["status"] == "confirmed"

    bob = client.post(f"{API}/bookings", json={"show_id": "s1", "seats": [2], "name": "Bob"})
    assert bob.status_code == 409
    assert bob.json()["error"] == "Some seats already booked: 2"

    carol = client.post(f"{API}/bookings", json={"show_id": "s1", "seats": [31], "name": "Carol"})
    assert carol.status_code == 400
    assert carol.json()["error"].startswith("Invalid seats requested: 31")

    seat_map = client.get(f"{API}/shows/s1/seat-map").json()
    assert seat_map["taken"] == [1, 2]
    assert len(seat_map["available"]) == 28

    bookings = client.get(f"{API}/bookings").json()
    assert [booking["name"] for booking in bookings] == ["Alice"]


def test_booking_unknown_show(client):
    response = client.post(f"{API}/bookings", json={"show_id": "zzz", "seats": [1]})
    assert response.status_code == 400
    assert response.json() == {"error": "Invalid show_id zzz"}
    assert client.get(f"{API}/bookings").json() == []


def test_booking_rejects_non_integer_seats(client):
    response = client.post(f"{API}/bookings", json={"show_id": "s1", "seats": ["front-row"]})
    assert response.status_code == 422


def test_appointment_booking_without_seats(client):
    response = client.post(f"{API}/bookings", json={"show_id": "s3", "name": "Dana", "email": "dana@example.com"})
    assert response.status_code == 201
    assert response.json()["seats"] == []
    assert response.json()["email"] == "dana@example.com"


def test_list_bookings_filtered_by_show(client):
    client.post(f"{API}/bookings", json={"show_id": "s1", "seats": [4]})
    client.post(f"{API}/bookings", json={"show_id": "s2", "seats": [4]})

    response = client.get(f"{API}/bookings", params={"show_id": "s2"})

    assert response.status_code == 200
    assert [booking["show_id"] for booking in response.json()] == ["s2"]


def test_reset_restores_seed(client):
    client.post(f"{API}/shows", json={"id": "extra"})
    client.post(f"{API}/bookings", json={"show_id": "s1", "seats": [1]})

    response = client.post(f"{API}/reset")

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    assert [show["id"] for show in client.get(f"{API}/shows").json()] == ["s1", "s2", "s3"]
    assert client.get(f"{API}/bookings").json() == []


def _client_with(**overrides):
    test_settings = Settings(ENV="test", STORAGE_BACKEND="memory", LOCK_BACKEND="local", LOG_LEVEL="WARNING", **overrides)
    return TestClient(create_app(settings=test_settings, storage=MemoryStorage(), show_locks=LocalShowLocks()))


def test_reset_can_be_disabled():
    with _client_with(ALLOW_RESET=False) as client:
        client.post(f"{API}/bookings", json={"show_id": "s1", "seats": [1]})

        response = client.post(f"{API}/reset")

        assert response.status_code == 403
        assert response.json() == {"error": "Reset is disabled in this environment"}
        assert len(client.get(f"{API}/bookings").json()) == 1


def test_strict_mode_rejects_seats_for_appointments():
    with _client_with(REJECT_SEATS_WITHOUT_SEAT_MODEL=True) as client:
        response = client.post(f"{API}/bookings", json={"show_id": "s3", "seats": [1]})
        assert response.status_code == 400
        assert client.get(f"{API}/bookings").json() == []

        without_seats = client.post(f"{API}/bookings", json={"show_id": "s3"})
        assert without_seats.status_code == 201


def test_appointment_seats_dropped_by_default():
    with _client_with(REJECT_SEATS_WITHOUT_SEAT_MODEL=False) as client:
        response = client.post(f"{API}/bookings", json={"show_id": "s3", "seats": [1]})
        assert response.status_code == 201
        assert response.json()["seats"] == []


def test_unexpected_error_is_logged_and_hidden(monkeypatch):
    logged = []
    monkeypatch.setattr(app_module.logger, "error", lambda msg, *args, **kwargs: logged.append(msg % args))
    app = create_app(settings=Settings(ENV="test", LOG_LEVEL="WARNING"), storage=MemoryStorage(), show_locks=LocalShowLocks())

    @app.get("/boom")
    async def boom():
        raise RuntimeError("disk on fire")

    with TestClient(app, raise_server_exceptions=False) as client:
        response = client.get("/boom")

    assert response.status_code == 500
    assert response.json() == {"error": "Internal server error"}
    assert logged == ["unhandled error on GET /boom: disk on fire"]
