"""Tests for the HTTP API.

VR sessions are used where prices are asserted, since the VR table is the
same in every tariff window.
Run with: pytest tests/test_session_api.py -v
"""

from uuid import uuid4

import pytest


def create_vr_session(api_client, people_count=2, unit=1, **extra):
    payload = {
        "customer_name": "Ravi",
        "people_count": people_count,
        "duration_minutes": 45,
        "units": {"vr": [unit]},
        **extra,
    }
    response = api_client.post("/api/sessions", payload, format="json")
    assert response.status_code == 201, response.data
    return response.data


@pytest.mark.django_db
class TestSessionEndpoints:
    def test_create_session(self, api_client):
        data = create_vr_session(api_client)
        assert data["price"] == "360.00"
        assert data["paid_amount"] == "0.00"
        assert data["remaining_amount"] == "360.00"
        assert data["devices"] == {"vr": 1}
        assert data["units"] == {"vr": [1]}
        assert data["status"] == "active"
        assert data["window"] in {"happy_hour", "normal_hour", "fun_night", "fallback"}

    def test_create_session_default_duration(self, api_client):
        response = api_client.post(
            "/api/sessions",
            {"customer_name": "Ravi", "people_count": 1, "devices": {"vr": 1}},
            format="json",
        )
        assert response.status_code == 201
        assert response.data["duration_minutes"] == 60
        assert response.data["price"] == "180.00"

    def test_create_session_missing_fields(self, api_client):
        response = api_client.post("/api/sessions", {"people_count": 1}, format="json")
        assert response.status_code == 400

    def test_create_session_without_devices(self, api_client):
        response = api_client.post(
            "/api/sessions", {"customer_name": "Ravi", "people_count": 1}, format="json"
        )
        assert response.status_code == 400
        assert response.data["code"] == "INVALID_INPUT"

    def test_create_session_unknown_device(self, api_client):
        response = api_client.post(
            "/api/sessions",
            {"customer_name": "Ravi", "people_count": 1, "devices": {"xbox": 1}},
            format="json",
        )
        assert response.status_code == 400

    def test_device_collision(self, api_client):
        create_vr_session(api_client, unit=2)
        response = api_client.post(
            "/api/sessions",
            {"customer_name": "Asha", "people_count": 1, "units": {"vr": [2]}},
            format="json",
        )
        assert response.status_code == 400
        assert response.data["code"] == "DEVICE_UNAVAILABLE"

    def test_get_session(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.get(f"/api/sessions/{created['id']}")
        assert response.status_code == 200
        assert response.data["id"] == created["id"]

    def test_get_session_invalid_id(self, api_client):
        response = api_client.get("/api/sessions/not-a-uuid")
        assert response.status_code == 400
        assert response.data == {"code": "INVALID_SESSION_ID", "message": "Invalid session ID format"}

    def test_get_session_not_found(self, api_client):
        response = api_client.get(f"/api/sessions/{uuid4()}")
        assert response.status_code == 404
        assert response.data["code"] == "SESSION_NOT_FOUND"

    def test_extend(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/extend", {"extra_minutes": 15}, format="json"
        )
        assert response.status_code == 200
        assert response.data["duration_minutes"] == 60
        assert response.data["price"] == "460.00"

    def test_extend_negative_minutes(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/extend", {"extra_minutes": -5}, format="json"
        )
        assert response.status_code == 400

    def test_add_member(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/members",
            {"name": "Asha", "people_count": 1, "devices": {"vr": 1}},
            format="json",
        )
        assert response.status_code == 200
        assert response.data["price"] == "540.00"
        assert response.data["people_count"] == 3
        assert response.data["members"][0]["name"] == "Asha"

    def test_add_snacks(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/snacks", {"items": {"1": 2}}, format="json"
        )
        assert response.status_code == 200
        assert response.data["price"] == "440.00"
        assert response.data["snacks"][0]["amount"] == "80.00"

    def test_add_unknown_snack(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/snacks", {"items": {"42": 1}}, format="json"
        )
        assert response.status_code == 400
        assert response.data["code"] == "UNKNOWN_SNACK"

    def test_settle(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/settle", {"heads_paying_now": 1}, format="json"
        )
        assert response.status_code == 200
        assert response.data["amount_paid"] == "180.00"
        assert response.data["session"]["paid_people"] == 1
        assert response.data["session"]["remaining_amount"] == "180.00"

    def test_settle_too_many_heads(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.post(
            f"/api/sessions/{created['id']}/settle", {"heads_paying_now": 3}, format="json"
        )
        assert response.status_code == 422
        assert response.data["code"] == "SETTLEMENT_REJECTED"

    def test_complete_twice(self, api_client):
        created = create_vr_session(api_client)
        first = api_client.post(f"/api/sessions/{created['id']}/complete")
        second = api_client.post(f"/api/sessions/{created['id']}/complete")
        assert first.status_code == 200
        assert first.data["status"] == "completed"
        assert second.status_code == 409
        assert second.data["code"] == "SESSION_NOT_ACTIVE"

    def test_delete(self, api_client):
        created = create_vr_session(api_client)
        response = api_client.delete(f"/api/sessions/{created['id']}")
        assert response.status_code == 204
        assert api_client.get(f"/api/sessions/{created['id']}").status_code == 404

    def test_active_and_completed_lists(self, api_client):
        kept = create_vr_session(api_client, unit=1)
        done = create_vr_session(api_client, unit=2)
        api_client.post(f"/api/sessions/{done['id']}/complete")

        active = api_client.get("/api/sessions/active")
        completed = api_client.get("/api/sessions/completed")
        assert [s["id"] for s in active.data] == [kept["id"]]
        assert [s["id"] for s in completed.data] == [done["id"]]

    def test_completed_invalid_timestamp(self, api_client):
        response = api_client.get("/api/sessions/completed", {"since": "yesterday"})
        assert response.status_code == 400

    def test_availability(self, api_client):
        create_vr_session(api_client, unit=2)
        response = api_client.get("/api/sessions/availability")
        assert response.status_code == 200
        assert response.data["limits"]["vr"] == 2
        assert response.data["occupied"]["vr"] == [2]


@pytest.mark.django_db
class TestBookingEndpoints:
    def test_create_and_list(self, api_client):
        response = api_client.post(
            "/api/bookings",
            {
                "customer_name": "Meera",
                "booking_time": "2030-01-01T18:00:00+05:30",
                "units": {"ps": [1, 2]},
                "people_count": 2,
            },
            format="json",
        )
        assert response.status_code == 201
        assert response.data["devices"] == {"ps": 2}
        assert response.data["status"] == "upcoming"
        assert response.data["session_id"] is None

        listing = api_client.get("/api/bookings")
        assert [b["id"] for b in listing.data] == [response.data["id"]]

    def test_booking_requires_time(self, api_client):
        response = api_client.post(
            "/api/bookings", {"customer_name": "Meera", "devices": {"ps": 1}}, format="json"
        )
        assert response.status_code == 400


@pytest.mark.django_db
class TestBattleEndpoints:
    def start(self, api_client):
        response = api_client.post(
            "/api/battles", {"crown_holder": "Kiran", "challenger": "Dev"}, format="json"
        )
        assert response.status_code == 201
        return response.data

    def test_score_and_finish(self, api_client):
        battle = self.start(api_client)
        for _ in range(2):
            api_client.post(f"/api/battles/{battle['id']}/score", {"player": "crown_holder"}, format="json")
        finished = api_client.post(f"/api/battles/{battle['id']}/finish")
        assert finished.status_code == 200
        assert finished.data["crown_holder_score"] == 2
        assert finished.data["winner"] == "crown_holder"

        completed = api_client.get("/api/battles/completed")
        assert [b["id"] for b in completed.data] == [battle["id"]]
        assert api_client.get("/api/battles").data == []

    def test_invalid_player(self, api_client):
        battle = self.start(api_client)
        response = api_client.post(f"/api/battles/{battle['id']}/score", {"player": "ref"}, format="json")
        assert response.status_code == 400
        assert response.data["message"] == "Invalid player type"

    def test_score_finished_battle(self, api_client):
        battle = self.start(api_client)
        api_client.post(f"/api/battles/{battle['id']}/finish")
        response = api_client.post(
            f"/api/battles/{battle['id']}/score", {"player": "challenger"}, format="json"
        )
        assert response.status_code == 409

    def test_score_unknown_battle(self, api_client):
        response = api_client.post(f"/api/battles/{uuid4()}/score", {"player": "challenger"}, format="json")
        assert response.status_code == 404
