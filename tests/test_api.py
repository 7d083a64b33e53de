"""
Tests for the booking HTTP surface, backed by the in-memory reservation service.
"""

from __future__ import annotations

from datetime import date

import pytest
from fastapi.testclient import TestClient

from venuebook.core.config import settings
from venuebook.domain.entities.reservation import Reservation
from venuebook.domain.entities.venue import Venue
from venuebook.main import app
from venuebook.wiring import dependencies


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(settings, "ENV", "dev")
    dependencies.get_mock_service.cache_clear()
    dependencies.get_workflow_store.cache_clear()
    dependencies.get_mock_service().add_venue(
        Venue(
            id="v1",
            name="Lake House",
            price_per_night=80.0,
            max_guests=3,
            reservations=(Reservation("r1", "v1", date(2025, 5, 10), date(2025, 5, 12), 2),),
        )
    )
    with TestClient(app) as test_client:
        yield test_client
    dependencies.get_mock_service.cache_clear()
    dependencies.get_workflow_store.cache_clear()


def _start(client: TestClient, **overrides) -> dict:
    body = {"date_from": "2025-05-12", "date_to": "2025-05-15", "guests": 2}
    body.update(overrides)
    resp = client.post("/api/v1/venues/v1/workflows", json=body)
    assert resp.status_code == 201, resp.text
    return resp.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_availability_lists_occupied_days(client):
    resp = client.get("/api/v1/venues/v1/availability")
    assert resp.status_code == 200
    assert resp.json()["occupied_days"] == ["2025-05-10", "2025-05-11", "2025-05-12"]


def test_unknown_venue_is_404(client):
    assert client.get("/api/v1/venues/nope/availability").status_code == 404


def test_validate_reports_conflict_and_clamps_guests(client):
    resp = client.post(
        "/api/v1/venues/v1/validate",
        json={"date_from": "2025-05-09", "date_to": "2025-05-13", "guests": "99"},
    )
    data = resp.json()
    assert resp.status_code == 200
    assert data["result"] == "date_conflict"
    assert data["guests"] == 3
    assert data["nights"] == 4
    assert data["total_cost"] == 320.0


def test_validate_rejects_reversed_dates(client):
    resp = client.post(
        "/api/v1/venues/v1/validate",
        json={"date_from": "2025-05-15", "date_to": "2025-05-12", "guests": 1},
    )
    assert resp.status_code == 422


def test_start_workflow_with_missing_dates_is_400(client):
    resp = client.post("/api/v1/venues/v1/workflows", json={"guests": 1})
    assert resp.status_code == 400
    assert resp.json()["detail"]["result"] == "missing_dates"


def test_full_booking_flow(client):
    wf = _start(client)
    assert wf["stage"] == "review"
    assert wf["summary"]["nights"] == 3
    assert wf["summary"]["total_cost"] == 240.0
    wf_id = wf["workflow_id"]

    assert client.post(f"/api/v1/workflows/{wf_id}/confirm").json()["stage"] == "payment_selection"
    resp = client.put(f"/api/v1/workflows/{wf_id}/payment-method", json={"payment_method": "Google Pay"})
    assert resp.json()["payment_method"] == "Google Pay"

    paid = client.post(f"/api/v1/workflows/{wf_id}/pay").json()
    assert paid["stage"] == "confirmed"
    assert paid["summary"]["confirmation_id"].startswith("BK-")
    assert paid["available_actions"] == ["close"]

    assert client.post(f"/api/v1/workflows/{wf_id}/pay").status_code == 409

    assert client.post(f"/api/v1/workflows/{wf_id}/close").json()["stage"] == "confirmed"
    assert client.get(f"/api/v1/workflows/{wf_id}").status_code == 404

    occupied = client.get("/api/v1/venues/v1/availability").json()["occupied_days"]
    assert "2025-05-14" in occupied


def test_conflicting_second_booking_aborts(client):
    first = _start(client)["workflow_id"]
    second = _start(client)["workflow_id"]

    client.post(f"/api/v1/workflows/{first}/confirm")
    client.post(f"/api/v1/workflows/{second}/confirm")
    assert client.post(f"/api/v1/workflows/{first}/pay").json()["stage"] == "confirmed"

    aborted = client.post(f"/api/v1/workflows/{second}/pay").json()
    assert aborted["stage"] == "aborted"
    assert aborted["abort_reason"] == "submission_failed"
    assert aborted["error_message"] == "The selected dates are no longer available."
    assert aborted["summary"] is None


def test_cancel_from_review(client):
    wf_id = _start(client)["workflow_id"]
    resp = client.post(f"/api/v1/workflows/{wf_id}/cancel").json()
    assert resp["stage"] == "aborted"
    assert resp["abort_reason"] == "cancelled"


def test_invalid_transition_is_409(client):
    wf_id = _start(client)["workflow_id"]
    assert client.post(f"/api/v1/workflows/{wf_id}/back").status_code == 409
