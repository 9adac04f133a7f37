# tests/api/v1/test_events.py

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.schemas.result import NotFound, PersistenceFailure, Success, ValidationFailure
from app.schemas.token import TokenPayload

# Mocks
crud_event_mock = MagicMock()
crud_participant_mock = MagicMock()
lifecycle_mock = MagicMock()
projections_mock = MagicMock()


# Helper function to apply mocks for this test file
def apply_mocks(monkeypatch):
    for mock in (crud_event_mock, crud_participant_mock, lifecycle_mock, projections_mock):
        mock.reset_mock(return_value=True, side_effect=True)
    monkeypatch.setattr("app.api.v1.endpoints.events.crud_event", crud_event_mock)
    monkeypatch.setattr("app.api.v1.endpoints.events.crud_participant", crud_participant_mock)
    monkeypatch.setattr("app.api.v1.endpoints.events.lifecycle", lifecycle_mock)
    monkeypatch.setattr("app.api.v1.endpoints.events.projections", projections_mock)


# --- CREATE ---
def test_create_event_success(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_event_mock.event.create.return_value = Success(id=42)

    response = test_client.post("/api/v1/events", json={"title": "Hack Day", "languages": ["Go"]})

    assert response.status_code == 201
    assert response.json() == {"kind": "success", "id": 42}
    args, kwargs = crud_event_mock.event.create.call_args
    assert args[1] == {"title": "Hack Day", "languages": ["Go"]}
    assert kwargs["created_by"] == "admin_123"


def test_create_event_validation_failure(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_event_mock.event.create.return_value = ValidationFailure(
        reasons=["Missing required fields: Category"]
    )

    response = test_client.post("/api/v1/events", json={"title": "Hack Day"})

    assert response.status_code == 400
    assert response.json() == {
        "kind": "validationFailure",
        "reasons": ["Missing required fields: Category"],
    }


def test_create_event_persistence_failure(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_event_mock.event.create.return_value = PersistenceFailure(
        message="Could not create event; no changes were saved",
        detail="UNIQUE constraint failed: event_prizes.event_id, event_prizes.rank",
    )

    response = test_client.post("/api/v1/events", json={"title": "Hack Day"})

    assert response.status_code == 500
    assert response.json() == {
        "kind": "persistenceFailure",
        "message": "Could not create event; no changes were saved",
    }


def test_create_event_requires_object_body(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    response = test_client.post("/api/v1/events", json=["not", "an", "object"])
    assert response.status_code == 422
    crud_event_mock.event.create.assert_not_called()


# --- READ ---
def test_get_event_not_found(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    projections_mock.get_detail.return_value = None

    response = test_client.get("/api/v1/events/999")

    assert response.status_code == 404


def test_get_event_rejects_non_numeric_id(test_client: TestClient):
    response = test_client.get("/api/v1/events/evt_1")
    assert response.status_code == 422


# --- UPDATE ---
def test_update_event_not_found(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_event_mock.event.update.return_value = NotFound()

    response = test_client.put("/api/v1/events/7", json={"title": "Renamed"})

    assert response.status_code == 404
    assert response.json() == {"kind": "notFound"}


def test_update_event_status(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    lifecycle_mock.update_status.return_value = Success(id=7)

    response = test_client.patch("/api/v1/events/7/status", json={"status": "ongoing"})

    assert response.status_code == 200
    args = lifecycle_mock.update_status.call_args.args
    assert args[2:] == (7, "ongoing")


# --- DELETE ---
def test_delete_event(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_event_mock.event.delete.return_value = Success(id=7)

    response = test_client.delete("/api/v1/events/7")

    assert response.status_code == 200
    assert response.json() == {"kind": "success", "id": 7}


# --- PARTICIPANTS ---
def test_add_participant_conflict(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_participant_mock.participant.add.return_value = ValidationFailure(
        reasons=["User is already registered for this event"]
    )

    response = test_client.post("/api/v1/events/7/participants", json={"userId": "usr_1"})

    assert response.status_code == 400


def test_list_participants_for_missing_event(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    crud_participant_mock.participant.list.return_value = None

    response = test_client.get("/api/v1/events/7/participants")

    assert response.status_code == 404


# --- AUTH ---
def test_routes_require_a_token(monkeypatch, test_client: TestClient):
    from app.api import deps
    from app.main import app

    del app.dependency_overrides[deps.get_current_user]

    response = test_client.post("/api/v1/events", json={"title": "Hack Day"})

    assert response.status_code == 401


def test_routes_require_the_admin_role(monkeypatch, test_client: TestClient):
    from app.api import deps
    from app.main import app

    apply_mocks(monkeypatch)
    app.dependency_overrides[deps.get_current_user] = lambda: TokenPayload(sub="usr_9", role="user")

    response = test_client.post("/api/v1/events", json={"title": "Hack Day"})

    assert response.status_code == 403
    assert response.json()["detail"] == "Admin privileges required"
    crud_event_mock.event.create.assert_not_called()
