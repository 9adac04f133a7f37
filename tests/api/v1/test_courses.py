# tests/api/v1/test_courses.py

from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from app.schemas.result import NotFound, Success

lifecycle_mock = MagicMock()
projections_mock = MagicMock()


def apply_mocks(monkeypatch):
    for mock in (lifecycle_mock, projections_mock):
        mock.reset_mock(return_value=True, side_effect=True)
    monkeypatch.setattr("app.api.v1.endpoints.courses.lifecycle", lifecycle_mock)
    monkeypatch.setattr("app.api.v1.endpoints.courses.projections", projections_mock)


def test_publish_course(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    lifecycle_mock.publish_course.return_value = Success(id=3)

    response = test_client.post("/api/v1/courses/3/publish")

    assert response.status_code == 200
    assert response.json() == {"kind": "success", "id": 3}


def test_publish_missing_course(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    lifecycle_mock.publish_course.return_value = NotFound()

    response = test_client.post("/api/v1/courses/3/publish")

    assert response.status_code == 404


def test_course_readiness_report(monkeypatch, test_client: TestClient):
    apply_mocks(monkeypatch)
    projections_mock.check_course_readiness.return_value = {
        "is_valid": False,
        "course_has_image": True,
        "course_has_video": False,
        "has_sufficient_modules": True,
        "lessons_with_missing_content": [
            {"lesson_id": 9, "title": "Exercise", "issue": "Coding lesson missing content"}
        ],
    }

    response = test_client.get("/api/v1/courses/3/validation")

    assert response.status_code == 200
    body = response.json()
    assert body["course_has_video"] is False
    assert body["lessons_with_missing_content"][0]["lesson_id"] == 9


def test_course_status_change_rejects_unknown_value(test_client: TestClient):
    # Status values are checked before the gateway is used.
    response = test_client.patch("/api/v1/courses/3/status", json={"status": "archived"})

    assert response.status_code == 400
    assert response.json()["reasons"] == ["Status must be one of: draft, published"]
