from sqlalchemy.exc import OperationalError

from app.crud import crud_course, crud_event, projections
from tests.utils.payloads import course_payload, event_payload


def test_failing_collection_degrades_to_empty(gateway, monkeypatch, caplog):
    event_id = crud_event.event.create(
        gateway,
        event_payload(languages=["Go"], prizes=[{"rank": 1, "prize": "Cup"}]),
    ).id

    load_rows = projections._load_rows

    def flaky_load_rows(db, collection, owner_ids):
        if collection.name == "prizes":
            raise OperationalError("SELECT * FROM event_prizes", {}, Exception("connection lost"))
        return load_rows(db, collection, owner_ids)

    monkeypatch.setattr(projections, "_load_rows", flaky_load_rows)

    detail = projections.get_detail(gateway, crud_event.EVENT_DEFINITION, event_id)

    assert detail["title"] == "Hack Day"
    assert detail["languages"] == ["Go"]
    assert detail["prizes"] == []
    assert "Failed to load prizes" in caplog.text


def test_detail_omits_soft_delete_marker(gateway):
    event_id = crud_event.event.create(gateway, event_payload()).id

    detail = projections.get_detail(gateway, crud_event.EVENT_DEFINITION, event_id)

    assert "deleted_at" not in detail
    assert detail["participants"] == []


def test_detail_of_missing_row(gateway):
    assert projections.get_detail(gateway, crud_course.COURSE_DEFINITION, 7) is None


def test_course_readiness_lists_lessons_missing_content(gateway):
    course_id = crud_course.course.create(
        gateway,
        course_payload(
            modules=[
                {
                    "title": "Basics",
                    "lessons": [
                        {"title": "Intro video", "type": "video"},
                        {"title": "Exercise", "type": "coding"},
                        {"title": "Notes", "type": "text"},
                    ],
                }
            ]
        ),
    ).id

    report = projections.check_course_readiness(gateway, course_id)

    assert report["course_has_image"] is True
    assert report["course_has_video"] is True
    assert report["has_sufficient_modules"] is True
    assert [(i["title"], i["issue"]) for i in report["lessons_with_missing_content"]] == [
        ("Intro video", "Missing video"),
        ("Exercise", "Coding lesson missing content"),
    ]
    assert report["is_valid"] is False


def test_course_without_modules_is_not_ready(gateway):
    course_id = crud_course.course.create(gateway, course_payload(imageUrl=None)).id

    report = projections.check_course_readiness(gateway, course_id)

    assert report["course_has_image"] is False
    assert report["has_sufficient_modules"] is False
    assert report["is_valid"] is False


def test_complete_course_is_ready(gateway):
    course_id = crud_course.course.create(
        gateway,
        course_payload(modules=[{"title": "Basics", "lessons": [{"title": "Read me", "content": "..."}]}]),
    ).id

    assert projections.check_course_readiness(gateway, course_id)["is_valid"] is True


def test_readiness_of_missing_course(gateway):
    assert projections.check_course_readiness(gateway, 3) is None
