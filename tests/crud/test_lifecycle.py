from app.crud import crud_competition, crud_course, crud_event, crud_exam, lifecycle
from app.models.competition import Competition
from app.models.course import Course
from app.models.event import Event
from app.models.exam import Exam
from app.schemas.result import NotFound, Success, ValidationFailure
from tests.utils.db import fetch_row
from tests.utils.payloads import competition_payload, course_payload, event_payload, exam_payload


def test_any_declared_status_can_follow_any_other(gateway):
    event_id = crud_event.event.create(gateway, event_payload()).id

    for target in ("completed", "upcoming", "cancelled", "ongoing"):
        result = lifecycle.update_status(gateway, crud_event.EVENT_DEFINITION, event_id, target)
        assert result == Success(id=event_id)
        assert fetch_row(gateway, Event, event_id).status == target


def test_status_is_case_insensitive(gateway):
    exam_id = crud_exam.exam.create(gateway, exam_payload()).id

    lifecycle.update_status(gateway, crud_exam.EXAM_DEFINITION, exam_id, " COMPLETED ")

    assert fetch_row(gateway, Exam, exam_id).status == "completed"


def test_unknown_status_is_rejected_without_writing(gateway):
    competition_id = crud_competition.competition.create(gateway, competition_payload()).id
    before = fetch_row(gateway, Competition, competition_id)

    result = lifecycle.update_status(
        gateway, crud_competition.COMPETITION_DEFINITION, competition_id, "archived"
    )

    assert result == ValidationFailure(
        reasons=["Status must be one of: draft, upcoming, ongoing, completed, cancelled"]
    )
    after = fetch_row(gateway, Competition, competition_id)
    assert after.status == "draft"
    assert after.updated_at == before.updated_at


def test_missing_status_is_rejected(gateway):
    result = lifecycle.update_status(gateway, crud_course.COURSE_DEFINITION, 1, None)
    assert result == ValidationFailure(reasons=["Status must be one of: draft, published"])


def test_status_of_missing_row(gateway):
    assert lifecycle.update_status(gateway, crud_event.EVENT_DEFINITION, 42, "ongoing") == NotFound()


def test_status_update_refreshes_updated_at(gateway):
    event_id = crud_event.event.create(gateway, event_payload()).id
    before = fetch_row(gateway, Event, event_id).updated_at

    lifecycle.update_status(gateway, crud_event.EVENT_DEFINITION, event_id, "ongoing")

    assert fetch_row(gateway, Event, event_id).updated_at >= before


def test_publish_course(gateway):
    course_id = crud_course.course.create(gateway, course_payload()).id

    assert lifecycle.publish_course(gateway, course_id) == Success(id=course_id)

    course = fetch_row(gateway, Course, course_id)
    assert course.status == "published"
    assert course.is_published is True
    assert course.published_at is not None


def test_full_update_keeps_publication(gateway):
    course_id = crud_course.course.create(gateway, course_payload()).id
    lifecycle.publish_course(gateway, course_id)
    published_at = fetch_row(gateway, Course, course_id).published_at

    crud_course.course.update(gateway, course_id, course_payload(title="Python 101"))

    course = fetch_row(gateway, Course, course_id)
    assert course.status == "published"
    assert course.is_published is True
    assert course.published_at == published_at


def test_publish_deleted_course(gateway):
    course_id = crud_course.course.create(gateway, course_payload()).id
    crud_course.course.delete(gateway, course_id)

    assert lifecycle.publish_course(gateway, course_id) == NotFound()


def test_status_change_keeps_course_publication_in_step(gateway):
    course_id = crud_course.course.create(gateway, course_payload()).id

    lifecycle.update_status(gateway, crud_course.COURSE_DEFINITION, course_id, "published")
    published = fetch_row(gateway, Course, course_id)
    assert published.is_published is True
    assert published.published_at is not None

    lifecycle.update_status(gateway, crud_course.COURSE_DEFINITION, course_id, "draft")
    drafted = fetch_row(gateway, Course, course_id)
    assert drafted.is_published is False
    # First publication date is kept.
    assert drafted.published_at == published.published_at
