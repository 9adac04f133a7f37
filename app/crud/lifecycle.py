# app/crud/lifecycle.py
"""
Status transitions.

Any declared status may move to any other declared status; only the target
value is checked.
"""

import logging
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from app.constants.catalog import EntityKind
from app.constants.status import CourseStatus
from app.db.gateway import PersistenceGateway
from app.models.mixins import utcnow
from app.schemas.result import NotFound, PersistenceFailure, Success, ValidationFailure

from .aggregate import AggregateDefinition
from .crud_course import COURSE_DEFINITION

logger = logging.getLogger(__name__)


def _live_row(db, definition: AggregateDefinition, id: int):
    model = definition.model
    return (
        db.query(model)
        .filter(model.id == id, model.deleted_at.is_(None))
        .first()
    )


def _sync_publication(course, now) -> None:
    """The published flag follows the status; the first publish is stamped."""
    course.is_published = course.status == CourseStatus.PUBLISHED
    if course.is_published and course.published_at is None:
        course.published_at = now


def update_status(
    gateway: PersistenceGateway,
    definition: AggregateDefinition,
    id: int,
    target: Any,
):
    status_set = definition.status_set
    value = target.strip().lower() if isinstance(target, str) else None
    if not value or not status_set.is_valid(value):
        return ValidationFailure(
            reasons=[f"Status must be one of: {', '.join(status_set.all_values())}"]
        )

    try:
        with gateway.begin_transaction() as tx:
            db_obj = _live_row(tx.session, definition, id)
            if db_obj is None:
                return NotFound()

            previous = db_obj.status
            now = utcnow()
            db_obj.status = value
            if definition.kind is EntityKind.course:
                _sync_publication(db_obj, now)
            db_obj.updated_at = now
            tx.commit()
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to set status of {definition.kind.value} {id} to {value}: {str(e)}",
            exc_info=True,
        )
        return PersistenceFailure(
            message=f"Could not update {definition.kind.value} status", detail=str(e)
        )

    logger.info(f"{definition.label} {id} status {previous} -> {value}")
    return Success(id=id)


def publish_course(gateway: PersistenceGateway, id: int):
    """Mark a course published and stamp ``published_at`` on first publish."""
    try:
        with gateway.begin_transaction() as tx:
            course = _live_row(tx.session, COURSE_DEFINITION, id)
            if course is None:
                return NotFound()

            now = utcnow()
            course.status = CourseStatus.PUBLISHED
            _sync_publication(course, now)
            course.updated_at = now
            tx.commit()
    except SQLAlchemyError as e:
        logger.error(f"Failed to publish course {id}: {str(e)}", exc_info=True)
        return PersistenceFailure(message="Could not publish course", detail=str(e))

    logger.info(f"Course {id} published")
    return Success(id=id)
