# app/crud/projections.py
"""
Detail views assembled from a parent row and its child collections.

The parent is read first. Every child collection is then read in its own
session; a collection that fails to load is logged and shown as empty so
the rest of the view stays available.
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.db.gateway import PersistenceGateway

from .aggregate import AggregateDefinition, ChildCollection, row_to_dict
from .crud_course import COURSE_DEFINITION

logger = logging.getLogger(__name__)


def _load_rows(db: Session, collection: ChildCollection, owner_ids: List[int]) -> List[dict]:
    model = collection.model
    owner_key = getattr(model, collection.parent_key)
    sort_key = getattr(model, collection.order_by)
    if collection.descending:
        sort_key = sort_key.desc()
    rows = (
        db.query(model)
        .filter(owner_key.in_(owner_ids))
        .order_by(sort_key, model.id)
        .all()
    )
    items = [row_to_dict(row) for row in rows]

    for child in collection.children:
        nested = _load_rows(db, child, [item["id"] for item in items]) if items else []
        grouped: Dict[int, list] = {}
        for row in nested:
            grouped.setdefault(row[child.parent_key], []).append(_shape(child, row))
        for item in items:
            item[child.name] = grouped.get(item["id"], [])
    return items


def _shape(collection: ChildCollection, row: dict) -> Any:
    return collection.project(row) if collection.project else row


def load_collection(gateway: PersistenceGateway, collection: ChildCollection, parent_id: int) -> list:
    """One child collection of one parent; empty on failure."""
    try:
        with gateway.session() as db:
            rows = _load_rows(db, collection, [parent_id])
    except SQLAlchemyError as e:
        logger.error(
            f"Failed to load {collection.name} for parent {parent_id}: {str(e)}",
            exc_info=True,
        )
        return []
    return [_shape(collection, row) for row in rows]


def get_detail(
    gateway: PersistenceGateway, definition: AggregateDefinition, id: int
) -> Optional[dict]:
    """Parent fields plus every declared child collection, or None if the
    parent is missing or soft-deleted."""
    model = definition.model
    with gateway.session() as db:
        db_obj = (
            db.query(model)
            .filter(model.id == id, model.deleted_at.is_(None))
            .first()
        )
        if db_obj is None:
            return None
        detail = row_to_dict(db_obj)

    detail.pop("deleted_at", None)
    for collection in definition.collections:
        detail[collection.name] = load_collection(gateway, collection, id)
    return detail


def get_collection(
    gateway: PersistenceGateway, definition: AggregateDefinition, id: int, name: str
) -> Optional[list]:
    """One collection of a live parent, or None if the parent is missing or deleted."""
    model = definition.model
    with gateway.session() as db:
        live = (
            db.query(model.id)
            .filter(model.id == id, model.deleted_at.is_(None))
            .first()
        )
        if live is None:
            return None
    return load_collection(gateway, definition.collection(name), id)


def check_course_readiness(gateway: PersistenceGateway, id: int) -> Optional[dict]:
    """
    Report whether a course has the content it needs to be published.

    Video lessons need a video URL and coding lessons need content. Publishing
    itself does not enforce this report.
    """
    course = get_detail(gateway, COURSE_DEFINITION, id)
    if course is None:
        return None

    missing = []
    for module in course["modules"]:
        for lesson in module["lessons"]:
            if lesson["type"] == "video" and not lesson["video_url"]:
                missing.append(
                    {"lesson_id": lesson["id"], "title": lesson["title"], "issue": "Missing video"}
                )
            elif lesson["type"] == "coding" and not lesson["content"]:
                missing.append(
                    {
                        "lesson_id": lesson["id"],
                        "title": lesson["title"],
                        "issue": "Coding lesson missing content",
                    }
                )

    report = {
        "course_has_image": bool(course["image_url"]),
        "course_has_video": bool(course["video_url"]),
        "has_sufficient_modules": len(course["modules"]) > 0,
        "lessons_with_missing_content": missing,
    }
    report["is_valid"] = (
        report["course_has_image"]
        and report["course_has_video"]
        and report["has_sufficient_modules"]
        and not missing
    )
    return report
