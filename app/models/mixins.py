# app/models/mixins.py
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditMixin:
    """created/updated timestamps plus the soft-delete marker."""

    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
    # NULL while live; set once by a soft delete and never cleared.
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)
