"""Create events and their child tables

Revision ID: a001_create_events
Revises:
Create Date: 2026-10-19

This migration creates the event aggregate:
- events: parent rows, soft-deleted through deleted_at
- event_programming_languages, event_technologies, event_prizes,
  event_rounds, event_schedule: collections written with the event
- event_participants: registrations managed separately
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a001_create_events"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _audit_columns():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
    ]


def upgrade() -> None:
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("category", sa.String(50), nullable=False),
        sa.Column("event_date", sa.Date(), nullable=False),
        sa.Column("event_time", sa.Time(), nullable=False),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("image_url", sa.String(500), nullable=True),
        sa.Column("max_attendees", sa.Integer(), nullable=True),
        sa.Column("price", sa.Numeric(10, 2), nullable=False, server_default="0"),
        sa.Column("organizer", sa.String(255), nullable=True),
        sa.Column("difficulty", sa.String(20), nullable=False, server_default="beginner"),
        sa.Column("status", sa.String(20), nullable=False, server_default="upcoming"),
        sa.Column("created_by", sa.String(), nullable=True),
        *_audit_columns(),
        sa.CheckConstraint(
            "status IN ('upcoming', 'ongoing', 'completed', 'cancelled')",
            name="ck_events_status",
        ),
    )
    op.create_index("ix_events_category", "events", ["category"])
    op.create_index("ix_events_created_by", "events", ["created_by"])
    op.create_index("ix_events_deleted_at", "events", ["deleted_at"])

    op.create_table(
        "event_programming_languages",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("language", sa.String(50), nullable=False),
        sa.UniqueConstraint("event_id", "language", name="uq_event_language"),
    )
    op.create_table(
        "event_technologies",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("technology", sa.String(100), nullable=False),
        sa.UniqueConstraint("event_id", "technology", name="uq_event_technology"),
    )
    op.create_table(
        "event_prizes",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("rank", sa.Integer(), nullable=False),
        sa.Column("prize", sa.String(255), nullable=True),
        sa.Column("prize_amount", sa.Numeric(10, 2), nullable=True),
        sa.Column("reward_points", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("description", sa.String(500), nullable=True),
        sa.UniqueConstraint("event_id", "rank", name="uq_event_prize_rank"),
    )
    op.create_table(
        "event_rounds",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("description", sa.String(500), nullable=True),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("problems", sa.Integer(), nullable=True),
    )
    op.create_table(
        "event_schedule",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("activity_name", sa.String(255), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("location", sa.String(255), nullable=True),
        sa.Column("type", sa.String(50), nullable=False, server_default="main_event"),
    )
    op.create_table(
        "event_participants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id"), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),  # No FK - users live in another service
        sa.Column("team_name", sa.String(100), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="registered"),
        sa.Column("payment_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("attendance_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("registration_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("event_id", "user_id", name="uq_event_participant_user"),
    )
    op.create_index("ix_event_participants_user_id", "event_participants", ["user_id"])

    for table in (
        "event_programming_languages",
        "event_technologies",
        "event_prizes",
        "event_rounds",
        "event_schedule",
        "event_participants",
    ):
        op.create_index(f"ix_{table}_event_id", table, ["event_id"])


def downgrade() -> None:
    for table in (
        "event_participants",
        "event_schedule",
        "event_rounds",
        "event_prizes",
        "event_technologies",
        "event_programming_languages",
    ):
        op.drop_table(table)
    op.drop_table("events")
