"""Create competition_participants table

Revision ID: a003_competition_participants
Revises: a002_create_catalog
Create Date: 2026-10-19

Leaderboard rows for competitions, shown read-only in the admin detail view.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a003_competition_participants"
down_revision: Union[str, None] = "a002_create_catalog"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "competition_participants",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column(
            "competition_id", sa.Integer(), sa.ForeignKey("competitions.id"), nullable=False
        ),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="registered"),
        sa.Column(
            "registration_time",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("score", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("total_problems_solved", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("rank", sa.Integer(), nullable=True),
    )
    op.create_index(
        "ix_competition_participants_competition_id",
        "competition_participants",
        ["competition_id"],
    )
    op.create_index(
        "ix_competition_participants_user_id", "competition_participants", ["user_id"]
    )


def downgrade() -> None:
    op.drop_index("ix_competition_participants_user_id", table_name="competition_participants")
    op.drop_index(
        "ix_competition_participants_competition_id", table_name="competition_participants"
    )
    op.drop_table("competition_participants")
