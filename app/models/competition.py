# app/models/competition.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
)

from app.constants.status import CompetitionStatus, status_check
from app.db.base_class import Base
from app.models.mixins import AuditMixin, utcnow


class Competition(AuditMixin, Base):
    __tablename__ = "competitions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    duration = Column(Integer, nullable=True)  # minutes
    difficulty = Column(String(20), nullable=False)
    status = Column(String(20), nullable=False, default=CompetitionStatus.DEFAULT)
    max_participants = Column(Integer, nullable=False, default=100)
    prize_pool = Column(Numeric(12, 2), nullable=False, default=0)
    organized_by = Column(String, nullable=True)
    thumbnail_url = Column(String(500), nullable=True)
    cover_image_url = Column(String(500), nullable=True)

    __table_args__ = (
        CheckConstraint(
            status_check("status", CompetitionStatus), name="ck_competitions_status"
        ),
    )


class CompetitionProblem(Base):
    __tablename__ = "competition_problems"

    id = Column(Integer, primary_key=True, autoincrement=True)
    competition_id = Column(
        Integer, ForeignKey("competitions.id"), nullable=False, index=True
    )
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False)
    difficulty = Column(String(20), nullable=True)
    points = Column(Integer, nullable=False, default=100)
    time_limit = Column(Integer, nullable=True)  # seconds
    memory_limit = Column(Integer, nullable=True)  # MB
    input_format = Column(Text, nullable=True)
    output_format = Column(Text, nullable=True)
    constraints = Column(Text, nullable=True)
    sample_input = Column(Text, nullable=True)
    sample_output = Column(Text, nullable=True)
    explanation = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    starter_code = Column(Text, nullable=True)
    tags = Column(String(500), nullable=True)
    instructions = Column(Text, nullable=True)


class CompetitionParticipant(Base):
    __tablename__ = "competition_participants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    competition_id = Column(
        Integer, ForeignKey("competitions.id"), nullable=False, index=True
    )
    user_id = Column(String, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="registered")
    registration_time = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    score = Column(Integer, nullable=False, default=0)
    total_problems_solved = Column(Integer, nullable=False, default=0)
    rank = Column(Integer, nullable=True)
