# app/models/event.py
from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Time,
    UniqueConstraint,
)

from app.constants.status import EventStatus, status_check
from app.db.base_class import Base
from app.models.mixins import AuditMixin, utcnow


class Event(AuditMixin, Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=False)
    category = Column(String(50), nullable=False, index=True)
    event_date = Column(Date, nullable=False)
    event_time = Column(Time, nullable=False)
    location = Column(String(255), nullable=True)
    image_url = Column(String(500), nullable=True)
    max_attendees = Column(Integer, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    organizer = Column(String(255), nullable=True)
    difficulty = Column(String(20), nullable=False, default="beginner")
    status = Column(String(20), nullable=False, default=EventStatus.DEFAULT)
    created_by = Column(String, nullable=True, index=True)

    __table_args__ = (
        CheckConstraint(status_check("status", EventStatus), name="ck_events_status"),
    )


class EventProgrammingLanguage(Base):
    __tablename__ = "event_programming_languages"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    language = Column(String(50), nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "language", name="uq_event_language"),
    )


class EventTechnology(Base):
    __tablename__ = "event_technologies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    technology = Column(String(100), nullable=False)

    __table_args__ = (
        UniqueConstraint("event_id", "technology", name="uq_event_technology"),
    )


class EventPrize(Base):
    __tablename__ = "event_prizes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    rank = Column(Integer, nullable=False)
    prize = Column(String(255), nullable=True)
    prize_amount = Column(Numeric(10, 2), nullable=True)
    reward_points = Column(Integer, nullable=False, default=0)
    description = Column(String(500), nullable=True)

    # One prize per podium position.
    __table_args__ = (UniqueConstraint("event_id", "rank", name="uq_event_prize_rank"),)


class EventRound(Base):
    __tablename__ = "event_rounds"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    description = Column(String(500), nullable=True)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    location = Column(String(255), nullable=True)
    duration = Column(Integer, nullable=True)
    problems = Column(Integer, nullable=True)


class EventSchedule(Base):
    __tablename__ = "event_schedule"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    activity_name = Column(String(255), nullable=False)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    type = Column(String(50), nullable=False, default="main_event")


class EventParticipant(Base):
    __tablename__ = "event_participants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    event_id = Column(Integer, ForeignKey("events.id"), nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    team_name = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False, default="registered")
    payment_status = Column(String(20), nullable=False, default="pending")
    attendance_status = Column(String(20), nullable=False, default="pending")
    registration_date = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("event_id", "user_id", name="uq_event_participant_user"),
    )
