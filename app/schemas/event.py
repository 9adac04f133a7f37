# app/schemas/event.py
from datetime import date, datetime, time
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from app.constants.catalog import EVENT_CATEGORIES, EVENT_DIFFICULTIES
from app.constants.status import EventStatus

from .base import AggregatePayload, ChildItem, ReadModel, StrictDate, StrictTime, one_of


# --- Child collection items (create/update payloads) ---


class LanguageItem(ChildItem):
    scalar_field = "language"

    language: str = Field(..., min_length=1, max_length=50)


class TechnologyItem(ChildItem):
    scalar_field = "technology"

    technology: str = Field(..., min_length=1, max_length=100)


class PrizeItem(ChildItem):
    rank: int = Field(..., ge=1)
    prize: Optional[str] = Field(None, max_length=255)
    prize_amount: Optional[Decimal] = Field(None, ge=0)
    reward_points: int = Field(0, ge=0)
    description: Optional[str] = Field(None, max_length=500)


class RoundItem(ChildItem):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = Field(None, max_length=500)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    duration: Optional[int] = Field(None, ge=0)
    problems: Optional[int] = Field(None, ge=0)


class ScheduleItem(ChildItem):
    activity_name: str = Field(..., min_length=1, max_length=255)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = Field(None, max_length=255)
    type: str = Field("main_event", max_length=50)


class ParticipantCreate(ChildItem):
    user_id: str = Field(..., min_length=1)
    team_name: Optional[str] = Field(None, max_length=100)
    payment_status: str = Field("pending", max_length=20)


# --- Create/update payload ---


def _reject_repeats(items, attribute: str):
    """Names are unique per event regardless of case."""
    if not items:
        return items
    seen, repeated = set(), []
    for item in items:
        name = getattr(item, attribute)
        if name.lower() in seen and name not in repeated:
            repeated.append(name)
        seen.add(name.lower())
    if repeated:
        raise ValueError(f"must not contain duplicates: {', '.join(repeated)}")
    return items


class EventCreate(AggregatePayload):
    """Full event payload: parent fields plus any child collections to replace."""

    title: str = Field(..., max_length=255)
    description: str
    category: str = Field(..., json_schema_extra={"example": "Hackathon"})
    event_date: StrictDate
    event_time: StrictTime
    location: Optional[str] = Field(None, max_length=255)
    image_url: Optional[str] = Field(None, max_length=500)
    max_attendees: Optional[int] = Field(None, ge=1)
    price: Decimal = Field(Decimal("0"), ge=0)
    organizer: Optional[str] = Field(None, max_length=255)
    difficulty: str = "beginner"
    status: str = EventStatus.DEFAULT

    languages: Optional[List[LanguageItem]] = None
    technologies: Optional[List[TechnologyItem]] = None
    prizes: Optional[List[PrizeItem]] = None
    rounds: Optional[List[RoundItem]] = None
    schedule: Optional[List[ScheduleItem]] = None

    child_collections = ("languages", "technologies", "prizes", "rounds", "schedule")
    key_aliases = {
        "programming_languages": "languages",
        "date": "event_date",
        "time": "event_time",
        "schedules": "schedule",
    }

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        return one_of(value, EVENT_CATEGORIES)

    @field_validator("difficulty")
    @classmethod
    def _known_difficulty(cls, value: str) -> str:
        return one_of(value, EVENT_DIFFICULTIES, case_sensitive=False)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        return one_of(value, EventStatus.VALUES, case_sensitive=False)

    @field_validator("languages")
    @classmethod
    def _distinct_languages(cls, items):
        return _reject_repeats(items, "language")

    @field_validator("technologies")
    @classmethod
    def _distinct_technologies(cls, items):
        return _reject_repeats(items, "technology")


# --- Read models ---


class EventPrizeRead(ReadModel):
    id: int
    rank: int
    prize: Optional[str] = None
    prize_amount: Optional[Decimal] = None
    reward_points: int = 0
    description: Optional[str] = None


class EventRoundRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    duration: Optional[int] = None
    problems: Optional[int] = None


class EventScheduleRead(ReadModel):
    id: int
    activity_name: str
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    description: Optional[str] = None
    location: Optional[str] = None
    type: str


class EventParticipantRead(ReadModel):
    id: int
    event_id: int
    user_id: str
    team_name: Optional[str] = None
    status: str
    payment_status: str
    attendance_status: str
    registration_date: datetime


class EventDetail(BaseModel):
    id: int = Field(..., json_schema_extra={"example": 42})
    title: str = Field(..., json_schema_extra={"example": "Hack Day"})
    description: str
    category: str = Field(..., json_schema_extra={"example": "Hackathon"})
    event_date: date
    event_time: time
    location: Optional[str] = None
    image_url: Optional[str] = None
    max_attendees: Optional[int] = None
    price: Decimal
    organizer: Optional[str] = None
    difficulty: str
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    languages: List[str] = []
    technologies: List[str] = []
    prizes: List[EventPrizeRead] = []
    rounds: List[EventRoundRead] = []
    schedule: List[EventScheduleRead] = []
    participants: List[EventParticipantRead] = []
