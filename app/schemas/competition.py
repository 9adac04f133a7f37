# app/schemas/competition.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from app.constants.catalog import COMPETITION_DIFFICULTIES
from app.constants.status import CompetitionStatus

from .base import AggregatePayload, ChildItem, ReadModel, StrictDateTime, one_of


class ProblemItem(ChildItem):
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(..., min_length=1)
    difficulty: Optional[str] = None
    points: int = Field(100, ge=0)
    time_limit: Optional[int] = Field(None, ge=0)
    memory_limit: Optional[int] = Field(None, ge=0)
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    constraints: Optional[str] = None
    sample_input: Optional[str] = None
    sample_output: Optional[str] = None
    explanation: Optional[str] = None
    image_url: Optional[str] = Field(None, max_length=500)
    starter_code: Optional[str] = None
    tags: Optional[Union[str, List[str]]] = None
    instructions: Optional[str] = None

    @field_validator("difficulty")
    @classmethod
    def _known_difficulty(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        value = value.lower()
        if value not in COMPETITION_DIFFICULTIES:
            raise ValueError(
                f"Difficulty must be one of: {', '.join(COMPETITION_DIFFICULTIES)}"
            )
        return value

    @field_validator("tags")
    @classmethod
    def _join_tags(cls, value):
        if isinstance(value, list):
            return ",".join(tag.strip() for tag in value if tag.strip())
        return value


# --- Create/update payload ---


class CompetitionCreate(AggregatePayload):
    title: str = Field(..., max_length=200)
    description: str
    start_time: StrictDateTime
    end_time: StrictDateTime
    # Minutes; derived from the start and end times when omitted.
    duration: Optional[int] = Field(None, ge=0)
    difficulty: str
    status: str = CompetitionStatus.DEFAULT
    max_participants: int = Field(100, ge=1)
    prize_pool: Decimal = Field(Decimal("0"), ge=0)
    organized_by: Optional[str] = None
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    cover_image_url: Optional[str] = Field(None, max_length=500)

    problems: Optional[List[ProblemItem]] = None

    child_collections = ("problems",)

    @field_validator("difficulty")
    @classmethod
    def _known_difficulty(cls, value: str) -> str:
        return one_of(value, COMPETITION_DIFFICULTIES, case_sensitive=False)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        return one_of(value, CompetitionStatus.VALUES, case_sensitive=False)

    @model_validator(mode="after")
    def _check_window(self):
        if self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        if self.duration is None:
            elapsed = self.end_time - self.start_time
            self.duration = int(elapsed.total_seconds() // 60)
        return self


class ProblemRead(ReadModel):
    id: int
    competition_id: int
    title: str
    description: str
    difficulty: Optional[str] = None
    points: int
    time_limit: Optional[int] = None
    memory_limit: Optional[int] = None
    input_format: Optional[str] = None
    output_format: Optional[str] = None
    constraints: Optional[str] = None
    sample_input: Optional[str] = None
    sample_output: Optional[str] = None
    explanation: Optional[str] = None
    image_url: Optional[str] = None
    starter_code: Optional[str] = None
    tags: Optional[str] = None
    instructions: Optional[str] = None


class CompetitionParticipantRead(ReadModel):
    id: int
    competition_id: int
    user_id: str
    status: str
    registration_time: datetime
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    score: int
    total_problems_solved: int
    rank: Optional[int] = None


class CompetitionDetail(BaseModel):
    id: int
    title: str
    description: str
    start_time: datetime
    end_time: datetime
    duration: Optional[int] = None
    difficulty: str
    status: str
    max_participants: int
    prize_pool: Decimal
    organized_by: Optional[str] = None
    thumbnail_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    problems: List[ProblemRead] = []
    participants: List[CompetitionParticipantRead] = []
