# app/schemas/exam.py
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.constants.catalog import EXAM_TYPES, QUESTION_TYPES
from app.constants.status import ExamStatus

from .base import AggregatePayload, ChildItem, ReadModel, StrictDateTime, one_of


class QuestionItem(ChildItem):
    type: str = "multiple_choice"
    content: str = Field(..., min_length=1)
    points: int = Field(1, ge=0)
    order_index: Optional[int] = Field(None, ge=0)
    options: Optional[Any] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    # Only kept for essay questions, where it becomes an answer template.
    scoring_criteria: Optional[Any] = None

    key_aliases = {"question_text": "content"}

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        value = value.lower()
        if value not in QUESTION_TYPES:
            raise ValueError(f"Question type must be one of: {', '.join(QUESTION_TYPES)}")
        return value

    def answer_templates(self) -> list:
        if self.type == "essay" and self.scoring_criteria:
            return [self.scoring_criteria]
        return []


# --- Create/update payload ---


class ExamCreate(AggregatePayload):
    title: str = Field(..., max_length=255)
    description: Optional[str] = None
    type: str
    duration: int = Field(..., ge=1)
    total_points: int = Field(100, ge=0)
    passing_score: int = Field(60, ge=0)
    start_time: Optional[StrictDateTime] = None
    end_time: Optional[StrictDateTime] = None
    instructions: Optional[str] = None
    allow_review: bool = True
    shuffle_questions: bool = True
    course_id: Optional[int] = Field(None, ge=1)
    status: str = ExamStatus.DEFAULT

    questions: Optional[List[QuestionItem]] = None

    child_collections = ("questions",)
    sticky_fields = ("status", "total_points", "passing_score")
    key_aliases = {"exam_type": "type"}

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        return one_of(value, EXAM_TYPES)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        return one_of(value, ExamStatus.VALUES, case_sensitive=False)

    @model_validator(mode="after")
    def _check_window_and_scores(self):
        if self.start_time and self.end_time and self.end_time <= self.start_time:
            raise ValueError("End time must be after start time")
        if self.passing_score > self.total_points:
            raise ValueError("Passing score cannot exceed total points")
        return self


class AnswerTemplateRead(ReadModel):
    id: int
    question_id: int
    scoring_criteria: Any
    created_at: datetime


class QuestionRead(ReadModel):
    id: int
    exam_id: int
    type: str
    content: str
    points: int
    order_index: int
    options: Optional[Any] = None
    correct_answer: Optional[str] = None
    explanation: Optional[str] = None
    answer_templates: List[AnswerTemplateRead] = []


class ExamDetail(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    type: str
    duration: int
    total_points: int
    passing_score: int
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    instructions: Optional[str] = None
    allow_review: bool
    shuffle_questions: bool
    course_id: Optional[int] = None
    status: str
    created_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    questions: List[QuestionRead] = []
