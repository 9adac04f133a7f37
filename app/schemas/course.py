# app/schemas/course.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.constants.catalog import COURSE_CATEGORIES, COURSE_LEVELS, LESSON_TYPES
from app.constants.status import CourseStatus
from app.models.mixins import utcnow
from app.utils.slug import slugify

from .base import AggregatePayload, ChildItem, ReadModel, StrictDateTime, one_of


class LessonItem(ChildItem):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    type: str = "text"
    content: Optional[str] = None
    video_url: Optional[str] = Field(None, max_length=500)
    order_index: Optional[int] = Field(None, ge=0)
    duration: int = Field(0, ge=0)
    is_preview: bool = False

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        value = value.lower()
        if value not in LESSON_TYPES:
            raise ValueError(f"Lesson type must be one of: {', '.join(LESSON_TYPES)}")
        return value


class ModuleItem(ChildItem):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    order_index: Optional[int] = Field(None, ge=0)
    duration: int = Field(0, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    video_url: Optional[str] = Field(None, max_length=500)
    lessons: List[LessonItem] = []


# --- Create/update payload ---


class CourseCreate(AggregatePayload):
    title: str = Field(..., max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    description: str
    short_description: Optional[str] = Field(None, max_length=500)
    instructor_id: Optional[str] = None
    level: Optional[str] = None
    category: str
    sub_category: Optional[str] = Field(None, max_length=50)
    course_type: Optional[str] = Field(None, max_length=20)
    language: Optional[str] = Field(None, max_length=20)
    duration: Optional[int] = Field(None, ge=0)
    capacity: Optional[int] = Field(None, ge=1)
    price: Decimal = Field(Decimal("0"), ge=0)
    discount_price: Optional[Decimal] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    video_url: Optional[str] = Field(None, max_length=500)
    requirements: Optional[str] = None
    objectives: Optional[str] = None
    syllabus: Optional[str] = None
    status: str = CourseStatus.DEFAULT
    is_published: bool = False
    published_at: Optional[StrictDateTime] = None

    modules: Optional[List[ModuleItem]] = None

    child_collections = ("modules",)
    sticky_fields = ("status", "published_at")

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return one_of(value, COURSE_LEVELS, case_sensitive=False)

    @field_validator("category")
    @classmethod
    def _known_category(cls, value: str) -> str:
        return one_of(value, COURSE_CATEGORIES)

    @field_validator("status")
    @classmethod
    def _known_status(cls, value: str) -> str:
        return one_of(value, CourseStatus.VALUES, case_sensitive=False)

    @model_validator(mode="after")
    def _derive(self):
        if not self.slug:
            self.slug = slugify(self.title)
        # The published flag always follows the status.
        self.is_published = self.status == CourseStatus.PUBLISHED
        if self.is_published and self.published_at is None:
            self.published_at = utcnow()
        return self


class LessonRead(ReadModel):
    id: int
    module_id: int
    title: str
    description: Optional[str] = None
    type: str
    content: Optional[str] = None
    video_url: Optional[str] = None
    order_index: int
    duration: int
    is_preview: bool


class ModuleRead(ReadModel):
    id: int
    course_id: int
    title: str
    description: Optional[str] = None
    order_index: int
    duration: int
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    lessons: List[LessonRead] = []


class CourseDetail(BaseModel):
    id: int
    title: str
    slug: Optional[str] = None
    description: str
    short_description: Optional[str] = None
    instructor_id: Optional[str] = None
    level: Optional[str] = None
    category: str
    sub_category: Optional[str] = None
    course_type: Optional[str] = None
    language: Optional[str] = None
    duration: Optional[int] = None
    capacity: Optional[int] = None
    price: Decimal
    discount_price: Optional[Decimal] = None
    image_url: Optional[str] = None
    video_url: Optional[str] = None
    requirements: Optional[str] = None
    objectives: Optional[str] = None
    syllabus: Optional[str] = None
    status: str
    is_published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    modules: List[ModuleRead] = []


class LessonIssue(BaseModel):
    lesson_id: int
    title: str
    issue: str


class CourseReadiness(BaseModel):
    """Whether a course has the content it needs before publishing."""

    is_valid: bool
    course_has_image: bool
    course_has_video: bool
    has_sufficient_modules: bool
    lessons_with_missing_content: List[LessonIssue] = []
