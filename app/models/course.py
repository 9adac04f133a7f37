# app/models/course.py
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    text,
)

from app.constants.status import CourseStatus, status_check
from app.db.base_class import Base
from app.models.mixins import AuditMixin, utcnow


class Course(AuditMixin, Base):
    __tablename__ = "courses"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), nullable=True, index=True)
    description = Column(Text, nullable=False)
    short_description = Column(String(500), nullable=True)
    instructor_id = Column(String, nullable=True, index=True)
    level = Column(String(20), nullable=True)
    category = Column(String(50), nullable=False, index=True)
    sub_category = Column(String(50), nullable=True)
    course_type = Column(String(20), nullable=True)
    language = Column(String(20), nullable=True)
    duration = Column(Integer, nullable=True)
    capacity = Column(Integer, nullable=True)
    price = Column(Numeric(10, 2), nullable=False, default=0)
    discount_price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(String(500), nullable=True)
    video_url = Column(String(500), nullable=True)
    requirements = Column(Text, nullable=True)
    objectives = Column(Text, nullable=True)
    syllabus = Column(Text, nullable=True)
    status = Column(String(20), nullable=False, default=CourseStatus.DEFAULT)
    is_published = Column(Boolean, nullable=False, server_default=text("false"), default=False)
    published_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        CheckConstraint(status_check("status", CourseStatus), name="ck_courses_status"),
    )


class CourseModule(Base):
    __tablename__ = "course_modules"

    id = Column(Integer, primary_key=True, autoincrement=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=True)
    video_url = Column(String(500), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class CourseLesson(Base):
    __tablename__ = "course_lessons"

    id = Column(Integer, primary_key=True, autoincrement=True)
    module_id = Column(Integer, ForeignKey("course_modules.id"), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False, default="text")
    content = Column(Text, nullable=True)
    video_url = Column(String(500), nullable=True)
    order_index = Column(Integer, nullable=False, default=0)
    duration = Column(Integer, nullable=False, default=0)
    is_preview = Column(Boolean, nullable=False, server_default=text("false"), default=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
