# app/models/exam.py
from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    text,
)

from app.constants.status import ExamStatus, status_check
from app.db.base_class import Base
from app.models.mixins import AuditMixin, utcnow


class Exam(AuditMixin, Base):
    __tablename__ = "exams"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    type = Column(String(50), nullable=False, default="multiple_choice")
    duration = Column(Integer, nullable=False)  # minutes
    total_points = Column(Integer, nullable=False, default=100)
    passing_score = Column(Integer, nullable=False, default=60)
    start_time = Column(DateTime(timezone=True), nullable=True)
    end_time = Column(DateTime(timezone=True), nullable=True)
    instructions = Column(Text, nullable=True)
    allow_review = Column(Boolean, nullable=False, server_default=text("true"), default=True)
    shuffle_questions = Column(Boolean, nullable=False, server_default=text("true"), default=True)
    course_id = Column(Integer, ForeignKey("courses.id"), nullable=True, index=True)
    status = Column(String(20), nullable=False, default=ExamStatus.DEFAULT)
    created_by = Column(String, nullable=True, index=True)

    __table_args__ = (
        CheckConstraint(status_check("status", ExamStatus), name="ck_exams_status"),
    )


class ExamQuestion(Base):
    __tablename__ = "exam_questions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    type = Column(String(50), nullable=False, default="multiple_choice")
    content = Column(Text, nullable=False)
    points = Column(Integer, nullable=False, default=1)
    order_index = Column(Integer, nullable=False, default=0)
    options = Column(JSON, nullable=True)
    correct_answer = Column(Text, nullable=True)
    explanation = Column(Text, nullable=True)


class ExamAnswerTemplate(Base):
    """Scoring rubric attached to an essay question."""

    __tablename__ = "exam_answer_templates"

    id = Column(Integer, primary_key=True, autoincrement=True)
    exam_id = Column(Integer, ForeignKey("exams.id"), nullable=False, index=True)
    question_id = Column(
        Integer, ForeignKey("exam_questions.id"), nullable=False, index=True
    )
    scoring_criteria = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
