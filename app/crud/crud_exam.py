# app/crud/crud_exam.py
from app.constants.catalog import EntityKind
from app.constants.status import ExamStatus
from app.models.course import Course
from app.models.exam import Exam, ExamAnswerTemplate, ExamQuestion

from .aggregate import AggregateDefinition, AggregateWriter, ChildCollection, Reference

EXAM_DEFINITION = AggregateDefinition(
    kind=EntityKind.exam,
    model=Exam,
    status_set=ExamStatus,
    collections=(
        ChildCollection(
            "questions",
            ExamQuestion,
            "exam_id",
            order_by="order_index",
            children=(
                # Essay questions carry a scoring rubric.
                ChildCollection(
                    "answer_templates",
                    ExamAnswerTemplate,
                    "question_id",
                    root_key="exam_id",
                    items=lambda question: question.answer_templates(),
                    build=lambda criteria, position: {"scoring_criteria": criteria},
                ),
            ),
        ),
    ),
    references=(Reference("course_id", Course, "Course not found"),),
)

exam = AggregateWriter(EXAM_DEFINITION)
