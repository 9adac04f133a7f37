# app/crud/crud_course.py
from app.constants.catalog import EntityKind
from app.constants.status import CourseStatus
from app.models.course import Course, CourseLesson, CourseModule

from .aggregate import AggregateDefinition, AggregateWriter, ChildCollection

COURSE_DEFINITION = AggregateDefinition(
    kind=EntityKind.course,
    model=Course,
    status_set=CourseStatus,
    collections=(
        ChildCollection(
            "modules",
            CourseModule,
            "course_id",
            order_by="order_index",
            children=(
                ChildCollection(
                    "lessons",
                    CourseLesson,
                    "module_id",
                    order_by="order_index",
                    items=lambda module: module.lessons,
                ),
            ),
        ),
    ),
)

course = AggregateWriter(COURSE_DEFINITION)
