# app/models/__init__.py
# Importing every model here registers its table on Base.metadata.

from .competition import Competition, CompetitionParticipant, CompetitionProblem
from .course import Course, CourseLesson, CourseModule
from .event import (
    Event,
    EventParticipant,
    EventPrize,
    EventProgrammingLanguage,
    EventRound,
    EventSchedule,
    EventTechnology,
)
from .exam import Exam, ExamAnswerTemplate, ExamQuestion
