# app/crud/__init__.py

from .crud_competition import COMPETITION_DEFINITION, competition
from .crud_course import COURSE_DEFINITION, course
from .crud_event import EVENT_DEFINITION, event
from .crud_exam import EXAM_DEFINITION, exam
from .crud_participant import participant
