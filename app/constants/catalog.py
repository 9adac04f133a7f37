# app/constants/catalog.py
"""
Fixed vocabularies accepted by the admin forms.

Category-like values are matched exactly; difficulty and level values are
matched case-insensitively and stored lower-case.
"""
from enum import Enum


class EntityKind(str, Enum):
    event = "event"
    course = "course"
    exam = "exam"
    competition = "competition"


EVENT_CATEGORIES = (
    "Competitive Programming",
    "Hackathon",
    "Web Development",
    "AI/ML",
    "Mobile Development",
    "DevOps",
    "Security",
)

EVENT_DIFFICULTIES = ("beginner", "intermediate", "advanced", "expert")

COURSE_CATEGORIES = (
    "programming",
    "web_development",
    "mobile_development",
    "data_science",
    "machine_learning",
    "design",
    "business",
)

COURSE_LEVELS = ("beginner", "intermediate", "advanced")

EXAM_TYPES = ("multiple_choice", "essay", "coding", "mixed")

QUESTION_TYPES = ("multiple_choice", "essay", "coding")

COMPETITION_DIFFICULTIES = ("easy", "medium", "hard")

LESSON_TYPES = ("video", "text", "coding", "quiz")
