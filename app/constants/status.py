# app/constants/status.py
"""
Status values for each aggregate kind.

Transitions are permissive: an administrator may move a record from any
declared status to any other declared status.
"""


class _StatusSet:
    VALUES: tuple = ()
    DEFAULT: str = ""

    @classmethod
    def all_values(cls) -> list[str]:
        """Return all valid status values."""
        return list(cls.VALUES)

    @classmethod
    def is_valid(cls, status: str) -> bool:
        """Check if a status value is valid."""
        return status in cls.VALUES


class EventStatus(_StatusSet):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    VALUES = (UPCOMING, ONGOING, COMPLETED, CANCELLED)
    DEFAULT = UPCOMING


class ExamStatus(_StatusSet):
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    VALUES = (UPCOMING, ONGOING, COMPLETED, CANCELLED)
    DEFAULT = UPCOMING


class CourseStatus(_StatusSet):
    DRAFT = "draft"
    PUBLISHED = "published"

    VALUES = (DRAFT, PUBLISHED)
    DEFAULT = DRAFT


class CompetitionStatus(_StatusSet):
    DRAFT = "draft"
    UPCOMING = "upcoming"
    ONGOING = "ongoing"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    VALUES = (DRAFT, UPCOMING, ONGOING, COMPLETED, CANCELLED)
    DEFAULT = DRAFT


def status_check(column: str, status_set: type[_StatusSet]) -> str:
    """SQL CHECK expression restricting a column to a status set."""
    quoted = ", ".join(f"'{value}'" for value in status_set.VALUES)
    return f"{column} IN ({quoted})"
