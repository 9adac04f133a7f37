# app/crud/crud_event.py
from app.constants.catalog import EntityKind
from app.constants.status import EventStatus
from app.models.event import (
    Event,
    EventParticipant,
    EventPrize,
    EventProgrammingLanguage,
    EventRound,
    EventSchedule,
    EventTechnology,
)

from .aggregate import AggregateDefinition, AggregateWriter, ChildCollection

# Children are written in this order on create and update.
EVENT_DEFINITION = AggregateDefinition(
    kind=EntityKind.event,
    model=Event,
    status_set=EventStatus,
    collections=(
        ChildCollection(
            "languages",
            EventProgrammingLanguage,
            "event_id",
            project=lambda row: row["language"],
        ),
        ChildCollection(
            "technologies",
            EventTechnology,
            "event_id",
            project=lambda row: row["technology"],
        ),
        ChildCollection("prizes", EventPrize, "event_id", order_by="rank"),
        ChildCollection("rounds", EventRound, "event_id"),
        ChildCollection("schedule", EventSchedule, "event_id", order_by="start_time"),
        # Registrations come through crud_participant, never through the
        # event payload.
        ChildCollection(
            "participants",
            EventParticipant,
            "event_id",
            order_by="registration_date",
            writable=False,
        ),
    ),
)

event = AggregateWriter(EVENT_DEFINITION)
