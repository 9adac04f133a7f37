# app/crud/crud_competition.py
from app.constants.catalog import EntityKind
from app.constants.status import CompetitionStatus
from app.models.competition import Competition, CompetitionParticipant, CompetitionProblem

from .aggregate import AggregateDefinition, AggregateWriter, ChildCollection

COMPETITION_DEFINITION = AggregateDefinition(
    kind=EntityKind.competition,
    model=Competition,
    status_set=CompetitionStatus,
    collections=(
        ChildCollection(
            "problems", CompetitionProblem, "competition_id", order_by="points", descending=True
        ),
        # Leaderboard order; rows are written by the contest runner, not by admins.
        ChildCollection(
            "participants",
            CompetitionParticipant,
            "competition_id",
            order_by="score",
            descending=True,
            writable=False,
        ),
    ),
)

competition = AggregateWriter(COMPETITION_DEFINITION)
