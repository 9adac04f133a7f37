# app/crud/crud_participant.py
"""
Registration of users for events.

Participants are a read-only collection of the event aggregate: they are
never written through the event payload, only through these operations.
"""

import logging
from typing import Any, List, Optional

from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from app.db.gateway import PersistenceGateway
from app.models.event import EventParticipant
from app.schemas.event import ParticipantCreate
from app.schemas.result import NotFound, PersistenceFailure, Success, ValidationFailure

from .crud_event import EVENT_DEFINITION, event
from .projections import get_collection

logger = logging.getLogger(__name__)

ALREADY_REGISTERED = "User is already registered for this event"


class CRUDParticipant:
    """Add, remove and list event participants."""

    def get(self, db, *, event_id: int, user_id: str) -> Optional[EventParticipant]:
        return (
            db.query(EventParticipant)
            .filter(
                EventParticipant.event_id == event_id,
                EventParticipant.user_id == user_id,
            )
            .first()
        )

    def add(self, gateway: PersistenceGateway, event_id: int, payload: Any):
        try:
            data = ParticipantCreate.model_validate(payload)
        except ValidationError as exc:
            return ValidationFailure(
                reasons=[
                    f"{'.'.join(str(p) for p in error['loc']) or 'payload'}: {error['msg']}"
                    for error in exc.errors()
                ]
            )

        try:
            with gateway.begin_transaction() as tx:
                if event.get(tx.session, event_id) is None:
                    return NotFound()
                if self.get(tx.session, event_id=event_id, user_id=data.user_id):
                    return ValidationFailure(reasons=[ALREADY_REGISTERED])

                participant = tx.add(
                    EventParticipant(
                        event_id=event_id,
                        user_id=data.user_id,
                        team_name=data.team_name,
                        payment_status=data.payment_status,
                    )
                )
                tx.flush()
                participant_id = participant.id
                tx.commit()
        except IntegrityError:
            # A concurrent registration for the same user won the race.
            return ValidationFailure(reasons=[ALREADY_REGISTERED])
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to register user {data.user_id} for event {event_id}: {str(e)}",
                exc_info=True,
            )
            return PersistenceFailure(message="Could not register participant", detail=str(e))

        logger.info(f"User {data.user_id} registered for event {event_id}")
        return Success(id=participant_id)

    def remove(self, gateway: PersistenceGateway, event_id: int, user_id: str):
        try:
            with gateway.begin_transaction() as tx:
                if event.get(tx.session, event_id) is None:
                    return NotFound()
                participant = self.get(tx.session, event_id=event_id, user_id=user_id)
                if participant is None:
                    return NotFound()
                participant_id = participant.id
                tx.session.delete(participant)
                tx.commit()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to remove user {user_id} from event {event_id}: {str(e)}",
                exc_info=True,
            )
            return PersistenceFailure(message="Could not remove participant", detail=str(e))

        logger.info(f"User {user_id} removed from event {event_id}")
        return Success(id=participant_id)

    def list(self, gateway: PersistenceGateway, event_id: int) -> Optional[List[dict]]:
        """Participants of a live event in registration order; None if the event is gone."""
        return get_collection(gateway, EVENT_DEFINITION, event_id, "participants")


participant = CRUDParticipant()
