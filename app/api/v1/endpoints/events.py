# app/api/v1/endpoints/events.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api import deps
from app.api.responses import RESULT_RESPONSES, result_response
from app.crud import crud_event, crud_participant, lifecycle, projections
from app.db.gateway import PersistenceGateway
from app.schemas.event import EventDetail, EventParticipantRead
from app.schemas.result import Success
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Events"])


@router.post(
    "/events",
    response_model=Success,
    status_code=status.HTTP_201_CREATED,
    responses=RESULT_RESPONSES,
)
def create_event(
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """
    Creates an event together with its languages, technologies, prizes,
    rounds and schedule. Nothing is saved unless every part is.
    """
    result = crud_event.event.create(gateway, payload, created_by=current_user.sub)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/events/{event_id}", response_model=EventDetail)
def get_event(
    event_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    detail = projections.get_detail(gateway, crud_event.EVENT_DEFINITION, event_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return detail


@router.put("/events/{event_id}", response_model=Success, responses=RESULT_RESPONSES)
def update_event(
    event_id: int,
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Full update. Child collections left out of the body keep their rows."""
    result = crud_event.event.update(gateway, event_id, payload)
    return result_response(result)


@router.patch("/events/{event_id}/status", response_model=Success, responses=RESULT_RESPONSES)
def update_event_status(
    event_id: int,
    target: Optional[str] = Body(None, embed=True, alias="status"),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = lifecycle.update_status(gateway, crud_event.EVENT_DEFINITION, event_id, target)
    return result_response(result)


@router.delete("/events/{event_id}", response_model=Success, responses=RESULT_RESPONSES)
def delete_event(
    event_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_event.event.delete(gateway, event_id)
    return result_response(result)


@router.get("/events/{event_id}/participants", response_model=List[EventParticipantRead])
def list_event_participants(
    event_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    participants = crud_participant.participant.list(gateway, event_id)
    if participants is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return participants


@router.post(
    "/events/{event_id}/participants",
    response_model=Success,
    status_code=status.HTTP_201_CREATED,
    responses=RESULT_RESPONSES,
)
def add_event_participant(
    event_id: int,
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_participant.participant.add(gateway, event_id, payload)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.delete(
    "/events/{event_id}/participants/{user_id}",
    response_model=Success,
    responses=RESULT_RESPONSES,
)
def remove_event_participant(
    event_id: int,
    user_id: str,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_participant.participant.remove(gateway, event_id, user_id)
    return result_response(result)
