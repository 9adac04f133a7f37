# app/api/v1/endpoints/competitions.py
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api import deps
from app.api.responses import RESULT_RESPONSES, result_response
from app.crud import crud_competition, lifecycle, projections
from app.db.gateway import PersistenceGateway
from app.schemas.competition import CompetitionDetail, CompetitionParticipantRead
from app.schemas.result import Success
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Competitions"])


@router.post(
    "/competitions",
    response_model=Success,
    status_code=status.HTTP_201_CREATED,
    responses=RESULT_RESPONSES,
)
def create_competition(
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Creates a competition with its problem set in one transaction."""
    result = crud_competition.competition.create(gateway, payload)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/competitions/{competition_id}", response_model=CompetitionDetail)
def get_competition(
    competition_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    detail = projections.get_detail(gateway, crud_competition.COMPETITION_DEFINITION, competition_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Competition not found")
    return detail


@router.put("/competitions/{competition_id}", response_model=Success, responses=RESULT_RESPONSES)
def update_competition(
    competition_id: int,
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_competition.competition.update(gateway, competition_id, payload)
    return result_response(result)


@router.patch("/competitions/{competition_id}/status", response_model=Success, responses=RESULT_RESPONSES)
def update_competition_status(
    competition_id: int,
    target: Optional[str] = Body(None, embed=True, alias="status"),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = lifecycle.update_status(gateway, crud_competition.COMPETITION_DEFINITION, competition_id, target)
    return result_response(result)


@router.delete("/competitions/{competition_id}", response_model=Success, responses=RESULT_RESPONSES)
def delete_competition(
    competition_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_competition.competition.delete(gateway, competition_id)
    return result_response(result)


@router.get(
    "/competitions/{competition_id}/participants",
    response_model=List[CompetitionParticipantRead],
)
def list_competition_participants(
    competition_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Leaderboard order: highest score first."""
    participants = projections.get_collection(
        gateway, crud_competition.COMPETITION_DEFINITION, competition_id, "participants"
    )
    if participants is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Competition not found")
    return participants
