# app/api/v1/endpoints/exams.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api import deps
from app.api.responses import RESULT_RESPONSES, result_response
from app.crud import crud_exam, lifecycle, projections
from app.db.gateway import PersistenceGateway
from app.schemas.exam import ExamDetail
from app.schemas.result import Success
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Exams"])


@router.post(
    "/exams",
    response_model=Success,
    status_code=status.HTTP_201_CREATED,
    responses=RESULT_RESPONSES,
)
def create_exam(
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Creates an exam with its questions; essay questions keep their scoring criteria as answer templates."""
    result = crud_exam.exam.create(gateway, payload, created_by=current_user.sub)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/exams/{exam_id}", response_model=ExamDetail)
def get_exam(
    exam_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    detail = projections.get_detail(gateway, crud_exam.EXAM_DEFINITION, exam_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Exam not found")
    return detail


@router.put("/exams/{exam_id}", response_model=Success, responses=RESULT_RESPONSES)
def update_exam(
    exam_id: int,
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_exam.exam.update(gateway, exam_id, payload)
    return result_response(result)


@router.patch("/exams/{exam_id}/status", response_model=Success, responses=RESULT_RESPONSES)
def update_exam_status(
    exam_id: int,
    target: Optional[str] = Body(None, embed=True, alias="status"),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = lifecycle.update_status(gateway, crud_exam.EXAM_DEFINITION, exam_id, target)
    return result_response(result)


@router.delete("/exams/{exam_id}", response_model=Success, responses=RESULT_RESPONSES)
def delete_exam(
    exam_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_exam.exam.delete(gateway, exam_id)
    return result_response(result)
