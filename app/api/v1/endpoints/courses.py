# app/api/v1/endpoints/courses.py
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, status

from app.api import deps
from app.api.responses import RESULT_RESPONSES, result_response
from app.crud import crud_course, lifecycle, projections
from app.db.gateway import PersistenceGateway
from app.schemas.course import CourseDetail, CourseReadiness
from app.schemas.result import Success
from app.schemas.token import TokenPayload

router = APIRouter(tags=["Courses"])


@router.post(
    "/courses",
    response_model=Success,
    status_code=status.HTTP_201_CREATED,
    responses=RESULT_RESPONSES,
)
def create_course(
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Creates a course with its modules and their lessons in one transaction."""
    result = crud_course.course.create(gateway, payload)
    return result_response(result, success_status=status.HTTP_201_CREATED)


@router.get("/courses/{course_id}", response_model=CourseDetail)
def get_course(
    course_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    detail = projections.get_detail(gateway, crud_course.COURSE_DEFINITION, course_id)
    if detail is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return detail


@router.put("/courses/{course_id}", response_model=Success, responses=RESULT_RESPONSES)
def update_course(
    course_id: int,
    payload: Dict[str, Any] = Body(...),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Full update; sending ``modules`` replaces every module and lesson."""
    result = crud_course.course.update(gateway, course_id, payload)
    return result_response(result)


@router.patch("/courses/{course_id}/status", response_model=Success, responses=RESULT_RESPONSES)
def update_course_status(
    course_id: int,
    target: Optional[str] = Body(None, embed=True, alias="status"),
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = lifecycle.update_status(gateway, crud_course.COURSE_DEFINITION, course_id, target)
    return result_response(result)


@router.delete("/courses/{course_id}", response_model=Success, responses=RESULT_RESPONSES)
def delete_course(
    course_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    result = crud_course.course.delete(gateway, course_id)
    return result_response(result)


@router.post("/courses/{course_id}/publish", response_model=Success, responses=RESULT_RESPONSES)
def publish_course(
    course_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    """Publishes without enforcing the readiness report."""
    result = lifecycle.publish_course(gateway, course_id)
    return result_response(result)


@router.get("/courses/{course_id}/validation", response_model=CourseReadiness)
def validate_course(
    course_id: int,
    gateway: PersistenceGateway = Depends(deps.get_gateway),
    current_user: TokenPayload = Depends(deps.get_current_admin),
):
    report = projections.check_course_readiness(gateway, course_id)
    if report is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Course not found")
    return report
