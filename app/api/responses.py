# app/api/responses.py
from fastapi import status
from fastapi.responses import JSONResponse

from app.schemas.result import NotFound, PersistenceFailure, ValidationFailure

ERROR_STATUS = {
    ValidationFailure: status.HTTP_400_BAD_REQUEST,
    NotFound: status.HTTP_404_NOT_FOUND,
    PersistenceFailure: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Documents the tagged error bodies in OpenAPI.
RESULT_RESPONSES = {
    status.HTTP_400_BAD_REQUEST: {"model": ValidationFailure},
    status.HTTP_404_NOT_FOUND: {"model": NotFound},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": PersistenceFailure},
}


def result_response(result, success_status: int = status.HTTP_200_OK) -> JSONResponse:
    """Serialize a tagged write result with the status code for its kind."""
    status_code = ERROR_STATUS.get(type(result), success_status)
    return JSONResponse(status_code=status_code, content=result.model_dump(mode="json"))
