# app/schemas/result.py
"""
Tagged outcomes of every write and lifecycle operation.

Callers branch on ``kind``; the HTTP layer maps each kind to a status code.
"""
from typing import List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Success(BaseModel):
    kind: Literal["success"] = "success"
    id: int


class ValidationFailure(BaseModel):
    kind: Literal["validationFailure"] = "validationFailure"
    reasons: List[str]


class NotFound(BaseModel):
    kind: Literal["notFound"] = "notFound"


class PersistenceFailure(BaseModel):
    kind: Literal["persistenceFailure"] = "persistenceFailure"
    message: str
    # Driver error text; logged, never returned to clients.
    detail: Optional[str] = Field(default=None, exclude=True)


WriteResult = Union[Success, ValidationFailure, NotFound, PersistenceFailure]
