# app/api/v1/api.py

from fastapi import APIRouter
from app.api.v1.endpoints import competitions, courses, events, exams

# This is the main router for the v1 API.
api_router = APIRouter()

api_router.include_router(events.router)
api_router.include_router(courses.router)
api_router.include_router(exams.router)
api_router.include_router(competitions.router)
