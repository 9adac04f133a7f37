# app/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1.api import api_router
from app.core.config import settings
from app.core.logging_config import setup_logging
from app.db.gateway import PersistenceGateway

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Application starting up...")
    gateway = PersistenceGateway(settings.DATABASE_URL, echo=settings.SQL_ECHO).open()
    if settings.AUTO_CREATE_TABLES:
        gateway.create_all()
        logger.info("Database tables checked and created if necessary.")
    app.state.gateway = gateway
    try:
        yield
    finally:
        logger.info("Application shutting down...")
        gateway.close()
        app.state.gateway = None


app = FastAPI(
    title="Admin Back-Office Service",
    version="1.0.0",
    description="""
        **Admin Back-Office Service**

        Administrative management of the platform's catalog.

        * **Events**: events with languages, technologies, prizes, rounds, schedule and participants
        * **Courses**: courses with modules and lessons, publishing and readiness checks
        * **Exams**: exams with questions and essay scoring templates
        * **Competitions**: competitions with their problem sets

        Every write is all-or-nothing. All endpoints require JWT authentication
        via the `Authorization: Bearer <token>` header.
        """,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router, prefix="/api/v1")


@app.get("/")
def read_root():
    return {"status": "Admin service is running"}
