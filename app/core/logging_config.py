# app/core/logging_config.py
import logging

from app.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str | None = None) -> None:
    """Configure the root logger once for the whole service."""
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=LOG_FORMAT,
    )
    # SQLAlchemy's own engine logging is controlled by SQL_ECHO.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
