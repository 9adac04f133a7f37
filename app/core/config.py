# app/core/config.py

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Values come from the process environment (Docker Compose passes the
    # root .env through). Deployment settings have no defaults.
    model_config = SettingsConfigDict(extra="ignore")

    # The environment mode: 'local' or 'prod'
    ENV: str

    # --- Database URLs ---
    DATABASE_URL_LOCAL: str = "sqlite:///./admin_service.db"
    DATABASE_URL_PROD: str
    SQL_ECHO: bool = False

    # --- Auth ---
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"

    # --- HTTP ---
    CORS_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:5173"]

    LOG_LEVEL: str = "INFO"

    # Create missing tables on startup instead of relying on Alembic.
    AUTO_CREATE_TABLES: bool = False

    @property
    def DATABASE_URL(self) -> str:
        return (
            self.DATABASE_URL_LOCAL if self.ENV == "local" else self.DATABASE_URL_PROD
        )


# Create a single instance of the settings
settings = Settings()
