"""
Application Configuration Module

This module handles all application settings using Pydantic's BaseSettings.
Environment variables are automatically loaded from a .env file, making it
easy to manage different configurations for development and production.
"""

import logging

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Pydantic automatically reads these values from:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values (if specified)
    """

    # Database connection string for the user store
    # MONGO_URL is accepted for deployments configured for the old service
    # Format: sqlite+aiosqlite:///path or postgresql+asyncpg://user:pw@host/db
    DATABASE_URL: str = Field(
        "sqlite+aiosqlite:///./hiking.db",
        validation_alias=AliasChoices("DATABASE_URL", "MONGO_URL"),
    )

    # Address the uvicorn server binds to
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Overpass API interpreter endpoint used for hiking route searches
    # See https://overpass-turbo.eu/ to try queries interactively
    OVERPASS_URL: str = "https://overpass-api.de/api/interpreter"

    # Comma-separated list of allowed CORS origins ("*" allows all domains)
    CORS_ORIGINS: str = "*"

    # Rate limiting for signup/signin, keyed by client address
    # Storage can point at redis:// when running several workers
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_STORAGE_URI: str = "memory://"
    AUTH_RATE_LIMIT: str = "20/minute"

    # Environment mode: "development" or "production"
    ENVIRONMENT: str = "production"
    LOG_LEVEL: str = "INFO"

    @field_validator("DATABASE_URL")
    def validate_database_url(cls, value):
        if value.startswith("postgresql://"):
            fixed = value.replace("postgresql://", "postgresql+asyncpg://", 1)
            logger.warning("Database URL has no async driver, using postgresql+asyncpg")
            return fixed
        return value

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    class Config:
        """
        Pydantic configuration class.

        Tells Pydantic to load settings from a .env file,
        which should be placed in the project root directory.
        """
        env_file = ".env"
        extra = "ignore"


# Global settings instance used throughout the application
settings = Settings()
