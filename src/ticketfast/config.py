"""Application configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    # SLA windows in minutes since ticket creation
    SLA_URGENT_WARNING_MINUTES: int = 45
    SLA_URGENT_EXCEEDED_MINUTES: int = 60
    SLA_NORMAL_WARNING_MINUTES: int = 20
    SLA_NORMAL_EXCEEDED_MINUTES: int = 30

    # Ticket image attachments
    MAX_IMAGE_SIZE_BYTES: int = 5 * 1024 * 1024
    IMAGE_BUCKET: str = "ticket-images"


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
