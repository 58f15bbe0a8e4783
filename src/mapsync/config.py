"""Application configuration via Pydantic BaseSettings."""

from __future__ import annotations

from enum import Enum
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    development = "development"
    staging = "staging"
    production = "production"


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env file."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # Environment
    ENVIRONMENT: Environment = Environment.development

    # Logging
    LOG_LEVEL: str = "INFO"

    # Mapping definitions (JSON document, see JsonFileMappingStore)
    MAPPINGS_FILE: str = "mappings.json"

    # CLI defaults
    OUTPUT_FORMAT: OutputFormat = OutputFormat.TABLE
    INTERACTIVE: bool = True


@lru_cache
def get_settings() -> Settings:
    """Singleton settings instance."""
    return Settings()
