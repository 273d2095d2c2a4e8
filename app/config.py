# app/config.py
# Settings are read from environment variables and an optional .env file.
#
# Usage:
#   from app.config import get_settings
#   settings = get_settings()

import logging
from functools import lru_cache
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Process configuration for the product API.

    API_KEY is the shared secret required on mutating routes. When it is
    unset every create/update/delete is rejected.
    """

    API_KEY: Optional[str] = Field(
        default=None,
        description="Shared secret expected in the x-api-key header"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=3000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    LOG_LEVEL: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...)"
    )

    SEED_SAMPLE_DATA: bool = Field(
        default=True,
        description="Start the store with the sample catalog"
    )

    # comma-separated
    CORS_ORIGINS: str = Field(
        default="*",
        description="Allowed CORS origins (comma-separated)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def cors_origins_list(self) -> List[str]:
        """
        Parse CORS_ORIGINS into a list.

        Example: "http://localhost:5173, https://shop.example" ->
        ["http://localhost:5173", "https://shop.example"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def log_level_value(self) -> int:
        level = logging.getLevelName(self.LOG_LEVEL.upper())
        return level if isinstance(level, int) else logging.INFO


@lru_cache
def get_settings() -> Settings:
    """Return the cached Settings instance (the environment is parsed once)."""
    return Settings()
