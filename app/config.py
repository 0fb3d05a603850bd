# =============================================================================
# app/config.py - Service Settings
# =============================================================================
# Every tunable of the cleaning service, read from the environment through
# pydantic-settings and validated once at import.
#
# Usage:
#   from app.config import settings
#   settings.OPENAI_MODEL
#
# Lookup order:
# 1. Process environment
# 2. A .env file in the working directory, when present
#
# The cleaning engine itself never reads settings; the API and agent layers
# pass the values it needs (seed, summary generator) in explicitly.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Typed view of the service's environment variables.

    Only OPENAI_API_KEY changes behaviour when absent; everything else has
    a default that works for local development.
    """

    # -------------------------------------------------------------------------
    # Language Model
    # -------------------------------------------------------------------------
    # Optional: without a key, /chat returns 503 and summaries use the
    # deterministic template generator

    OPENAI_API_KEY: str | None = Field(
        default=None,
        description="OpenAI API key for the planner and summarizer"
    )

    OPENAI_MODEL: str = Field(
        default="gpt-4o-mini",
        description="Model for the planner and summarizer (must support json_schema responses)"
    )

    PLANNER_TEMPERATURE: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="OpenAI temperature for the action planner"
    )

    SUMMARY_TEMPERATURE: float = Field(
        default=0.0,
        ge=0.0,
        le=2.0,
        description="OpenAI temperature for the batch summary"
    )

    MAX_COMPLETION_TOKENS: int = Field(
        default=16384,
        ge=256,
        description="Completion token limit for planner and summary calls"
    )

    LLM_SUMMARY_ENABLED: bool = Field(
        default=True,
        description="Summarize applied actions with OpenAI (falls back to the template generator)"
    )

    # -------------------------------------------------------------------------
    # Engine Settings
    # -------------------------------------------------------------------------

    MAX_ROWS_PER_REQUEST: int = Field(
        default=100_000,
        ge=1,
        description="Largest dataset accepted by the apply and chat endpoints"
    )

    RANDOM_SEED: int | None = Field(
        default=None,
        description="Seed for FILL_WITH_RANDOM (unset = non-deterministic)"
    )

    # -------------------------------------------------------------------------
    # Server
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Deployment stage; production restricts CORS to CORS_ORIGINS"
    )

    DEBUG: bool = Field(
        default=False,
        description="Log at DEBUG level regardless of LOG_LEVEL"
    )

    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Log level when DEBUG is off"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Interface uvicorn binds to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port uvicorn listens on"
    )

    # Comma-separated, split by cors_origins_list
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000",
        description="Origins allowed to call the API in production"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        # Blank variables count as unset
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Derived Values
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """CORS_ORIGINS as a list, e.g. "a.com, b.com" -> ["a.com", "b.com"]."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def llm_configured(self) -> bool:
        return bool(self.OPENAI_API_KEY)

    @property
    def is_development(self) -> bool:
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """Build the Settings once per process; later calls reuse it."""
    return Settings()


settings = get_settings()
