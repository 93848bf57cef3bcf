# callmetrics/config.py
"""
Centralized library configuration using pydantic-settings.

All settings are read from environment variables or .env file.
Callers embedding the engine can tune parsing and formatting without code changes.
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from callmetrics.constants import ANSWERED_OUTCOMES


class Settings(BaseSettings):
    """Library settings loaded from environment variables.

    Priority: environment variables > .env file > defaults
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    # --- Debug / Logging ---
    DEBUG: bool = Field(
        default=False,
        description="Force DEBUG log level on the library logger"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    LOGS_PATH: Optional[str] = Field(
        default=None,
        description="Directory for the JSON file log; console only when unset"
    )

    # --- Tracing ---
    SERVICE_NAME: str = Field(
        default="callmetrics",
        description="service.name reported on spans"
    )
    TRACING_ENABLED: bool = Field(
        default=False,
        description="Install an SDK tracer provider with a console exporter"
    )

    # --- Parsing / Formatting ---
    THOUSANDS_SEPARATOR: str = Field(
        default=".",
        description="Digit group separator for call volumes (pt-BR uses '.')"
    )
    MIN_VALID_YEAR: int = Field(
        default=2000,
        description="Oldest year accepted in DD/MM/YYYY dates"
    )
    ANSWERED_OUTCOMES: List[str] = Field(
        default_factory=lambda: list(ANSWERED_OUTCOMES),
        description="Outcome labels that mark a row as an answered call"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v_upper

    @field_validator("ANSWERED_OUTCOMES")
    @classmethod
    def validate_answered_outcomes(cls, v: List[str]) -> List[str]:
        cleaned = [label.strip() for label in v if label and label.strip()]
        if not cleaned:
            raise ValueError("ANSWERED_OUTCOMES must contain at least one label")
        return cleaned


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings()


# --- Singleton instance for easy import ---
settings = get_settings()
