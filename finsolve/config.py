"""
Library configuration using Pydantic Settings.
"""

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def get_env_file() -> str:
    """Determine which env file to use based on environment."""
    env = os.getenv("APP_ENV", "development")
    if env == "production":
        return ".env.production"
    return ".env.development"


class Settings(BaseSettings):
    """Library settings loaded from environment variables."""

    # App settings
    app_name: str = "finsolve"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    app_env: str = "development"

    # Floating point comparison (absolute epsilon, then ULP distance)
    float_epsilon: float = Field(default=1e-6, ge=0.0)
    float_ulps: int = Field(default=20, ge=0)

    # Thresholds above which inputs are logged as unusual
    rate_warning_threshold: float = Field(default=1.0, gt=0.0)
    compounding_periods_warning_threshold: int = Field(default=366, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v):
        """Accept level names in any case, e.g. "debug"."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    model_config = SettingsConfigDict(
        env_prefix="FINSOLVE_",
        env_file=get_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
