"""Application configuration using pydantic-settings with grouped env prefixes."""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class S3Config(BaseSettings):
    """S3 client configuration. Unset values defer to the ambient AWS config."""

    model_config = {"env_prefix": "S3EDIT_S3_"}

    region: str | None = None
    endpoint_url: str | None = None  # LocalStack / MinIO override
    profile: str | None = None


class AppSettings(BaseSettings):
    """Root application settings."""

    model_config = {"env_prefix": "S3EDIT_"}

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"

    s3: S3Config = Field(default_factory=S3Config)

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
