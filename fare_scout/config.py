from __future__ import annotations

import logging
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    gemini_api_key: str = Field("", alias="GEMINI_API_KEY")
    gemini_model: str = Field("gemini-2.5-flash", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        "https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )
    request_timeout_s: float = Field(60.0, alias="REQUEST_TIMEOUT_S")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    @field_validator("gemini_model")
    @classmethod
    def _model_non_empty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("GEMINI_MODEL must be a non-empty string")
        return v.strip()

    @field_validator("request_timeout_s")
    @classmethod
    def _timeout_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("REQUEST_TIMEOUT_S must be greater than 0")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, v):
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("log_level")
    @classmethod
    def _level_known(cls, v: str) -> str:
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError("LOG_LEVEL must be a valid logging level")
        return v


@lru_cache()
def get_settings() -> Settings:
    """Return application settings loaded from the environment."""
    return Settings()  # type: ignore[call-arg]


__all__ = ["Settings", "get_settings"]
