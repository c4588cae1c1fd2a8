"""Application settings and configuration management."""
from __future__ import annotations

from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or defaults."""

    STORE_BACKEND: Literal["rest", "sqlite"] = "sqlite"
    DB_PATH: str = Field(default="data/readysethire.db")

    STORE_BASE_URL: str = "http://localhost:3000/api"
    STORE_TOKEN: str = ""
    STORE_USERNAME: str = ""
    STORE_TIMEOUT_S: float = Field(default=15.0, ge=1.0, le=60.0)

    PROXY_BASE_URL: str = "http://localhost:3001"
    PROXY_TIMEOUT_S: float = Field(default=30.0, ge=1.0, le=120.0)
    SUGGESTION_WORKERS: int = Field(default=4, ge=1)

    LLM_CONFIG_PATH: str = "app_config.json"
    PROXY_ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])
    API_ALLOWED_ORIGINS: List[str] = Field(default_factory=lambda: ["*"])

    SPEECH_LANGUAGE: str = "en-US"

    model_config = SettingsConfigDict(env_file=".env", validate_assignment=True, extra="ignore")


settings = Settings()
