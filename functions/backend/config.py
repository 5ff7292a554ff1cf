"""
Configuration and settings for the profile API and ad hoc refresh runs.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.constants import CLOSE_POWERLIFTING_USER


class Settings(BaseSettings):
    """Environment-backed settings; field names match the environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    api_prefix: str = Field(default="/api")

    # Firebase Realtime Database
    firebase_database_url: Optional[str] = Field(default=None)
    firebase_project_id: Optional[str] = Field(default=None)

    # Upstream sources
    close_powerlifting_user: str = Field(default=CLOSE_POWERLIFTING_USER)
    closepowerlifting_api_key: Optional[str] = Field(default=None)
    wca_person_id: Optional[str] = Field(default=None)

    # Development toggles
    use_in_memory_backends: bool = Field(default=False)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
