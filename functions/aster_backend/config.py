"""
Configuration and settings for the content service.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from aster_shared.constants import MAX_INLINE_IMAGE_BYTES


class Settings(BaseSettings):
    """Environment-backed settings (prefix ASTER_, e.g. ASTER_STORE_BACKEND)."""

    model_config = SettingsConfigDict(
        env_prefix="ASTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    api_prefix: str = Field(default="/api")
    log_level: str = Field(default="INFO")

    # Document store: "memory" for local runs, "firestore" or "sql" otherwise.
    store_backend: Literal["memory", "firestore", "sql"] = Field(default="memory")
    store_timeout_seconds: float = Field(default=5.0, gt=0)

    # SQL store (Postgres expected, any SQLAlchemy URL works)
    database_url: Optional[str] = Field(default=None)

    # Firestore
    firestore_project_id: Optional[str] = Field(default=None)

    # Operator access to the back-office endpoints
    use_firebase_auth: bool = Field(default=False)
    operator_token: Optional[str] = Field(default=None)

    max_inline_image_bytes: int = Field(default=MAX_INLINE_IMAGE_BYTES, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return cached settings instance."""
    return Settings()
