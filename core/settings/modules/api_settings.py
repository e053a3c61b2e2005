from __future__ import annotations

from typing import List

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class ApiSettings(StorefrontBaseSettings):
    """HTTP surface settings."""

    prefix: str = Field(default="/api/v1", alias="API_PREFIX")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"], alias="CORS_ORIGINS")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
