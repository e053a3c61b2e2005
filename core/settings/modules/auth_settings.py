from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class AuthSettings(StorefrontBaseSettings):
    """
    Bearer token verification settings.

    Tokens are issued by the external identity service and signed with
    the shared ``JWT_SECRET``.
    """

    jwt_secret: Optional[str] = Field(default=None, alias="JWT_SECRET")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
