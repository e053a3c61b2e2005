from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, ConfigDict

from core.settings.modules.api_settings import ApiSettings
from core.settings.modules.auth_settings import AuthSettings
from core.settings.modules.database_settings import DatabaseSettings
from core.settings.modules.payment_settings import PaymentSettings


class AppSettings(BaseModel):
    """Application settings aggregator."""

    model_config = ConfigDict(arbitrary_types_allowed=True, extra="ignore")

    api: ApiSettings
    auth: AuthSettings
    database: DatabaseSettings
    payments: PaymentSettings


@lru_cache()
def get_app_settings() -> AppSettings:
    return AppSettings(
        api=ApiSettings(),
        auth=AuthSettings(),
        database=DatabaseSettings(),
        payments=PaymentSettings(),
    )
