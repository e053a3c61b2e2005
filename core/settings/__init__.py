# Settings package
from core.settings.modules import (
    ApiSettings,
    AppSettings,
    AuthSettings,
    DatabaseSettings,
    PaymentSettings,
    get_app_settings,
)

__all__ = [
    "get_app_settings",
    "AppSettings",
    "ApiSettings",
    "AuthSettings",
    "DatabaseSettings",
    "PaymentSettings",
]
