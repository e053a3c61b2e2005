# Settings modules
from .api_settings import ApiSettings
from .app_settings import AppSettings, get_app_settings
from .auth_settings import AuthSettings
from .database_settings import DatabaseSettings
from .payment_settings import PaymentSettings

__all__ = [
    "AppSettings",
    "get_app_settings",
    "ApiSettings",
    "AuthSettings",
    "DatabaseSettings",
    "PaymentSettings",
]
