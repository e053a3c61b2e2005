"""
FastAPI Dependencies.

Provides dependency injection for services, verifiers and the caller's
identity.
"""
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

# Load environment variables ONCE before any settings objects are created
_PROJECT_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(dotenv_path=_PROJECT_ROOT / ".env")

from core.application.interfaces import ITokenVerifier, IWebhookVerifier
from core.application.services import OrderApplicationService, PaymentEventReconciler
from core.domain.exceptions import ForbiddenError
from core.domain.value_objects import Identity
from core.infrastructure.auth import JWTTokenVerifier
from core.infrastructure.database import config as database
from core.infrastructure.payments import StripeWebhookVerifier
from core.settings import get_app_settings


logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


# =============================================================================
# DATABASE
# =============================================================================

def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get SQLAlchemy session factory.

    Returns:
        async_sessionmaker bound to the shared engine
    """
    return database.get_session_factory()


# =============================================================================
# SERVICES
# =============================================================================

def get_order_service(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
) -> OrderApplicationService:
    """Get OrderApplicationService instance.

    Returns:
        OrderApplicationService instance
    """
    return OrderApplicationService(session_factory)


def get_webhook_verifier() -> IWebhookVerifier:
    settings = get_app_settings().payments
    return StripeWebhookVerifier(settings.webhook_secret, settings.tolerance_seconds)


def get_payment_reconciler(
    session_factory: async_sessionmaker[AsyncSession] = Depends(get_session_factory),
    verifier: IWebhookVerifier = Depends(get_webhook_verifier),
) -> PaymentEventReconciler:
    """Get PaymentEventReconciler instance.

    Returns:
        PaymentEventReconciler instance
    """
    return PaymentEventReconciler(session_factory, verifier)


# =============================================================================
# AUTHENTICATION
# =============================================================================

def get_token_verifier() -> ITokenVerifier:
    settings = get_app_settings().auth
    return JWTTokenVerifier(settings.jwt_secret, settings.jwt_algorithm)


def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
    verifier: ITokenVerifier = Depends(get_token_verifier),
) -> Identity:
    """Resolve the caller from the bearer token.

    Raises:
        AuthError: If the token is missing, invalid or expired
    """
    token = credentials.credentials if credentials else None
    return verifier.verify(token)


def require_admin(identity: Identity = Depends(get_current_identity)) -> Identity:
    """Resolve the caller and require the admin role.

    Raises:
        ForbiddenError: If the caller is not an admin
    """
    if not identity.is_admin:
        logger.warning(f"User {identity.user_id} denied admin-only operation")
        raise ForbiddenError("Access denied. Administrator privileges required.")
    return identity
