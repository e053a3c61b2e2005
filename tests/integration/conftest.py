"""Pytest configuration and fixtures for API integration tests."""

import time
from typing import Dict

import jwt
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from api.dependencies import (
    get_session_factory,
    get_token_verifier,
    get_webhook_verifier,
)
from api.main import app
from core.infrastructure.auth import JWTTokenVerifier


JWT_SECRET = "test-jwt-secret-for-storefront-orders"


@pytest.fixture
def make_token():
    """Issue a token the way the identity service does."""

    def _make(user_id: int, role: str = "user", expires_in: int = 3600) -> str:
        claims = {"userId": user_id, "role": role, "exp": int(time.time()) + expires_in}
        return jwt.encode(claims, JWT_SECRET, algorithm="HS256")

    return _make


@pytest.fixture
def auth_headers(make_token):
    """Authorization header for a user id and role."""

    def _headers(user_id: int, role: str = "user") -> Dict[str, str]:
        return {"Authorization": f"Bearer {make_token(user_id, role)}"}

    return _headers


@pytest_asyncio.fixture
async def client(session_factory, webhook_verifier):
    """Create API client bound to the test database."""
    app.dependency_overrides[get_session_factory] = lambda: session_factory
    app.dependency_overrides[get_token_verifier] = lambda: JWTTokenVerifier(JWT_SECRET)
    app.dependency_overrides[get_webhook_verifier] = lambda: webhook_verifier

    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as test_client:
        yield test_client

    # Cleanup
    app.dependency_overrides.clear()
