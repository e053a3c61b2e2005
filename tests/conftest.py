"""Shared pytest fixtures: in-memory database, seeded products, identities."""

import hashlib
import hmac
import json
import time
from decimal import Decimal
from typing import Any, Dict, Optional

import pytest
import pytest_asyncio
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from core.application.services import OrderApplicationService, PaymentEventReconciler
from core.data.models import OrderModel, ProductModel
from core.data.repositories.product_repository_impl import SqlAlchemyProductRepository
from core.domain.value_objects import Identity
from core.infrastructure.database.config import (
    create_engine,
    create_session_factory,
    init_database,
)
from core.infrastructure.payments import StripeWebhookVerifier
from core.settings import DatabaseSettings


WEBHOOK_SECRET = "whsec_test_secret"


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine."""
    engine = create_engine(DatabaseSettings(database_url="sqlite+aiosqlite://"))
    await init_database(engine)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    """Create test session factory."""
    return create_session_factory(test_engine)


@pytest.fixture
def add_product(session_factory):
    """Insert a catalog product and return its id."""

    async def _add(
        price: str = "10.00",
        stock: int = 10,
        name: str = "Widget",
        image_url: Optional[str] = None,
    ) -> int:
        async with session_factory() as session:
            model = ProductModel(
                name=name,
                price=Decimal(price),
                stock_quantity=stock,
                image_url=image_url,
            )
            session.add(model)
            await session.commit()
            return model.id

    return _add


@pytest.fixture
def stock_of(session_factory):
    """Read a product's current stock."""

    async def _stock(product_id: int) -> int:
        async with session_factory() as session:
            result = await session.execute(
                select(ProductModel.stock_quantity).where(ProductModel.id == product_id)
            )
            return result.scalar_one()

    return _stock


@pytest.fixture
def set_product_price(session_factory):
    """Change a catalog price after the fact."""

    async def _set(product_id: int, price: str) -> None:
        async with session_factory() as session:
            model = await session.get(ProductModel, product_id)
            model.price = Decimal(price)
            await session.commit()

    return _set


@pytest.fixture
def order_row(session_factory):
    """Load the raw order row (None if deleted)."""

    async def _row(order_id: int) -> Optional[OrderModel]:
        async with session_factory() as session:
            return await session.get(OrderModel, order_id)

    return _row


@pytest.fixture
def customer() -> Identity:
    return Identity(user_id=1)


@pytest.fixture
def other_customer() -> Identity:
    return Identity(user_id=2)


@pytest.fixture
def admin() -> Identity:
    return Identity(user_id=99, role="admin")


@pytest.fixture
def order_service(session_factory) -> OrderApplicationService:
    return OrderApplicationService(session_factory)


@pytest.fixture
def webhook_verifier() -> StripeWebhookVerifier:
    return StripeWebhookVerifier(WEBHOOK_SECRET, tolerance_seconds=300)


@pytest.fixture
def reconciler(session_factory, webhook_verifier) -> PaymentEventReconciler:
    return PaymentEventReconciler(session_factory, webhook_verifier)


def _build_payment_event(
    event_type: str,
    payment_intent_id: Optional[str],
    order_id: Optional[Any],
    event_id: str = "evt_1",
) -> bytes:
    """Serialize a provider event the way the provider sends it."""
    intent: Dict[str, Any] = {"object": "payment_intent", "metadata": {}}
    if payment_intent_id is not None:
        intent["id"] = payment_intent_id
    if order_id is not None:
        intent["metadata"]["orderId"] = str(order_id)
    return json.dumps(
        {"id": event_id, "type": event_type, "data": {"object": intent}}
    ).encode("utf-8")


@pytest.fixture
def payment_event():
    """Builder for raw provider event bodies."""
    return _build_payment_event


def _sign_payload(secret: str, payload: bytes, timestamp: Optional[int] = None) -> str:
    """Build a `Stripe-Signature` header value for a raw body."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode("utf-8") + payload
    digest = hmac.new(secret.encode("utf-8"), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest.fixture
def sign_webhook():
    """Signature header for a raw body, signed with the test secret."""

    def _sign(payload: bytes, timestamp: Optional[int] = None, secret: str = WEBHOOK_SECRET) -> str:
        return _sign_payload(secret, payload, timestamp)

    return _sign


@pytest.fixture
def failing_stock_write(monkeypatch):
    """Make the second stock write of a transaction fail in the store."""
    original = SqlAlchemyProductRepository.save_stock
    calls = {"count": 0}

    async def _save_stock(self, product):
        calls["count"] += 1
        if calls["count"] == 2:
            raise SQLAlchemyError("disk I/O error")
        await original(self, product)

    monkeypatch.setattr(SqlAlchemyProductRepository, "save_stock", _save_stock)
    return calls
