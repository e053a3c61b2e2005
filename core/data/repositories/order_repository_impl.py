"""SQLAlchemy implementation of OrderRepository."""

import logging
from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.entities.order import Order
from core.domain.enums import PaymentStatus
from core.domain.exceptions import ValidationError
from core.domain.repositories.order_repository import OrderRepository
from core.domain.value_objects import OrderPatch, is_row_id

from ..locking import lock_row_for_update
from ..mappers import OrderMapper
from ..models.base import utcnow
from ..models.order_model import OrderItemModel, OrderModel


logger = logging.getLogger(__name__)


class SqlAlchemyOrderRepository(OrderRepository):
    """Concrete implementation of OrderRepository using SQLAlchemy."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with SQLAlchemy session.

        Args:
            session: SQLAlchemy async session
        """
        self._session = session

    async def add(self, order: Order) -> Order:
        """Insert order and items without committing.

        Args:
            order: New Order aggregate

        Returns:
            Order with id and order_date assigned
        """
        model = OrderMapper.to_persistence(order)
        self._session.add(model)
        await self._session.flush()  # Propagate to DB without committing

        order.id = model.id
        order.order_date = model.order_date
        order.updated_at = model.updated_at
        return order

    async def find_by_id(self, order_id: int, lock: bool = False) -> Optional[Order]:
        """Retrieve order by id.

        A locked read returns the order row only; an unlocked read eagerly
        loads items together with their catalog product.

        Args:
            order_id: Order identifier
            lock: Take an exclusive row lock

        Returns:
            Order if found, None otherwise
        """
        if not is_row_id(order_id):
            return None

        if lock:
            model = await lock_row_for_update(self._session, OrderModel, order_id)
            return OrderMapper.to_domain(model, with_items=False) if model else None

        result = await self._session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.items).selectinload(OrderItemModel.product))
            .where(OrderModel.id == order_id)
            .execution_options(populate_existing=True)
        )
        model = result.scalar_one_or_none()

        if not model:
            return None

        return OrderMapper.to_domain(model)

    async def find_all(
        self, user_id: Optional[int] = None, limit: int = 100, offset: int = 0
    ) -> List[Order]:
        """List orders newest first.

        Args:
            user_id: Restrict to one owner (None lists every order)
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            List of Order aggregates without items
        """
        stmt = select(OrderModel)
        if user_id is not None:
            stmt = stmt.where(OrderModel.user_id == user_id)
        stmt = (
            stmt.order_by(OrderModel.order_date.desc(), OrderModel.id.desc())
            .limit(limit)
            .offset(offset)
        )

        result = await self._session.execute(stmt)
        return [OrderMapper.to_domain(model, with_items=False) for model in result.scalars().all()]

    async def find_by_payment_intent(self, payment_intent_id: str) -> Optional[Order]:
        result = await self._session.execute(
            select(OrderModel).where(OrderModel.payment_intent_id == payment_intent_id)
        )
        model = result.scalar_one_or_none()
        return OrderMapper.to_domain(model, with_items=False) if model else None

    async def apply_patch(self, order_id: int, patch: OrderPatch) -> bool:
        """Apply a typed partial update through a parameterized UPDATE.

        Args:
            order_id: Order identifier
            patch: Fields to change

        Returns:
            True if the order row was updated
        """
        if patch.is_empty():
            raise ValidationError("No order fields to update.")
        if not is_row_id(order_id):
            return False

        values = patch.changes()

        values["updated_at"] = utcnow()
        result = await self._session.execute(
            update(OrderModel)
            .where(OrderModel.id == order_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        logger.info(f"Patched order {order_id}: {sorted(values)}")
        return result.rowcount > 0

    async def set_payment_status_if_matches(
        self, order_id: int, payment_intent_id: str, payment_status: PaymentStatus
    ) -> int:
        """Conditional payment status update.

        Both the internal order id and the provider's payment intent must
        match, so one order's notification can never move another order.

        Returns:
            Number of rows updated (0 or 1)
        """
        if not is_row_id(order_id):
            return 0

        result = await self._session.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.payment_intent_id == payment_intent_id,
            )
            .values(payment_status=payment_status.value, updated_at=utcnow())
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    async def delete(self, order_id: int) -> bool:
        """Delete order items first, then the order row.

        Returns:
            True if the order row was removed
        """
        if not is_row_id(order_id):
            return False

        await self._session.execute(
            delete(OrderItemModel)
            .where(OrderItemModel.order_id == order_id)
            .execution_options(synchronize_session=False)
        )
        result = await self._session.execute(
            delete(OrderModel)
            .where(OrderModel.id == order_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount > 0
