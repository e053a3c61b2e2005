"""Application service for Order operations."""

import logging
from decimal import Decimal
from typing import List

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.order_dto import (
    CreateOrderRequest,
    OrderCreatedDTO,
    OrderDTO,
    OrderItemDTO,
    OrderListDTO,
)
from core.data.uow import create_uow
from core.domain.entities.order import Order, OrderItem
from core.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    OrderNotFoundError,
    ProductNotFoundError,
)
from core.domain.value_objects import Identity, OrderPatch


logger = logging.getLogger(__name__)


class OrderApplicationService:
    """
    Application service for orchestrating order operations.

    Responsibilities:
    - Run order creation as one all-or-nothing transaction
    - Enforce owner/admin access rules
    - Apply status changes through typed patches
    - Transform between DTOs and domain entities
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize order application service.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory

    async def create_order(self, identity: Identity, request: CreateOrderRequest) -> OrderCreatedDTO:
        """Create a new order, reserving stock for every line.

        Products are locked in ascending id order so two orders touching
        the same products always queue in the same sequence. Stock is
        checked and decremented while the lock is held, and the price read
        under the lock becomes the line's ``price_at_purchase``.

        Args:
            identity: Authenticated caller (becomes the owner)
            request: CreateOrderRequest DTO

        Returns:
            OrderCreatedDTO with the new id and total

        Raises:
            ProductNotFoundError: If a product does not exist
            InsufficientStockError: If a product lacks stock
            PersistenceError: If the store fails
        """
        async with create_uow(self._session_factory) as uow:
            execution_id = uow.execution_id
            logger.info(
                f"[{execution_id}] Creating order for user {identity.user_id} "
                f"with {len(request.items)} line(s)"
            )

            lines = sorted(request.items, key=lambda line: line.product_id)
            items: List[OrderItem] = []

            for line in lines:
                # 1. Exclusive lock on the product row
                product = await uow.products.lock_for_update(line.product_id)
                if product is None:
                    raise ProductNotFoundError(line.product_id)

                # 2-3. Check stock, snapshot price
                price = product.reserve(line.quantity)
                items.append(
                    OrderItem(
                        product_id=product.id,
                        quantity=line.quantity,
                        price_at_purchase=price,
                    )
                )

                # 4. Decrement inside the same transaction
                await uow.products.save_stock(product)

            # 5. Order row, then its items
            order = Order.place(
                user_id=identity.user_id,
                shipping_address=request.shipping_address,
                items=items,
            )
            await uow.orders.add(order)

            # 6. Atomic commit
            await uow.commit()

            logger.info(f"[{execution_id}] Order {order.id} created, total {order.total_amount}")
            return OrderCreatedDTO(order_id=order.id, total_amount=order.total_amount)

    async def list_orders(self, identity: Identity, limit: int = 100, offset: int = 0) -> OrderListDTO:
        """List orders: every order for admins, own orders otherwise.

        Args:
            identity: Authenticated caller
            limit: Maximum number of orders to return
            offset: Number of orders to skip

        Returns:
            OrderListDTO (orders without items)
        """
        async with create_uow(self._session_factory) as uow:
            owner = None if identity.is_admin else identity.user_id
            orders = await uow.orders.find_all(user_id=owner, limit=limit, offset=offset)
            return OrderListDTO(
                orders=[self._order_to_dto(order) for order in orders],
                limit=limit,
                offset=offset,
                count=len(orders),
            )

    async def get_order(self, identity: Identity, order_id: int) -> OrderDTO:
        """Get order with items.

        Raises:
            OrderNotFoundError: If the order does not exist
            ForbiddenError: If a non-admin asks for someone else's order
        """
        async with create_uow(self._session_factory) as uow:
            order = await uow.orders.find_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)

            order.ensure_visible_to(identity)
            return self._order_to_dto(order)

    async def set_status(self, identity: Identity, order_id: int, new_status) -> OrderDTO:
        """Admin: set fulfilment status (any value of OrderStatus)."""
        self._require_admin(identity)
        return await self._apply_patch(order_id, Order.status_change(new_status))

    async def set_payment_status(self, identity: Identity, order_id: int, new_status) -> OrderDTO:
        """Admin: set payment status (any value of PaymentStatus)."""
        self._require_admin(identity)
        return await self._apply_patch(order_id, Order.payment_status_change(new_status))

    async def attach_payment_intent(
        self, identity: Identity, order_id: int, payment_intent_id: str
    ) -> OrderDTO:
        """Record the provider's payment intent on an order.

        Raises:
            OrderNotFoundError: If the order does not exist
            ForbiddenError: If the caller is neither owner nor admin
            InvalidStateError: If payment is no longer pending
            ConflictError: If the intent belongs to another order
        """
        async with create_uow(self._session_factory) as uow:
            order = await uow.orders.find_by_id(order_id, lock=True)
            if order is None:
                raise OrderNotFoundError(order_id)

            patch = order.attach_payment_intent(identity, payment_intent_id)
            if patch is not None:
                holder = await uow.orders.find_by_payment_intent(patch.payment_intent_id)
                if holder is not None and holder.id != order_id:
                    raise ConflictError(
                        "Payment intent is already attached to another order.",
                        details={"payment_intent_id": patch.payment_intent_id},
                    )
                await uow.orders.apply_patch(order_id, patch)
                await uow.commit()
                logger.info(f"[{uow.execution_id}] Payment intent attached to order {order_id}")

        return await self.get_order(identity, order_id)

    async def delete_order(self, identity: Identity, order_id: int) -> None:
        """Delete an order and its items.

        Admins delete any order. Owners delete only cancelled orders.

        Raises:
            OrderNotFoundError: If the order does not exist
            ForbiddenError: If a non-admin does not own the order
            InvalidStateError: If the owner's order is not cancelled
        """
        async with create_uow(self._session_factory) as uow:
            order = await uow.orders.find_by_id(order_id, lock=True)
            if order is None:
                raise OrderNotFoundError(order_id)

            order.ensure_deletable_by(identity)
            if identity.is_admin:
                logger.info(f"[{uow.execution_id}] Admin (User ID: {identity.user_id}) deleting Order ID: {order_id}")
            else:
                logger.info(f"[{uow.execution_id}] User (ID: {identity.user_id}) deleting their cancelled Order ID: {order_id}")

            if not await uow.orders.delete(order_id):
                raise OrderNotFoundError(order_id)

            await uow.commit()

    async def _apply_patch(self, order_id: int, patch: OrderPatch) -> OrderDTO:
        async with create_uow(self._session_factory) as uow:
            if not await uow.orders.apply_patch(order_id, patch):
                raise OrderNotFoundError(order_id)
            await uow.commit()

            order = await uow.orders.find_by_id(order_id)
            if order is None:
                raise OrderNotFoundError(order_id)
            return self._order_to_dto(order)

    @staticmethod
    def _require_admin(identity: Identity) -> None:
        if not identity.is_admin:
            raise ForbiddenError("Access denied. Administrator privileges required.")

    def _order_to_dto(self, order: Order) -> OrderDTO:
        """Transform Order domain entity to OrderDTO.

        Args:
            order: Order domain entity

        Returns:
            OrderDTO instance
        """
        items = [
            OrderItemDTO(
                product_id=item.product_id,
                quantity=item.quantity,
                price_at_purchase=item.price_at_purchase,
                name=item.product_name,
                image_url=item.image_url,
            )
            for item in order.items
        ]

        return OrderDTO(
            id=order.id,
            user_id=order.user_id,
            total_amount=order.total_amount if order.total_amount is not None else Decimal("0"),
            status=order.status,
            payment_status=order.payment_status,
            shipping_address=order.shipping_address,
            order_date=order.order_date,
            payment_intent_id=order.payment_intent_id,
            items=items,
        )
