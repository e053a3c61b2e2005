"""Static mappers for domain entities ↔ database models."""

from decimal import Decimal

from core.domain.entities.order import Order, OrderItem
from core.domain.entities.product import Product
from core.domain.enums import OrderStatus, PaymentStatus

from .models.order_model import OrderItemModel, OrderModel
from .models.product_model import ProductModel


def _to_decimal(value) -> Decimal:
    return value if isinstance(value, Decimal) else Decimal(str(value))


class ProductMapper:
    """Static mapper for ProductModel → Product snapshot."""

    @staticmethod
    def to_domain(model: ProductModel) -> Product:
        return Product(
            id=model.id,
            price=_to_decimal(model.price),
            stock_quantity=int(model.stock_quantity),
            name=model.name,
        )


class OrderItemMapper:
    """Static mapper for OrderItem ↔ OrderItemModel transformation."""

    @staticmethod
    def to_domain(model: OrderItemModel, with_product: bool = False) -> OrderItem:
        """Convert ORM model to domain entity.

        Args:
            model: OrderItemModel instance
            with_product: Copy catalog name and image from the loaded product

        Returns:
            OrderItem domain entity
        """
        product = model.product if with_product else None
        return OrderItem(
            product_id=model.product_id,
            quantity=model.quantity,
            price_at_purchase=_to_decimal(model.price_at_purchase),
            product_name=product.name if product is not None else None,
            image_url=product.image_url if product is not None else None,
        )

    @staticmethod
    def to_persistence(entity: OrderItem) -> OrderItemModel:
        """Convert domain entity to ORM model.

        Args:
            entity: OrderItem domain entity

        Returns:
            OrderItemModel instance (order_id set through the relationship)
        """
        return OrderItemModel(
            product_id=entity.product_id,
            quantity=entity.quantity,
            price_at_purchase=entity.price_at_purchase,
        )


class OrderMapper:
    """Static mapper for Order ↔ OrderModel transformation with nested items."""

    @staticmethod
    def to_domain(model: OrderModel, with_items: bool = True) -> Order:
        """Convert ORM model to domain aggregate.

        Args:
            model: OrderModel instance
            with_items: Map the (eagerly loaded) items as well

        Returns:
            Order domain aggregate
        """
        items = (
            [OrderItemMapper.to_domain(item, with_product=True) for item in model.items]
            if with_items
            else []
        )

        return Order(
            id=model.id,
            user_id=model.user_id,
            shipping_address=model.shipping_address,
            total_amount=_to_decimal(model.total_amount),
            items=items,
            status=OrderStatus(model.status),
            payment_status=PaymentStatus(model.payment_status),
            payment_intent_id=model.payment_intent_id,
            order_date=model.order_date,
            updated_at=model.updated_at,
        )

    @staticmethod
    def to_persistence(entity: Order) -> OrderModel:
        """Convert a new domain aggregate to ORM model (with nested items).

        Args:
            entity: Order domain aggregate

        Returns:
            OrderModel instance
        """
        return OrderModel(
            user_id=entity.user_id,
            total_amount=entity.total_amount,
            status=entity.status.value,
            payment_status=entity.payment_status.value,
            shipping_address=entity.shipping_address,
            payment_intent_id=entity.payment_intent_id,
            items=[OrderItemMapper.to_persistence(item) for item in entity.items],
        )
