"""
Order aggregate root.

CRITICAL: This file must contain ZERO imports from:
- sqlalchemy
- pydantic
- fastapi
"""
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from ..enums import OrderStatus, PaymentStatus
from ..exceptions import ForbiddenError, InvalidStateError, ValidationError
from ..value_objects import Identity, OrderPatch


@dataclass
class OrderItem:
    """Line item with the price captured at purchase time."""
    product_id: int
    quantity: int
    price_at_purchase: Decimal

    # Catalog details, filled in on reads only
    product_name: Optional[str] = None
    image_url: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.price_at_purchase, Decimal):
            self.price_at_purchase = Decimal(str(self.price_at_purchase))
        if self.quantity <= 0:
            raise ValidationError(
                f"Quantity for product ID {self.product_id} must be positive.",
                details={"product_id": self.product_id, "quantity": self.quantity},
            )

    @property
    def line_total(self) -> Decimal:
        """Price snapshot times quantity."""
        return self.price_at_purchase * self.quantity


@dataclass
class Order:
    """
    Order aggregate root.

    ``total_amount`` and every ``price_at_purchase`` are snapshots taken
    when the order is placed. They are never recomputed afterwards, so
    later catalog price changes do not touch existing orders.
    """
    user_id: int
    shipping_address: str
    total_amount: Decimal
    items: List[OrderItem] = field(default_factory=list)

    status: OrderStatus = OrderStatus.PENDING
    payment_status: PaymentStatus = PaymentStatus.PENDING
    payment_intent_id: Optional[str] = None

    # Assigned by persistence
    id: Optional[int] = None
    order_date: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    def place(cls, user_id: int, shipping_address: str, items: List[OrderItem]) -> "Order":
        """
        Build a new pending order from priced line items.

        Args:
            user_id: Owner of the order
            shipping_address: Delivery address
            items: Line items carrying their price snapshots

        Returns:
            New Order with the total fixed from the items

        Raises:
            ValidationError: If the address or items are missing
        """
        address = (shipping_address or "").strip()
        if not address:
            raise ValidationError("Shipping address is required.")
        if not items:
            raise ValidationError("At least one item is required.")

        total = sum((item.line_total for item in items), Decimal("0"))

        return cls(
            user_id=user_id,
            shipping_address=address,
            total_amount=total,
            items=list(items),
        )

    # ------------------------------------------------------------------
    # Access rules
    # ------------------------------------------------------------------

    def ensure_visible_to(self, identity: Identity) -> None:
        """Owners and admins may read an order."""
        if not identity.can_access(self.user_id):
            raise ForbiddenError("Access denied. You can only view your own orders.")

    def ensure_deletable_by(self, identity: Identity) -> None:
        """
        Admins delete anything; owners only their cancelled orders.

        Raises:
            ForbiddenError: If the caller does not own the order
            InvalidStateError: If the owner's order is not cancelled
        """
        if identity.is_admin:
            return
        if self.user_id != identity.user_id:
            raise ForbiddenError("Access denied. You can only delete your own orders.")
        if self.status != OrderStatus.CANCELLED:
            raise InvalidStateError(
                'Order can only be deleted if its status is "cancelled".',
                details={"status": self.status.value},
            )

    def attach_payment_intent(self, identity: Identity, payment_intent_id: str) -> Optional[OrderPatch]:
        """
        Record the provider's payment intent for this order.

        Returns:
            Patch to apply, or None if the same intent is already attached
        """
        if not identity.can_access(self.user_id):
            raise ForbiddenError("Access denied. You can only pay for your own orders.")
        intent = (payment_intent_id or "").strip()
        if not intent:
            raise ValidationError("Payment intent ID is required.")
        if self.payment_intent_id == intent:
            return None
        if self.payment_status != PaymentStatus.PENDING:
            raise InvalidStateError(
                "Payment intent can only be attached while payment is pending.",
                details={"payment_status": self.payment_status.value},
            )
        return OrderPatch(payment_intent_id=intent)

    # ------------------------------------------------------------------
    # State machine
    # ------------------------------------------------------------------
    # Any state may move to any other; only set membership is enforced.

    @staticmethod
    def status_change(new_status) -> OrderPatch:
        """Patch setting ``status``, validated against OrderStatus."""
        try:
            return OrderPatch(status=OrderStatus(new_status))
        except ValueError:
            raise ValidationError(
                "Invalid status provided.",
                details={"allowed": [s.value for s in OrderStatus]},
            )

    @staticmethod
    def payment_status_change(new_status) -> OrderPatch:
        """Patch setting ``payment_status``, validated against PaymentStatus."""
        try:
            return OrderPatch(payment_status=PaymentStatus(new_status))
        except ValueError:
            raise ValidationError(
                "Invalid payment status provided.",
                details={"allowed": [s.value for s in PaymentStatus]},
            )
