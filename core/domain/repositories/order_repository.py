"""Repository interfaces for Order aggregate."""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..entities.order import Order
from ..enums import PaymentStatus
from ..value_objects import OrderPatch


class OrderRepository(ABC):
    """Abstract repository for Order aggregate persistence."""

    @abstractmethod
    async def add(self, order: Order) -> Order:
        """Insert a new order and its items.

        Args:
            order: Order aggregate without an id

        Returns:
            The same order with id and timestamps assigned
        """
        pass

    @abstractmethod
    async def find_by_id(self, order_id: int, lock: bool = False) -> Optional[Order]:
        """Retrieve order with its items.

        Args:
            order_id: Order identifier
            lock: Take an exclusive row lock on the order

        Returns:
            Order if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self, user_id: Optional[int] = None, limit: int = 100, offset: int = 0
    ) -> List[Order]:
        """List orders newest first, optionally for one owner only."""
        pass

    @abstractmethod
    async def find_by_payment_intent(self, payment_intent_id: str) -> Optional[Order]:
        """Retrieve the order a payment intent is attached to."""
        pass

    @abstractmethod
    async def apply_patch(self, order_id: int, patch: OrderPatch) -> bool:
        """Apply a typed partial update.

        Returns:
            True if a row was updated
        """
        pass

    @abstractmethod
    async def set_payment_status_if_matches(
        self, order_id: int, payment_intent_id: str, payment_status: PaymentStatus
    ) -> int:
        """Update payment status only where both id and intent match.

        Returns:
            Number of rows updated
        """
        pass

    @abstractmethod
    async def delete(self, order_id: int) -> bool:
        """Delete order items, then the order.

        Returns:
            True if the order row was removed
        """
        pass
