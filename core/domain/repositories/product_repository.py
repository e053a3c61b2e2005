"""Repository interface for the inventory ledger."""

from abc import ABC, abstractmethod
from typing import Optional

from ..entities.product import Product


class ProductRepository(ABC):
    """Stock access used by order creation."""

    @abstractmethod
    async def lock_for_update(self, product_id: int) -> Optional[Product]:
        """Take an exclusive row lock and snapshot price and stock.

        Args:
            product_id: Product identifier

        Returns:
            Product snapshot if found, None otherwise
        """
        pass

    @abstractmethod
    async def save_stock(self, product: Product) -> None:
        """Write the product's stock count back inside the current transaction."""
        pass
