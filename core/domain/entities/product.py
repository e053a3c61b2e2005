"""
Product as seen by the inventory ledger.

Catalog management owns the full product record; ordering only needs
the price and the stock count.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ..exceptions import InsufficientStockError, ValidationError


@dataclass
class Product:
    """Stock-bearing product snapshot taken under a row lock."""
    id: int
    price: Decimal
    stock_quantity: int
    name: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.price, Decimal):
            self.price = Decimal(str(self.price))

    def reserve(self, quantity: int) -> Decimal:
        """
        Take ``quantity`` units out of stock.
        
        Args:
            quantity: Units requested by one order line
        
        Returns:
            Unit price at the moment of reservation
        
        Raises:
            InsufficientStockError: If stock would go negative
        """
        if quantity <= 0:
            raise ValidationError(
                f"Quantity for product ID {self.id} must be positive.",
                details={"product_id": self.id, "quantity": quantity},
            )
        if self.stock_quantity < quantity:
            raise InsufficientStockError(
                product_id=self.id,
                available=self.stock_quantity,
                requested=quantity,
            )
        self.stock_quantity -= quantity
        return self.price
