"""Domain layer - pure domain models and interfaces."""

from .entities import Order, OrderItem, Product
from .enums import OrderStatus, PaymentStatus
from .repositories import OrderRepository, ProductRepository
from .value_objects import ExecutionID, Identity, OrderPatch

__all__ = [
    "ExecutionID",
    "Identity",
    "Order",
    "OrderItem",
    "OrderPatch",
    "OrderRepository",
    "OrderStatus",
    "PaymentStatus",
    "Product",
    "ProductRepository",
]
