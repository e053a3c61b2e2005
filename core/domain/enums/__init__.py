"""Domain enums."""

from .order_status import OrderStatus, PaymentStatus

__all__ = ["OrderStatus", "PaymentStatus"]
