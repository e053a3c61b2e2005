"""
Order Status Enums.

Fulfilment and payment states of an order.
"""
from enum import Enum


class OrderStatus(str, Enum):
    """Fulfilment status values."""
    
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    """Payment status values."""
    
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
