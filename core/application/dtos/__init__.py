"""Application DTOs."""

from .order_dto import (
    AttachPaymentIntentRequest,
    CreateOrderRequest,
    MessageDTO,
    OrderCreatedDTO,
    OrderDTO,
    OrderItemDTO,
    OrderLineRequest,
    OrderListDTO,
    UpdatePaymentStatusRequest,
    UpdateStatusRequest,
)
from .payment_dto import WebhookAckDTO

__all__ = [
    "AttachPaymentIntentRequest",
    "CreateOrderRequest",
    "MessageDTO",
    "OrderCreatedDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderLineRequest",
    "OrderListDTO",
    "UpdatePaymentStatusRequest",
    "UpdateStatusRequest",
    "WebhookAckDTO",
]
