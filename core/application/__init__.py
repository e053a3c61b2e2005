"""Application layer - services, interfaces, and DTOs."""

from .dtos import CreateOrderRequest, OrderCreatedDTO, OrderDTO, OrderItemDTO, OrderListDTO
from .interfaces import ITokenVerifier, IWebhookVerifier
from .services import OrderApplicationService, PaymentEventReconciler

__all__ = [
    # DTOs
    "CreateOrderRequest",
    "OrderCreatedDTO",
    "OrderDTO",
    "OrderItemDTO",
    "OrderListDTO",
    # Services
    "OrderApplicationService",
    "PaymentEventReconciler",
    # Interfaces
    "ITokenVerifier",
    "IWebhookVerifier",
]
