"""Application services."""
from .order_service import OrderApplicationService
from .payment_reconciler import PaymentEventReconciler

__all__ = ["OrderApplicationService", "PaymentEventReconciler"]
