"""
Domain Exceptions.

Every failure the ordering core reports carries a stable ``kind`` that
clients can branch on, a human-readable message and optional details.
The HTTP mapping of each kind lives in the API layer.
"""
from typing import Any, Dict, Optional


class OrderingError(Exception):
    """Base class for all ordering errors."""

    kind: str = "ordering_error"

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Serialize error for API responses."""
        body: Dict[str, Any] = {"error": self.kind, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(OrderingError):
    """Malformed or missing input."""

    kind = "validation_error"


class AuthError(OrderingError):
    """Missing or invalid caller identity."""

    kind = "auth_error"


class ForbiddenError(OrderingError):
    """Caller is authenticated but not permitted."""

    kind = "forbidden"


class NotFoundError(OrderingError):
    """Referenced record does not exist."""

    kind = "not_found"


class ProductNotFoundError(NotFoundError):
    """Product referenced by an order line does not exist."""

    kind = "product_not_found"

    def __init__(self, product_id: int):
        super().__init__(
            f"Product with ID {product_id} not found.",
            details={"product_id": product_id},
        )
        self.product_id = product_id


class OrderNotFoundError(NotFoundError):
    """Order does not exist."""

    kind = "order_not_found"

    def __init__(self, order_id: int):
        super().__init__(
            f"Order {order_id} not found.",
            details={"order_id": order_id},
        )
        self.order_id = order_id


class ConflictError(OrderingError):
    """Uniqueness violation."""

    kind = "conflict"


class InsufficientStockError(OrderingError):
    """Requested quantity exceeds the product's available stock."""

    kind = "insufficient_stock"

    def __init__(self, product_id: int, available: int, requested: int):
        super().__init__(
            f"Not enough stock for product ID {product_id}. "
            f"Available: {available}, Requested: {requested}.",
            details={
                "product_id": product_id,
                "available": available,
                "requested": requested,
            },
        )
        self.product_id = product_id
        self.available = available
        self.requested = requested


class InvalidStateError(OrderingError):
    """Operation not allowed in the order's current state."""

    kind = "invalid_state"


class WebhookAuthError(OrderingError):
    """Payment webhook failed signature verification."""

    kind = "webhook_auth_error"


class PersistenceError(OrderingError):
    """Unexpected failure of the backing store."""

    kind = "persistence_error"
