"""Typed partial update for an order row."""
from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from ..enums import OrderStatus, PaymentStatus


@dataclass(frozen=True)
class OrderPatch:
    """
    Explicit set of mutable order fields.
    
    A field left as ``None`` is not touched. ``total_amount``, ``user_id``
    and line items are deliberately absent: they are fixed at creation.
    """
    status: Optional[OrderStatus] = None
    payment_status: Optional[PaymentStatus] = None
    payment_intent_id: Optional[str] = None

    def changes(self) -> Dict[str, Any]:
        """Return only the fields that are set, enum members unwrapped."""
        values: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            values[f.name] = value.value if hasattr(value, "value") else value
        return values

    def is_empty(self) -> bool:
        """Check if the patch changes nothing."""
        return not self.changes()
