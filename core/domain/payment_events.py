"""
Payment provider events.

Webhook notifications are classified into a closed set of variants.
Anything the ordering core does not act on becomes
``UnhandledPaymentEvent`` and is acknowledged without side effects.
"""
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from .enums import PaymentStatus
from .exceptions import ValidationError
from .value_objects import is_row_id


PAYMENT_SUCCEEDED_TYPE = "payment_intent.succeeded"
PAYMENT_FAILED_TYPE = "payment_intent.payment_failed"


@dataclass(frozen=True)
class PaymentSucceeded:
    """Provider confirmed the payment intent."""
    event_id: Optional[str]
    payment_intent_id: Optional[str]
    order_id: Optional[int]

    target_status = PaymentStatus.COMPLETED


@dataclass(frozen=True)
class PaymentFailed:
    """Provider reported the payment intent as failed."""
    event_id: Optional[str]
    payment_intent_id: Optional[str]
    order_id: Optional[int]

    target_status = PaymentStatus.FAILED


@dataclass(frozen=True)
class UnhandledPaymentEvent:
    """Any other event kind."""
    event_id: Optional[str]
    event_type: str


PaymentEvent = Union[PaymentSucceeded, PaymentFailed, UnhandledPaymentEvent]


def _parse_order_reference(raw: Any) -> Optional[int]:
    """Internal order ids travel as strings in provider metadata."""
    if raw is None or isinstance(raw, bool):
        return None
    try:
        order_id = int(str(raw).strip())
    except ValueError:
        return None
    # An id no order row can carry matches nothing
    return order_id if is_row_id(order_id) else None


def parse_payment_event(payload: Dict[str, Any]) -> PaymentEvent:
    """
    Classify a decoded webhook body.

    Args:
        payload: JSON-decoded event envelope

    Returns:
        One of the PaymentEvent variants

    Raises:
        ValidationError: If the envelope is not an event object
    """
    if not isinstance(payload, dict):
        raise ValidationError("Webhook payload must be a JSON object.")

    event_type = payload.get("type")
    if not isinstance(event_type, str) or not event_type:
        raise ValidationError("Webhook payload is missing the event type.")

    event_id = payload.get("id")

    if event_type not in (PAYMENT_SUCCEEDED_TYPE, PAYMENT_FAILED_TYPE):
        return UnhandledPaymentEvent(event_id=event_id, event_type=event_type)

    data = payload.get("data") or {}
    intent = data.get("object") if isinstance(data, dict) else None
    if not isinstance(intent, dict):
        intent = {}
    metadata = intent.get("metadata")
    if not isinstance(metadata, dict):
        metadata = {}

    payment_intent_id = intent.get("id")
    if not isinstance(payment_intent_id, str) or not payment_intent_id:
        payment_intent_id = None

    variant = PaymentSucceeded if event_type == PAYMENT_SUCCEEDED_TYPE else PaymentFailed
    return variant(
        event_id=event_id,
        payment_intent_id=payment_intent_id,
        order_id=_parse_order_reference(metadata.get("orderId")),
    )
