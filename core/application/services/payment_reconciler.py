"""
Payment webhook reconciliation.

Turns provider notifications into payment status updates. The update is
conditional on both the order id and the payment intent id, so a
notification can only ever touch the order that registered that intent,
and replaying it leaves the order unchanged.
"""
import logging
from typing import Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.payment_dto import WebhookAckDTO
from core.application.interfaces import IWebhookVerifier
from core.data.uow import create_uow
from core.domain.payment_events import (
    PaymentFailed,
    PaymentSucceeded,
    UnhandledPaymentEvent,
    parse_payment_event,
)


logger = logging.getLogger(__name__)


class PaymentEventReconciler:
    """Applies verified payment events to orders."""

    def __init__(self, session_factory: async_sessionmaker, verifier: IWebhookVerifier) -> None:
        self._session_factory = session_factory
        self._verifier = verifier

    async def handle_payment_event(
        self, raw_payload: bytes, signature_header: Optional[str]
    ) -> WebhookAckDTO:
        """
        Verify, classify and apply one webhook delivery.

        Once the signature checks out the delivery is always acknowledged,
        including unknown event kinds and events that match no order.
        Acknowledging stops the provider from redelivering.

        Args:
            raw_payload: Request body exactly as received
            signature_header: Value of the provider's signature header

        Returns:
            WebhookAckDTO

        Raises:
            WebhookAuthError: If the signature is missing or wrong
            ValidationError: If the body is not a JSON event object
            PersistenceError: If the store fails (provider will retry)
        """
        payload = self._verifier.construct_event(raw_payload, signature_header)
        event = parse_payment_event(payload)

        if isinstance(event, UnhandledPaymentEvent):
            logger.info(f"Unhandled payment event type {event.event_type} ({event.event_id})")
            return WebhookAckDTO()

        if isinstance(event, (PaymentSucceeded, PaymentFailed)):
            await self._reconcile(event)

        return WebhookAckDTO()

    async def _reconcile(self, event) -> None:
        if event.order_id is None or event.payment_intent_id is None:
            logger.warning(
                f"Payment event {event.event_id} has no order reference "
                f"(intent={event.payment_intent_id}, order={event.order_id}); ignoring"
            )
            return

        async with create_uow(self._session_factory) as uow:
            updated = await uow.orders.set_payment_status_if_matches(
                order_id=event.order_id,
                payment_intent_id=event.payment_intent_id,
                payment_status=event.target_status,
            )
            await uow.commit()

            if updated:
                logger.info(
                    f"[{uow.execution_id}] Order {event.order_id} payment_status -> "
                    f"{event.target_status.value} (intent {event.payment_intent_id})"
                )
            else:
                logger.warning(
                    f"[{uow.execution_id}] No order {event.order_id} with payment intent "
                    f"{event.payment_intent_id}; event {event.event_id} ignored"
                )
