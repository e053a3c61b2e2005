"""
Webhook signature verification.

Deliveries are checked with ``stripe.Webhook.construct_event``, which
verifies the ``Stripe-Signature`` header against the raw body before
decoding it. The body must be passed exactly as received.
"""
import logging
from typing import Any, Dict, Optional

import stripe

from core.application.interfaces import IWebhookVerifier
from core.domain.exceptions import ValidationError, WebhookAuthError


logger = logging.getLogger(__name__)


class StripeWebhookVerifier(IWebhookVerifier):
    """Verifies provider signatures with the pre-shared webhook secret."""

    def __init__(self, secret: Optional[str], tolerance_seconds: int = 300) -> None:
        """
        Initialize verifier.

        Args:
            secret: Shared webhook secret (None rejects every delivery)
            tolerance_seconds: Maximum accepted age of a signature
        """
        self._secret = secret
        self._tolerance = tolerance_seconds

    def construct_event(self, payload: bytes, header: Optional[str]) -> Dict[str, Any]:
        """
        Verify ``payload`` and decode it.

        Args:
            payload: Raw, unparsed request body
            header: Signature header value

        Returns:
            Decoded event envelope

        Raises:
            WebhookAuthError: On missing secret or header, mismatch, or a
                timestamp outside the tolerance window
            ValidationError: If a correctly signed body is not JSON
        """
        if not self._secret:
            logger.error("Payment webhook secret is not configured")
            raise WebhookAuthError("Webhook secret is not configured.")
        if not header:
            raise WebhookAuthError("Missing webhook signature header.")

        try:
            return stripe.Webhook.construct_event(
                payload, header, self._secret, tolerance=self._tolerance
            )
        except stripe.SignatureVerificationError as e:
            raise WebhookAuthError(e.user_message or "Invalid webhook signature.") from e
        except ValueError as e:
            raise ValidationError("Webhook payload is not valid JSON.") from e
