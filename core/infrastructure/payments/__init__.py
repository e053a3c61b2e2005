"""Payment provider webhook verification."""

from .signature import StripeWebhookVerifier

__all__ = ["StripeWebhookVerifier"]
