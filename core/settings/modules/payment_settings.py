from __future__ import annotations

from typing import Optional

from pydantic import Field

from core.settings.base_settings import StorefrontBaseSettings


class PaymentSettings(StorefrontBaseSettings):
    """
    Payment provider webhook settings.
    Loaded from .env with exact variable name matching.
    """

    webhook_secret: Optional[str] = Field(default=None, alias="PAYMENT_WEBHOOK_SECRET")
    tolerance_seconds: int = Field(default=300, alias="PAYMENT_WEBHOOK_TOLERANCE_SECONDS")
    signature_header: str = Field(default="Stripe-Signature", alias="PAYMENT_SIGNATURE_HEADER")
