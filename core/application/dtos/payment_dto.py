"""Application DTOs for payment webhooks."""

from pydantic import BaseModel, ConfigDict


class WebhookAckDTO(BaseModel):
    """Acknowledgement returned to the payment provider."""

    received: bool = True

    model_config = ConfigDict(frozen=True)
