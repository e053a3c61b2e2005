"""
Payment provider webhook endpoint.

The body is read raw: the signature covers the exact bytes sent.
"""
import logging

from fastapi import APIRouter, Depends, Request, status

from api.dependencies import get_payment_reconciler
from core.application.dtos.payment_dto import WebhookAckDTO
from core.application.services.payment_reconciler import PaymentEventReconciler
from core.settings import get_app_settings


logger = logging.getLogger(__name__)
router = APIRouter()


@router.post(
    "/payment-webhook",
    response_model=WebhookAckDTO,
    status_code=status.HTTP_200_OK,
    summary="Receive payment provider events",
)
async def payment_webhook(
    request: Request,
    reconciler: PaymentEventReconciler = Depends(get_payment_reconciler),
) -> WebhookAckDTO:
    """
    Verify and apply a payment event.

    Returns ``{"received": true}`` for every correctly signed delivery.
    """
    payload = await request.body()
    header = request.headers.get(get_app_settings().payments.signature_header)
    return await reconciler.handle_payment_event(payload, header)
