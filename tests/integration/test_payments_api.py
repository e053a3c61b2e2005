"""Integration tests for the payment webhook and health endpoints."""

import pytest

from core.domain.enums import PaymentStatus


WEBHOOK = "/api/v1/payment-webhook"


async def _order_with_intent(client, auth_headers, add_product, intent):
    pid = await add_product()
    created = await client.post(
        "/api/v1/orders",
        json={"shipping_address": "1 Main St", "items": [{"productId": pid, "quantity": 1}]},
        headers=auth_headers(1),
    )
    order_id = created.json()["order_id"]
    await client.put(
        f"/api/v1/orders/{order_id}/payment-intent",
        json={"payment_intent_id": intent},
        headers=auth_headers(1),
    )
    return order_id


@pytest.mark.asyncio
async def test_signed_success_event_completes_payment(
    client, auth_headers, add_product, payment_event, sign_webhook, order_row
):
    order_id = await _order_with_intent(client, auth_headers, add_product, "pi_live")
    body = payment_event("payment_intent.succeeded", "pi_live", order_id)

    response = await client.post(
        WEBHOOK,
        content=body,
        headers={"Stripe-Signature": sign_webhook(body), "Content-Type": "application/json"},
    )

    assert response.status_code == 200
    assert response.json() == {"received": True}
    assert (await order_row(order_id)).payment_status == PaymentStatus.COMPLETED.value


@pytest.mark.asyncio
async def test_unsigned_event_rejected(
    client, auth_headers, add_product, payment_event, order_row
):
    order_id = await _order_with_intent(client, auth_headers, add_product, "pi_live")
    body = payment_event("payment_intent.succeeded", "pi_live", order_id)

    response = await client.post(WEBHOOK, content=body)

    assert response.status_code == 400
    assert response.json()["error"] == "webhook_auth_error"
    assert (await order_row(order_id)).payment_status == PaymentStatus.PENDING.value


@pytest.mark.asyncio
async def test_reserialized_body_fails_verification(client, payment_event, sign_webhook):
    body = payment_event("payment_intent.succeeded", "pi_live", 1)
    header = sign_webhook(body)

    response = await client.post(WEBHOOK, content=body.replace(b": ", b":"), headers={"Stripe-Signature": header})

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_unhandled_event_acknowledged(client, payment_event, sign_webhook):
    body = payment_event("customer.created", None, None)

    response = await client.post(WEBHOOK, content=body, headers={"Stripe-Signature": sign_webhook(body)})

    assert response.status_code == 200
    assert response.json() == {"received": True}


@pytest.mark.asyncio
async def test_health_endpoints(client):
    live = await client.get("/health")
    ready = await client.get("/health/ready")

    assert live.json()["status"] == "healthy"
    assert ready.status_code == 200
    assert ready.json()["checks"]["database"] == "ok"
