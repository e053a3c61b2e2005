"""
Orders endpoints.

Order placement, lookup, admin status changes and deletion.
"""
import logging

from fastapi import APIRouter, Depends, Path, Query, status

from api.dependencies import get_current_identity, get_order_service, require_admin
from core.application.dtos.order_dto import (
    AttachPaymentIntentRequest,
    CreateOrderRequest,
    MessageDTO,
    OrderCreatedDTO,
    OrderDTO,
    OrderListDTO,
    UpdatePaymentStatusRequest,
    UpdateStatusRequest,
)
from core.application.services.order_service import OrderApplicationService
from core.domain.value_objects import MAX_ROW_ID, Identity


logger = logging.getLogger(__name__)
router = APIRouter()

OrderIdPath = Path(..., gt=0, le=MAX_ROW_ID, description="Order ID")


# =============================================================================
# CREATE ORDER
# =============================================================================

@router.post(
    "",
    response_model=OrderCreatedDTO,
    status_code=status.HTTP_201_CREATED,
    summary="Place an order",
)
async def create_order(
    request: CreateOrderRequest,
    identity: Identity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderCreatedDTO:
    """
    Place an order for the authenticated user.

    Stock is reserved and prices are captured atomically: either every
    line succeeds or nothing changes.
    """
    return await service.create_order(identity, request)


# =============================================================================
# LIST / GET
# =============================================================================

@router.get("", response_model=OrderListDTO, summary="List orders")
async def list_orders(
    limit: int = Query(default=100, ge=1, le=1000, description="Maximum number of orders to return"),
    offset: int = Query(default=0, ge=0, description="Number of orders to skip"),
    identity: Identity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderListDTO:
    """
    List orders, newest first.

    Admins see every order, other users see their own.
    """
    return await service.list_orders(identity, limit=limit, offset=offset)


@router.get("/{order_id}", response_model=OrderDTO, summary="Get order by ID")
async def get_order(
    order_id: int = OrderIdPath,
    identity: Identity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    return await service.get_order(identity, order_id)


# =============================================================================
# STATUS CHANGES (ADMIN)
# =============================================================================

@router.patch("/{order_id}/status", response_model=OrderDTO, summary="Set order status")
async def update_order_status(
    request: UpdateStatusRequest,
    order_id: int = OrderIdPath,
    identity: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    return await service.set_status(identity, order_id, request.status)


@router.patch(
    "/{order_id}/payment-status",
    response_model=OrderDTO,
    summary="Set payment status",
)
async def update_payment_status(
    request: UpdatePaymentStatusRequest,
    order_id: int = OrderIdPath,
    identity: Identity = Depends(require_admin),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    return await service.set_payment_status(identity, order_id, request.payment_status)


@router.put(
    "/{order_id}/payment-intent",
    response_model=OrderDTO,
    summary="Attach payment intent",
)
async def attach_payment_intent(
    request: AttachPaymentIntentRequest,
    order_id: int = OrderIdPath,
    identity: Identity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
) -> OrderDTO:
    """Record the provider's payment intent id while payment is pending."""
    return await service.attach_payment_intent(identity, order_id, request.payment_intent_id)


# =============================================================================
# DELETE
# =============================================================================

@router.delete("/{order_id}", response_model=MessageDTO, summary="Delete order")
async def delete_order(
    order_id: int = OrderIdPath,
    identity: Identity = Depends(get_current_identity),
    service: OrderApplicationService = Depends(get_order_service),
) -> MessageDTO:
    """
    Delete an order and its items.

    Admins may delete any order; owners only cancelled ones.
    """
    await service.delete_order(identity, order_id)
    return MessageDTO(message="Order deleted successfully")
