"""Application DTOs for Order operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.domain.enums import OrderStatus, PaymentStatus
from core.domain.value_objects import MAX_ROW_ID


class OrderLineRequest(BaseModel):
    """One requested product and quantity."""

    product_id: int = Field(..., gt=0, le=MAX_ROW_ID, alias="productId", description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity ordered")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class CreateOrderRequest(BaseModel):
    """Request DTO for creating an order."""

    shipping_address: str = Field(..., min_length=1, description="Delivery address")
    items: List[OrderLineRequest] = Field(..., min_length=1, description="Requested items")

    model_config = ConfigDict(frozen=True)

    @field_validator("shipping_address")
    @classmethod
    def _address_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Shipping address is required.")
        return value


class OrderCreatedDTO(BaseModel):
    """Response DTO for a committed order."""

    message: str = "Order created successfully"
    order_id: int = Field(..., description="New order ID")
    total_amount: Decimal = Field(..., ge=0, description="Order total at purchase")

    model_config = ConfigDict(frozen=True)


class OrderItemDTO(BaseModel):
    """DTO for order item."""

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    price_at_purchase: Decimal = Field(..., ge=0, description="Unit price snapshot")
    name: Optional[str] = Field(None, description="Catalog product name")
    image_url: Optional[str] = Field(None, description="Catalog product image")

    model_config = ConfigDict(frozen=True)


class OrderDTO(BaseModel):
    """Response DTO for order details."""

    id: int = Field(..., description="Order ID")
    user_id: int = Field(..., description="Owner user ID")
    total_amount: Decimal = Field(..., ge=0, description="Total order amount")
    status: OrderStatus = Field(..., description="Fulfilment status")
    payment_status: PaymentStatus = Field(..., description="Payment status")
    shipping_address: str = Field(..., description="Delivery address")
    order_date: Optional[datetime] = Field(None, description="Creation time")
    payment_intent_id: Optional[str] = Field(None, description="Payment provider reference")
    items: List[OrderItemDTO] = Field(default_factory=list, description="Order items")

    model_config = ConfigDict(frozen=True)


class OrderListDTO(BaseModel):
    """DTO for listing orders."""

    orders: List[OrderDTO] = Field(default_factory=list, description="List of orders")
    limit: int = Field(..., ge=1)
    offset: int = Field(..., ge=0)
    count: int = Field(..., ge=0, description="Orders in this page")

    model_config = ConfigDict(frozen=True)


class UpdateStatusRequest(BaseModel):
    """Request DTO for admin status change."""

    status: OrderStatus

    model_config = ConfigDict(frozen=True)


class UpdatePaymentStatusRequest(BaseModel):
    """Request DTO for admin payment status change."""

    payment_status: PaymentStatus

    model_config = ConfigDict(frozen=True)


class AttachPaymentIntentRequest(BaseModel):
    """Request DTO for recording the provider's payment intent."""

    payment_intent_id: str = Field(..., min_length=1, max_length=255)

    model_config = ConfigDict(frozen=True)


class MessageDTO(BaseModel):
    """Plain acknowledgement."""

    message: str

    model_config = ConfigDict(frozen=True)
