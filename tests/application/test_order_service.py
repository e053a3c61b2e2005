"""Tests for OrderApplicationService against an in-memory database."""

from decimal import Decimal

import pydantic
import pytest

from core.application.dtos.order_dto import CreateOrderRequest, OrderLineRequest
from core.domain.enums import OrderStatus, PaymentStatus
from core.domain.exceptions import (
    ConflictError,
    ForbiddenError,
    InsufficientStockError,
    InvalidStateError,
    OrderNotFoundError,
    PersistenceError,
    ProductNotFoundError,
)
from core.domain.value_objects import MAX_ROW_ID


def _request(*lines, address="221B Baker Street"):
    return CreateOrderRequest(
        shipping_address=address,
        items=[OrderLineRequest(product_id=pid, quantity=qty) for pid, qty in lines],
    )


# =============================================================================
# CREATE
# =============================================================================

@pytest.mark.asyncio
async def test_create_order_decrements_stock_and_snapshots_price(
    order_service, customer, add_product, stock_of
):
    tea = await add_product(price="4.50", stock=10, name="Tea")
    mug = await add_product(price="12.00", stock=3, name="Mug")

    created = await order_service.create_order(customer, _request((tea, 2), (mug, 1)))

    assert created.message == "Order created successfully"
    assert created.total_amount == Decimal("21.00")
    assert await stock_of(tea) == 8
    assert await stock_of(mug) == 2

    order = await order_service.get_order(customer, created.order_id)
    assert order.user_id == customer.user_id
    assert order.status == OrderStatus.PENDING
    assert order.payment_status == PaymentStatus.PENDING
    assert {(i.product_id, i.quantity, i.price_at_purchase) for i in order.items} == {
        (tea, 2, Decimal("4.50")),
        (mug, 1, Decimal("12.00")),
    }
    assert order.total_amount == sum(i.price_at_purchase * i.quantity for i in order.items)


@pytest.mark.asyncio
async def test_items_carry_catalog_name_and_image(order_service, customer, add_product):
    pid = await add_product(name="Kettle", image_url="https://img.example/kettle.png")

    created = await order_service.create_order(customer, _request((pid, 1)))
    order = await order_service.get_order(customer, created.order_id)

    assert order.items[0].name == "Kettle"
    assert order.items[0].image_url == "https://img.example/kettle.png"


@pytest.mark.asyncio
async def test_later_price_change_does_not_touch_existing_order(
    order_service, customer, add_product, set_product_price
):
    pid = await add_product(price="10.00")
    created = await order_service.create_order(customer, _request((pid, 3)))

    await set_product_price(pid, "99.00")

    order = await order_service.get_order(customer, created.order_id)
    assert order.total_amount == Decimal("30.00")
    assert order.items[0].price_at_purchase == Decimal("10.00")


@pytest.mark.asyncio
async def test_insufficient_stock_rolls_back_every_line(
    order_service, customer, add_product, stock_of
):
    plenty = await add_product(stock=10)
    scarce = await add_product(stock=1)

    with pytest.raises(InsufficientStockError) as exc_info:
        await order_service.create_order(customer, _request((plenty, 4), (scarce, 2)))

    assert exc_info.value.details == {"product_id": scarce, "available": 1, "requested": 2}
    assert await stock_of(plenty) == 10
    assert await stock_of(scarce) == 1
    assert (await order_service.list_orders(customer)).count == 0


@pytest.mark.asyncio
async def test_unknown_product_rolls_back(order_service, customer, add_product, stock_of):
    pid = await add_product(stock=5)

    with pytest.raises(ProductNotFoundError):
        await order_service.create_order(customer, _request((pid, 1), (9999, 1)))

    assert await stock_of(pid) == 5
    assert (await order_service.list_orders(customer)).count == 0


@pytest.mark.asyncio
async def test_duplicate_lines_are_checked_cumulatively(
    order_service, customer, add_product, stock_of
):
    pid = await add_product(stock=5)

    with pytest.raises(InsufficientStockError):
        await order_service.create_order(customer, _request((pid, 3), (pid, 3)))
    assert await stock_of(pid) == 5

    created = await order_service.create_order(customer, _request((pid, 2), (pid, 3)))
    assert await stock_of(pid) == 0
    order = await order_service.get_order(customer, created.order_id)
    assert sorted(i.quantity for i in order.items) == [2, 3]


@pytest.mark.asyncio
async def test_exact_stock_leaves_zero(order_service, customer, add_product, stock_of):
    pid = await add_product(stock=2)
    await order_service.create_order(customer, _request((pid, 2)))
    assert await stock_of(pid) == 0

    with pytest.raises(InsufficientStockError):
        await order_service.create_order(customer, _request((pid, 1)))


# =============================================================================
# READ
# =============================================================================

@pytest.mark.asyncio
async def test_list_scoped_to_owner_unless_admin(
    order_service, customer, other_customer, admin, add_product
):
    pid = await add_product(stock=10)
    first = await order_service.create_order(customer, _request((pid, 1)))
    await order_service.create_order(other_customer, _request((pid, 1)))
    latest = await order_service.create_order(customer, _request((pid, 1)))

    mine = await order_service.list_orders(customer)
    everything = await order_service.list_orders(admin)

    assert [o.id for o in mine.orders] == [latest.order_id, first.order_id]
    assert everything.count == 3
    assert mine.orders[0].items == []


@pytest.mark.asyncio
async def test_list_paginates(order_service, customer, add_product):
    pid = await add_product(stock=10)
    for _ in range(3):
        await order_service.create_order(customer, _request((pid, 1)))

    page = await order_service.list_orders(customer, limit=2, offset=2)

    assert page.count == 1
    assert page.limit == 2
    assert page.offset == 2


@pytest.mark.asyncio
async def test_get_order_access(order_service, customer, other_customer, admin, add_product):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))

    assert (await order_service.get_order(admin, created.order_id)).id == created.order_id
    with pytest.raises(ForbiddenError):
        await order_service.get_order(other_customer, created.order_id)
    with pytest.raises(OrderNotFoundError):
        await order_service.get_order(customer, 4242)


# =============================================================================
# STATUS CHANGES
# =============================================================================

@pytest.mark.asyncio
async def test_admin_sets_any_status(order_service, customer, admin, add_product):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))

    cancelled = await order_service.set_status(admin, created.order_id, "cancelled")
    reopened = await order_service.set_status(admin, created.order_id, OrderStatus.PROCESSING)
    refunded = await order_service.set_payment_status(admin, created.order_id, "refunded")

    assert cancelled.status == OrderStatus.CANCELLED
    assert reopened.status == OrderStatus.PROCESSING
    assert refunded.payment_status == PaymentStatus.REFUNDED
    assert refunded.total_amount == created.total_amount


@pytest.mark.asyncio
async def test_non_admin_cannot_set_status(order_service, customer, add_product):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))

    with pytest.raises(ForbiddenError):
        await order_service.set_status(customer, created.order_id, "shipped")


@pytest.mark.asyncio
async def test_status_on_missing_order(order_service, admin):
    with pytest.raises(OrderNotFoundError):
        await order_service.set_payment_status(admin, 4242, "completed")


# =============================================================================
# PAYMENT INTENT
# =============================================================================

@pytest.mark.asyncio
async def test_attach_payment_intent(order_service, customer, add_product):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))

    order = await order_service.attach_payment_intent(customer, created.order_id, "pi_abc")
    again = await order_service.attach_payment_intent(customer, created.order_id, "pi_abc")

    assert order.payment_intent_id == "pi_abc"
    assert again.payment_intent_id == "pi_abc"


@pytest.mark.asyncio
async def test_intent_used_by_another_order_conflicts(order_service, customer, add_product):
    pid = await add_product()
    first = await order_service.create_order(customer, _request((pid, 1)))
    second = await order_service.create_order(customer, _request((pid, 1)))
    await order_service.attach_payment_intent(customer, first.order_id, "pi_shared")

    with pytest.raises(ConflictError):
        await order_service.attach_payment_intent(customer, second.order_id, "pi_shared")


# =============================================================================
# DELETE
# =============================================================================

@pytest.mark.asyncio
async def test_owner_deletes_only_cancelled(
    order_service, customer, admin, add_product, order_row
):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))

    with pytest.raises(InvalidStateError):
        await order_service.delete_order(customer, created.order_id)
    assert await order_row(created.order_id) is not None

    await order_service.set_status(admin, created.order_id, "cancelled")
    await order_service.delete_order(customer, created.order_id)

    assert await order_row(created.order_id) is None
    with pytest.raises(OrderNotFoundError):
        await order_service.get_order(customer, created.order_id)


@pytest.mark.asyncio
async def test_admin_deletes_any_order(order_service, customer, admin, add_product, order_row):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))
    await order_service.set_status(admin, created.order_id, "shipped")

    await order_service.delete_order(admin, created.order_id)

    assert await order_row(created.order_id) is None


@pytest.mark.asyncio
async def test_stranger_cannot_delete(
    order_service, customer, other_customer, admin, add_product
):
    pid = await add_product()
    created = await order_service.create_order(customer, _request((pid, 1)))
    await order_service.set_status(admin, created.order_id, "cancelled")

    with pytest.raises(ForbiddenError):
        await order_service.delete_order(other_customer, created.order_id)
    with pytest.raises(OrderNotFoundError):
        await order_service.delete_order(admin, 4242)


@pytest.mark.asyncio
async def test_deletion_does_not_restock(order_service, customer, admin, add_product, stock_of):
    pid = await add_product(stock=3)
    created = await order_service.create_order(customer, _request((pid, 2)))

    await order_service.delete_order(admin, created.order_id)

    assert await stock_of(pid) == 1


# =============================================================================
# STORE FAILURES AND ID RANGE
# =============================================================================

@pytest.mark.asyncio
async def test_store_failure_mid_order_rolls_back_every_line(
    order_service, customer, admin, add_product, stock_of, failing_stock_write
):
    first = await add_product(stock=10)
    second = await add_product(stock=4)

    with pytest.raises(PersistenceError):
        await order_service.create_order(customer, _request((first, 2), (second, 1)))

    assert failing_stock_write["count"] == 2
    assert await stock_of(first) == 10
    assert await stock_of(second) == 4
    assert (await order_service.list_orders(admin)).count == 0


@pytest.mark.asyncio
async def test_ids_past_column_range_are_not_found(order_service, customer, admin):
    huge = 2**64

    with pytest.raises(OrderNotFoundError):
        await order_service.get_order(customer, huge)
    with pytest.raises(OrderNotFoundError):
        await order_service.set_status(admin, huge, "shipped")
    with pytest.raises(OrderNotFoundError):
        await order_service.attach_payment_intent(customer, huge, "pi_big")
    with pytest.raises(OrderNotFoundError):
        await order_service.delete_order(admin, huge)


@pytest.mark.asyncio
async def test_unvalidated_product_id_past_range_is_not_found(
    order_service, customer, add_product, stock_of
):
    pid = await add_product(stock=5)
    request = CreateOrderRequest.model_construct(
        shipping_address="1 Main St",
        items=[
            OrderLineRequest(product_id=pid, quantity=1),
            OrderLineRequest.model_construct(product_id=2**64, quantity=1),
        ],
    )

    with pytest.raises(ProductNotFoundError):
        await order_service.create_order(customer, request)
    assert await stock_of(pid) == 5


@pytest.mark.parametrize("product_id", [0, MAX_ROW_ID + 1, 2**64])
def test_line_request_rejects_product_id_out_of_range(product_id):
    with pytest.raises(pydantic.ValidationError):
        OrderLineRequest(product_id=product_id, quantity=1)


def test_line_request_accepts_largest_row_id():
    assert OrderLineRequest(product_id=MAX_ROW_ID, quantity=1).product_id == MAX_ROW_ID
