"""
Tests for QRIS payment confirmation.
"""

from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.exceptions import (
    AlreadyPaidError,
    AmountMismatchError,
    InvalidStateError,
    NotFoundError,
)
from ridehail.models.order import OrderStatus, PaymentStatus
from ridehail.services.bids import create_driver_bid
from ridehail.services.orders import accept_bid, update_order_status
from ridehail.services.payments import expected_payment_amount, process_qris_payment


@pytest.fixture
def accepted_order(db: AsyncSession, make_passenger, make_driver, make_order):
    """Order accepted at a 23000 bid against a 25000 estimate."""

    async def _make():
        passenger = await make_passenger()
        driver, _ = await make_driver()
        order = await make_order(passenger.id, estimated_fare=25000.0)
        bid = await create_driver_bid(db, order.id, driver.id, 23000.0, 15)
        order = await accept_bid(db, order.id, bid.id, passenger.id)
        return passenger, order

    return _make


@pytest.mark.asyncio
async def test_pays_accepted_order(db: AsyncSession, accepted_order) -> None:
    passenger, order = await accepted_order()

    paid = await process_qris_payment(db, order.id, passenger.id, 23000.0)

    assert paid.payment_status == PaymentStatus.PAID
    assert paid.status == OrderStatus.ACCEPTED
    assert paid.qris_payment_id.startswith("QRIS_")
    assert paid.qris_payment_id.endswith(f"_{order.id}")


@pytest.mark.asyncio
async def test_final_fare_takes_precedence(db: AsyncSession, accepted_order) -> None:
    passenger, order = await accepted_order()

    assert expected_payment_amount(order) == 23000.0
    with pytest.raises(AmountMismatchError) as exc_info:
        await process_qris_payment(db, order.id, passenger.id, 25000.0)

    assert exc_info.value.details == {"expected": 23000.0, "received": 25000.0}


@pytest.mark.asyncio
async def test_estimate_used_without_final_fare(db: AsyncSession, make_passenger, make_order) -> None:
    passenger = await make_passenger()
    order = await make_order(passenger.id, estimated_fare=18000.0)
    order = await update_order_status(db, order.id, OrderStatus.ACCEPTED)

    paid = await process_qris_payment(db, order.id, passenger.id, 18000.0)

    assert paid.payment_status == PaymentStatus.PAID


@pytest.mark.asyncio
async def test_in_progress_order_is_payable(db: AsyncSession, accepted_order) -> None:
    passenger, order = await accepted_order()
    await update_order_status(db, order.id, OrderStatus.IN_PROGRESS)

    paid = await process_qris_payment(db, order.id, passenger.id, 23000.0)

    assert paid.payment_status == PaymentStatus.PAID
    assert paid.status == OrderStatus.IN_PROGRESS


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [23000.005, 22999.995, 23000.01])
async def test_amount_within_tolerance(db: AsyncSession, accepted_order, amount: float) -> None:
    passenger, order = await accepted_order()

    paid = await process_qris_payment(db, order.id, passenger.id, amount)

    assert paid.payment_status == PaymentStatus.PAID


@pytest.mark.asyncio
@pytest.mark.parametrize("amount", [23000.02, 22999.98, 0.01])
async def test_amount_outside_tolerance(db: AsyncSession, accepted_order, amount: float) -> None:
    passenger, order = await accepted_order()

    with pytest.raises(AmountMismatchError, match="does not match order fare"):
        await process_qris_payment(db, order.id, passenger.id, amount)

    await db.refresh(order)
    assert order.payment_status == PaymentStatus.PENDING
    assert order.qris_payment_id is None


@pytest.mark.asyncio
async def test_unknown_order(db: AsyncSession, make_passenger) -> None:
    passenger = await make_passenger()

    with pytest.raises(NotFoundError, match="does not belong to passenger"):
        await process_qris_payment(db, 555, passenger.id, 100.0)


@pytest.mark.asyncio
async def test_other_passengers_order(db: AsyncSession, accepted_order, make_passenger) -> None:
    _, order = await accepted_order()
    stranger = await make_passenger()

    with pytest.raises(NotFoundError, match="does not belong to passenger"):
        await process_qris_payment(db, order.id, stranger.id, 23000.0)


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [OrderStatus.PENDING, OrderStatus.CANCELLED])
async def test_order_not_payable(db: AsyncSession, make_passenger, make_order, status: OrderStatus) -> None:
    passenger = await make_passenger()
    order = await make_order(passenger.id)
    if status != OrderStatus.PENDING:
        await update_order_status(db, order.id, status)

    with pytest.raises(InvalidStateError, match="not in a payable state"):
        await process_qris_payment(db, order.id, passenger.id, 25000.0)


@pytest.mark.asyncio
async def test_paying_twice(db: AsyncSession, accepted_order) -> None:
    passenger, order = await accepted_order()
    first = await process_qris_payment(db, order.id, passenger.id, 23000.0)
    reference = first.qris_payment_id

    with pytest.raises(AlreadyPaidError):
        await process_qris_payment(db, order.id, passenger.id, 23000.0)

    await db.refresh(order)
    assert order.qris_payment_id == reference


@pytest.mark.asyncio
async def test_completed_order_is_already_paid(db: AsyncSession, accepted_order) -> None:
    passenger, order = await accepted_order()
    await update_order_status(db, order.id, OrderStatus.IN_PROGRESS)
    await update_order_status(db, order.id, OrderStatus.COMPLETED)

    with pytest.raises(AlreadyPaidError, match="already been paid"):
        await process_qris_payment(db, order.id, passenger.id, 23000.0)
