"""
QRIS payment confirmation for orders.
"""

import logging
import time

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.config import settings
from ridehail.core.exceptions import (
    AlreadyPaidError,
    AmountMismatchError,
    InvalidStateError,
    NotFoundError,
)
from ridehail.models.order import Order, OrderStatus, PaymentStatus

logger = logging.getLogger(__name__)

PAYABLE_STATUSES = frozenset({
    OrderStatus.ACCEPTED,
    OrderStatus.IN_PROGRESS,
    OrderStatus.COMPLETED,
})


def expected_payment_amount(order: Order) -> float:
    """Final fare once agreed, otherwise the passenger's estimate."""
    if order.final_fare is not None:
        return float(order.final_fare)
    return float(order.estimated_fare)


def generate_qris_reference(order_id: int) -> str:
    return f"{settings.QRIS_REFERENCE_PREFIX}_{int(time.time() * 1000)}_{order_id}"


async def process_qris_payment(
    db: AsyncSession,
    order_id: int,
    passenger_id: int,
    amount: float,
) -> Order:
    """
    Confirm a QRIS payment for a passenger's order.

    The gateway is stubbed: a matching amount is treated as settled.
    """
    result = await db.execute(
        select(Order).where(Order.id == order_id, Order.passenger_id == passenger_id)
    )
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFoundError("Order not found or does not belong to passenger")

    if order.status not in PAYABLE_STATUSES:
        raise InvalidStateError("Order is not in a payable state")

    if order.payment_status == PaymentStatus.PAID:
        raise AlreadyPaidError("Order has already been paid")

    expected = expected_payment_amount(order)
    # Rounded so a difference of exactly the tolerance is accepted
    if round(abs(amount - expected), 6) > settings.PAYMENT_AMOUNT_TOLERANCE:
        raise AmountMismatchError(
            "Payment amount does not match order fare",
            details={"expected": expected, "received": amount},
        )

    reference = generate_qris_reference(order_id)

    try:
        result = await db.execute(
            update(Order)
            .where(
                Order.id == order_id,
                Order.status.in_(list(PAYABLE_STATUSES)),
                Order.payment_status != PaymentStatus.PAID,
            )
            .values(payment_status=PaymentStatus.PAID, qris_payment_id=reference)
            .execution_options(synchronize_session=False)
        )
        lost_race = result.rowcount == 0
        if lost_race:
            await db.rollback()
        else:
            await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error processing QRIS payment for order {order_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(order)
    if lost_race:
        # Cancelled or paid by a concurrent request since the checks above
        if order.payment_status == PaymentStatus.PAID:
            raise AlreadyPaidError("Order has already been paid")
        raise InvalidStateError("Order is not in a payable state")

    logger.info(f"QRIS payment {reference} confirmed for order {order_id}")
    return order
