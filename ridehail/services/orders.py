"""
Order lifecycle: creation, history, status transitions and bid acceptance.
"""

import logging
from typing import Dict, FrozenSet, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.exceptions import InvalidStateError, InvalidTransitionError, NotFoundError
from ridehail.models.order import DriverBid, Order, OrderStatus, PaymentStatus
from ridehail.models.user import User, UserRole

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS: Dict[OrderStatus, FrozenSet[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.ACCEPTED, OrderStatus.CANCELLED}),
    OrderStatus.ACCEPTED: frozenset({OrderStatus.IN_PROGRESS, OrderStatus.CANCELLED}),
    OrderStatus.IN_PROGRESS: frozenset({OrderStatus.COMPLETED, OrderStatus.CANCELLED}),
    OrderStatus.COMPLETED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}


def can_transition(current: OrderStatus, new: OrderStatus) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


async def get_order(db: AsyncSession, order_id: int) -> Order:
    order = await db.get(Order, order_id)
    if order is None:
        raise NotFoundError(f"Order with id {order_id} not found")
    return order


async def create_order(
    db: AsyncSession,
    passenger_id: int,
    pickup_latitude: float,
    pickup_longitude: float,
    pickup_address: str,
    destination_latitude: float,
    destination_longitude: float,
    destination_address: str,
    estimated_fare: float,
) -> Order:
    """Create a pending ride order for an existing user."""
    passenger = await db.get(User, passenger_id)
    if passenger is None:
        raise NotFoundError(f"Passenger with ID {passenger_id} not found")

    order = Order(
        passenger_id=passenger_id,
        driver_id=None,
        pickup_latitude=pickup_latitude,
        pickup_longitude=pickup_longitude,
        pickup_address=pickup_address,
        destination_latitude=destination_latitude,
        destination_longitude=destination_longitude,
        destination_address=destination_address,
        estimated_fare=estimated_fare,
        final_fare=None,
        status=OrderStatus.PENDING,
        payment_status=PaymentStatus.PENDING,
        qris_payment_id=None,
    )

    try:
        db.add(order)
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error creating order for passenger {passenger_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(order)
    logger.info(f"Order created: {order.id} by passenger {passenger_id}")
    return order


async def get_user_orders(db: AsyncSession, user_id: int, role: UserRole) -> List[Order]:
    """Orders of a passenger, or orders assigned to a driver, newest first."""
    if role == UserRole.PASSENGER:
        query = select(Order).where(Order.passenger_id == user_id)
    else:
        query = select(Order).where(Order.driver_id == user_id)

    query = query.order_by(Order.created_at.desc(), Order.id.desc())

    result = await db.execute(query)
    return list(result.scalars().all())


async def update_order_status(
    db: AsyncSession,
    order_id: int,
    new_status: OrderStatus,
    final_fare: Optional[float] = None,
) -> Order:
    """
    Move an order along the transition table.

    Completing an order marks it paid, and a supplied final_fare replaces the
    agreed one. Cancelling a paid order marks it refunded.
    """
    order = await get_order(db, order_id)
    current_status = order.status

    if not can_transition(current_status, new_status):
        raise InvalidTransitionError(
            f"Invalid status transition from {current_status.value} to {new_status.value}"
        )

    values = {"status": new_status}
    criteria = [Order.id == order_id, Order.status == current_status]
    if new_status == OrderStatus.COMPLETED:
        if final_fare is not None:
            values["final_fare"] = final_fare
        values["payment_status"] = PaymentStatus.PAID
    elif new_status == OrderStatus.CANCELLED:
        # The refund decision depends on the payment status read above
        criteria.append(Order.payment_status == order.payment_status)
        if order.payment_status == PaymentStatus.PAID:
            values["payment_status"] = PaymentStatus.REFUNDED

    try:
        # Compare-and-swap on the state we validated against
        result = await db.execute(update(Order).where(*criteria).values(**values))
        if result.rowcount == 0:
            await db.rollback()
            raise InvalidStateError(f"Order {order_id} was modified concurrently, reload and retry")
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error updating order {order_id} status: {e}")
        await db.rollback()
        raise

    await db.refresh(order)
    logger.info(f"Order {order_id} status: {current_status.value} -> {new_status.value}")
    return order


async def accept_bid(db: AsyncSession, order_id: int, bid_id: int, passenger_id: int) -> Order:
    """
    Accept a driver's bid on a pending order owned by the passenger.

    A missing order and an order owned by someone else raise the same error.
    """
    result = await db.execute(
        select(Order).where(Order.id == order_id, Order.passenger_id == passenger_id)
    )
    order = result.scalar_one_or_none()
    if order is None:
        raise NotFoundError("Order not found")

    result = await db.execute(
        select(DriverBid).where(DriverBid.id == bid_id, DriverBid.order_id == order_id)
    )
    bid = result.scalar_one_or_none()
    if bid is None:
        raise NotFoundError("Bid not found")

    if order.status != OrderStatus.PENDING:
        raise InvalidStateError("Order is not in pending status")

    try:
        result = await db.execute(
            update(Order)
            .where(Order.id == order_id, Order.status == OrderStatus.PENDING)
            .values(
                status=OrderStatus.ACCEPTED,
                driver_id=bid.driver_id,
                final_fare=bid.bid_amount,
            )
        )
        if result.rowcount == 0:
            await db.rollback()
            raise InvalidStateError("Order is not in pending status")
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error accepting bid {bid_id} on order {order_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(order)
    logger.info(f"Bid {bid_id} accepted: order {order_id} assigned to driver {bid.driver_id}")
    return order
