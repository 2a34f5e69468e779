"""
Driver bids on pending orders.
"""

import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.exceptions import IneligibleError, InvalidStateError, NotFoundError
from ridehail.models.order import DriverBid, OrderStatus
from ridehail.services.drivers import find_driver_profile
from ridehail.services.orders import get_order

logger = logging.getLogger(__name__)


async def create_driver_bid(
    db: AsyncSession,
    order_id: int,
    driver_id: int,
    bid_amount: float,
    estimated_arrival_minutes: int,
) -> DriverBid:
    """Place a bid for an eligible driver on a pending order."""
    order = await get_order(db, order_id)
    if order.status != OrderStatus.PENDING:
        raise InvalidStateError("Order is not available for bidding")

    profile = await find_driver_profile(db, driver_id)
    if profile is None:
        raise NotFoundError("Driver not found or invalid")

    if not profile.is_available:
        raise IneligibleError("Driver is not available")

    if not profile.has_active_subscription():
        raise IneligibleError("Driver subscription is inactive or expired")

    bid = DriverBid(
        order_id=order_id,
        driver_id=driver_id,
        bid_amount=bid_amount,
        estimated_arrival_minutes=estimated_arrival_minutes,
    )

    try:
        db.add(bid)
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error creating bid on order {order_id} by driver {driver_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(bid)
    logger.info(f"Bid created: {bid.id} on order {order_id} by driver {driver_id} ({bid_amount})")
    return bid


async def get_order_bids(db: AsyncSession, order_id: int) -> List[DriverBid]:
    """Bids on a pending order, cheapest first, then fastest arrival."""
    order = await get_order(db, order_id)
    if order.status != OrderStatus.PENDING:
        raise InvalidStateError(f"Order with id {order_id} is not in pending status")

    query = (
        select(DriverBid)
        .where(DriverBid.order_id == order_id)
        .order_by(
            DriverBid.bid_amount.asc(),
            DriverBid.estimated_arrival_minutes.asc(),
            DriverBid.id.asc(),
        )
    )
    result = await db.execute(query)
    return list(result.scalars().all())
