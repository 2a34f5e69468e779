"""
Distance-based matching between passengers, drivers and pending orders.
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.config import settings
from ridehail.core.exceptions import NotFoundError
from ridehail.core.geo import calculate_distance, utcnow
from ridehail.models.order import Order, OrderStatus
from ridehail.models.user import DriverProfile, User, UserRole

logger = logging.getLogger(__name__)


async def get_nearby_drivers(
    db: AsyncSession,
    latitude: float,
    longitude: float,
    radius_km: Optional[float] = None,
) -> List[DriverProfile]:
    """
    Matchable drivers within radius_km of a point, nearest first.

    Matchable means available, located and holding an active subscription.
    """
    if radius_km is None:
        radius_km = settings.DEFAULT_SEARCH_RADIUS_KM

    now = utcnow()
    query = (
        select(DriverProfile)
        .join(User, User.id == DriverProfile.user_id)
        .where(
            DriverProfile.is_available.is_(True),
            User.role == UserRole.DRIVER,
            DriverProfile.current_latitude.is_not(None),
            DriverProfile.current_longitude.is_not(None),
            DriverProfile.subscription_expires_at.is_not(None),
            DriverProfile.subscription_expires_at > now,
        )
    )
    result = await db.execute(query)

    candidates = []
    for profile in result.scalars().all():
        # SQLite compares timestamps as text
        if not profile.has_active_subscription(now):
            continue
        distance = calculate_distance(
            latitude, longitude,
            profile.current_latitude, profile.current_longitude,
        )
        if distance <= radius_km:
            candidates.append((distance, profile))

    candidates.sort(key=lambda item: item[0])
    logger.debug(f"Nearby drivers at ({latitude}, {longitude}) r={radius_km}km: {len(candidates)}")
    return [profile for _, profile in candidates]


async def get_available_orders(db: AsyncSession, driver_id: int) -> List[Order]:
    """
    Unassigned pending orders a driver can bid on.

    Drivers without an active subscription see nothing. Drivers with an
    unknown location see every candidate, newest first; otherwise only
    pickups within AVAILABLE_ORDERS_RADIUS_KM, nearest first.
    """
    result = await db.execute(select(DriverProfile).where(DriverProfile.user_id == driver_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise NotFoundError("Driver profile not found")

    if not profile.has_active_subscription():
        return []

    query = (
        select(Order)
        .where(Order.status == OrderStatus.PENDING, Order.driver_id.is_(None))
        .order_by(Order.created_at.desc(), Order.id.desc())
    )
    result = await db.execute(query)
    orders = list(result.scalars().all())

    if not profile.has_location():
        return orders

    radius_km = settings.AVAILABLE_ORDERS_RADIUS_KM
    nearby = []
    for order in orders:
        distance = calculate_distance(
            profile.current_latitude, profile.current_longitude,
            order.pickup_latitude, order.pickup_longitude,
        )
        if distance <= radius_km:
            nearby.append((distance, order))

    nearby.sort(key=lambda item: item[0])
    return [order for _, order in nearby]
