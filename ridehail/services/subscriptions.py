"""
Driver subscriptions.
"""

import logging
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.config import settings
from ridehail.core.exceptions import NotFoundError, WrongRoleError
from ridehail.core.geo import utcnow
from ridehail.models.order import PaymentStatus
from ridehail.models.subscription import DriverSubscription, SubscriptionType
from ridehail.models.user import DriverProfile, User, UserRole

logger = logging.getLogger(__name__)


async def create_driver_subscription(
    db: AsyncSession,
    driver_id: int,
    subscription_type: SubscriptionType,
    amount: float,
) -> DriverSubscription:
    """
    Start a subscription window for a driver.

    The profile's subscription_expires_at is overwritten in the same
    transaction, so access is granted before the subscription is paid.
    """
    user = await db.get(User, driver_id)
    if user is None:
        raise NotFoundError("Driver not found")
    if user.role != UserRole.DRIVER:
        raise WrongRoleError("User is not a driver")

    result = await db.execute(select(DriverProfile).where(DriverProfile.user_id == driver_id))
    profile = result.scalar_one_or_none()
    if profile is None:
        raise NotFoundError("Driver profile not found")

    starts_at = utcnow()
    expires_at = starts_at + timedelta(days=settings.SUBSCRIPTION_PERIOD_DAYS)

    subscription = DriverSubscription(
        driver_id=driver_id,
        subscription_type=subscription_type,
        amount=amount,
        payment_status=PaymentStatus.PENDING,
        starts_at=starts_at,
        expires_at=expires_at,
    )

    try:
        db.add(subscription)
        profile.subscription_expires_at = expires_at
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error creating subscription for driver {driver_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(subscription)
    logger.info(f"Subscription {subscription.id} created for driver {driver_id} until {expires_at.isoformat()}")
    return subscription
