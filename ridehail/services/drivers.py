"""
Driver profile operations.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.exceptions import ConflictError, IneligibleError, NotFoundError, WrongRoleError
from ridehail.core.geo import as_utc, utcnow
from ridehail.models.user import DriverProfile, User, UserRole

logger = logging.getLogger(__name__)


async def find_driver_profile(db: AsyncSession, driver_id: int) -> Optional[DriverProfile]:
    """Profile of the user with role driver, or None."""
    query = (
        select(DriverProfile)
        .join(User, User.id == DriverProfile.user_id)
        .where(User.id == driver_id, User.role == UserRole.DRIVER)
    )
    result = await db.execute(query)
    return result.scalar_one_or_none()


async def profile_exists(db: AsyncSession, user_id: int) -> bool:
    result = await db.execute(select(DriverProfile.id).where(DriverProfile.user_id == user_id))
    return result.scalar_one_or_none() is not None


async def create_driver_profile(
    db: AsyncSession,
    user_id: int,
    license_number: str,
    vehicle_type: str,
    vehicle_plate: str,
) -> DriverProfile:
    """Create the profile of a driver user that does not have one yet."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    if user.role != UserRole.DRIVER:
        raise WrongRoleError("User must have driver role to create driver profile")

    if await profile_exists(db, user_id):
        raise ConflictError("Driver profile already exists for this user")

    profile = DriverProfile(
        user_id=user_id,
        license_number=license_number,
        vehicle_type=vehicle_type,
        vehicle_plate=vehicle_plate,
        is_available=False,
        current_latitude=None,
        current_longitude=None,
        subscription_expires_at=None,
    )

    try:
        db.add(profile)
        await db.commit()
    except IntegrityError:
        await db.rollback()
        raise ConflictError("Driver profile already exists for this user")
    except SQLAlchemyError as e:
        logger.error(f"Error creating driver profile for user {user_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(profile)
    logger.info(f"Driver profile created: {profile.id} for user {user_id}")
    return profile


async def update_driver_location(
    db: AsyncSession,
    driver_id: int,
    latitude: float,
    longitude: float,
    is_available: bool,
) -> DriverProfile:
    """
    Update driver's current location and availability.

    Drivers without any subscription may still report their position; a
    driver whose subscription has lapsed may not.
    """
    profile = await find_driver_profile(db, driver_id)
    if profile is None:
        raise NotFoundError("Driver not found")

    expires_at = as_utc(profile.subscription_expires_at)
    if expires_at is not None and expires_at <= utcnow():
        raise IneligibleError("Driver subscription has expired")

    try:
        profile.current_latitude = latitude
        profile.current_longitude = longitude
        profile.is_available = is_available
        await db.commit()
    except SQLAlchemyError as e:
        logger.error(f"Error updating driver location {driver_id}: {e}")
        await db.rollback()
        raise

    await db.refresh(profile)
    logger.info(f"Driver location updated: {driver_id} (available={is_available})")
    return profile
