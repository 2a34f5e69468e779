"""
Account operations: registration and lookup.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.exceptions import ConflictError, NotFoundError
from ridehail.core.security import get_password_hash
from ridehail.models.user import DriverProfile, User, UserRole

logger = logging.getLogger(__name__)


async def get_user(db: AsyncSession, user_id: int) -> User:
    """Get user by ID or raise NotFoundError."""
    user = await db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


async def email_exists(db: AsyncSession, email: str) -> bool:
    result = await db.execute(select(User.id).where(User.email == email).limit(1))
    return result.scalar_one_or_none() is not None


async def register_user(
    db: AsyncSession,
    email: str,
    password: str,
    full_name: str,
    phone: str,
    role: UserRole,
) -> User:
    """
    Register a passenger or driver.

    Drivers get an empty DriverProfile in the same transaction so they can
    report their location before filling in vehicle data.
    """
    if await email_exists(db, email):
        raise ConflictError("Email already exists")

    user = User(
        email=email,
        password_hash=get_password_hash(password),
        full_name=full_name,
        phone=phone,
        role=role,
    )

    try:
        db.add(user)
        await db.flush()

        if role == UserRole.DRIVER:
            db.add(DriverProfile(
                user_id=user.id,
                license_number="",
                vehicle_type="",
                vehicle_plate="",
                is_available=False,
            ))

        await db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        await db.rollback()
        raise ConflictError("Email already exists")
    except SQLAlchemyError as e:
        logger.error(f"Error registering user {email}: {e}")
        await db.rollback()
        raise

    await db.refresh(user)
    logger.info(f"User registered: {user.id} ({user.role.value})")
    return user
