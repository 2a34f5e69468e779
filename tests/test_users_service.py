"""
Tests for registration and user lookup.
"""

from __future__ import annotations

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.exceptions import ConflictError, NotFoundError
from ridehail.core.security import verify_password
from ridehail.models.user import DriverProfile, User, UserRole
from ridehail.services import users as user_service
from ridehail.services.users import get_user, register_user


async def _register(db: AsyncSession, email: str, role: UserRole = UserRole.PASSENGER):
    return await register_user(
        db,
        email=email,
        password="secret123",
        full_name="Budi Santoso",
        phone="081234567890",
        role=role,
    )


@pytest.mark.asyncio
async def test_register_passenger(db: AsyncSession) -> None:
    user = await _register(db, "budi@example.com")

    assert user.id is not None
    assert user.email == "budi@example.com"
    assert user.full_name == "Budi Santoso"
    assert user.role == UserRole.PASSENGER
    assert user.created_at is not None
    assert user.updated_at is not None

    count = await db.scalar(select(func.count()).select_from(DriverProfile))
    assert count == 0


@pytest.mark.asyncio
async def test_register_driver_creates_empty_profile(db: AsyncSession) -> None:
    user = await _register(db, "driver@example.com", role=UserRole.DRIVER)

    result = await db.execute(select(DriverProfile).where(DriverProfile.user_id == user.id))
    profile = result.scalar_one()

    assert profile.license_number == ""
    assert profile.vehicle_type == ""
    assert profile.vehicle_plate == ""
    assert profile.is_available is False
    assert profile.current_latitude is None
    assert profile.current_longitude is None
    assert profile.subscription_expires_at is None


@pytest.mark.asyncio
async def test_password_is_hashed(db: AsyncSession) -> None:
    user = await _register(db, "hash@example.com")

    assert user.password_hash != "secret123"
    assert verify_password("secret123", user.password_hash)
    assert not verify_password("wrong-password", user.password_hash)


@pytest.mark.asyncio
async def test_duplicate_email_rejected(db: AsyncSession) -> None:
    await _register(db, "dup@example.com")

    with pytest.raises(ConflictError, match="Email already exists"):
        await _register(db, "dup@example.com", role=UserRole.DRIVER)


@pytest.mark.asyncio
async def test_emails_are_case_sensitive(db: AsyncSession) -> None:
    first = await _register(db, "case@example.com")
    second = await _register(db, "Case@example.com")

    assert first.id != second.id


@pytest.mark.asyncio
async def test_get_user(db: AsyncSession) -> None:
    user = await _register(db, "lookup@example.com")

    found = await get_user(db, user.id)
    assert found.email == "lookup@example.com"

    with pytest.raises(NotFoundError):
        await get_user(db, 9999)


@pytest.mark.asyncio
async def test_concurrent_duplicate_email_is_conflict(db: AsyncSession, session_factory, monkeypatch) -> None:
    async def registered_meanwhile(session: AsyncSession, email: str) -> bool:
        # Another request inserts the same email after this one checked
        async with session_factory() as other:
            other.add(User(
                email=email,
                password_hash="x",
                full_name="Concurrent",
                phone="081234567890",
                role=UserRole.PASSENGER,
            ))
            await other.commit()
        return False

    monkeypatch.setattr(user_service, "email_exists", registered_meanwhile)

    with pytest.raises(ConflictError, match="Email already exists"):
        await _register(db, "race@example.com")

    count = await db.scalar(select(func.count()).select_from(User).where(User.email == "race@example.com"))
    assert count == 1
