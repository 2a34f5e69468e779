"""
Shared fixtures: an in-memory SQLite database per test, entity factories and
an HTTP client bound to the ASGI app.
"""

from __future__ import annotations

import itertools
import os
from datetime import datetime, timedelta
from typing import Any, AsyncGenerator, Awaitable, Callable, Optional

import pytest
import pytest_asyncio

# Settings are read at import time
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("ENVIRONMENT", "test")

from httpx import ASGITransport, AsyncClient
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from ridehail.core.database import Base, get_db
from ridehail.core.geo import utcnow
from ridehail.main import app
from ridehail.models.order import Order
from ridehail.models.user import DriverProfile, User, UserRole
from ridehail.services.orders import create_order
from ridehail.services.users import register_user

JAKARTA = (-6.2088, 106.8456)
PASSWORD = "secret123"
PHONE = "081234567890"


@pytest_asyncio.fixture
async def engine() -> AsyncGenerator[AsyncEngine, None]:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client whose requests use the test database."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# =============================================================================
# FACTORIES
# =============================================================================

_emails = itertools.count(1)


def _next_email(prefix: str) -> str:
    return f"{prefix}{next(_emails)}@example.com"


@pytest.fixture
def make_passenger(db: AsyncSession) -> Callable[..., Awaitable[User]]:
    async def _make(email: Optional[str] = None) -> User:
        return await register_user(
            db,
            email=email or _next_email("passenger"),
            password=PASSWORD,
            full_name="Test Passenger",
            phone=PHONE,
            role=UserRole.PASSENGER,
        )

    return _make


@pytest.fixture
def make_driver(db: AsyncSession) -> Callable[..., Awaitable[tuple[User, DriverProfile]]]:
    """
    Registers a driver and shapes its profile.

    By default the driver is available, located in central Jakarta and
    subscribed for the next 30 days.
    """

    async def _make(
        latitude: Optional[float] = JAKARTA[0],
        longitude: Optional[float] = JAKARTA[1],
        is_available: bool = True,
        subscribed: bool = True,
        expires_at: Optional[datetime] = None,
    ) -> tuple[User, DriverProfile]:
        user = await register_user(
            db,
            email=_next_email("driver"),
            password=PASSWORD,
            full_name="Test Driver",
            phone=PHONE,
            role=UserRole.DRIVER,
        )
        result = await db.execute(select(DriverProfile).where(DriverProfile.user_id == user.id))
        profile = result.scalar_one()

        profile.current_latitude = latitude
        profile.current_longitude = longitude
        profile.is_available = is_available
        if expires_at is not None:
            profile.subscription_expires_at = expires_at
        elif subscribed:
            profile.subscription_expires_at = utcnow() + timedelta(days=30)
        await db.commit()
        await db.refresh(profile)
        return user, profile

    return _make


@pytest.fixture
def make_order(db: AsyncSession) -> Callable[..., Awaitable[Order]]:
    async def _make(passenger_id: int, **overrides: Any) -> Order:
        values = dict(
            pickup_latitude=JAKARTA[0],
            pickup_longitude=JAKARTA[1],
            pickup_address="Jakarta Central Plaza",
            destination_latitude=-6.1751,
            destination_longitude=106.8650,
            destination_address="Jakarta North Mall",
            estimated_fare=25000.0,
        )
        values.update(overrides)
        return await create_order(db, passenger_id=passenger_id, **values)

    return _make
