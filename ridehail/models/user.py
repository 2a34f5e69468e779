"""
User model for passengers and drivers, plus the driver profile.
"""

from sqlalchemy import Column, Integer, String, Numeric, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from datetime import datetime
from typing import Optional
import enum
from ridehail.core.database import Base, enum_values
from ridehail.core.geo import as_utc, utcnow

class UserRole(str, enum.Enum):
    PASSENGER = "passenger"
    DRIVER = "driver"

class User(Base):
    """User model for both passengers and drivers."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=False)
    phone = Column(String, nullable=False)
    role = Column(Enum(UserRole, name="user_role", values_callable=enum_values), nullable=False)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    driver_profile = relationship("DriverProfile", back_populates="user", uselist=False)

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

class DriverProfile(Base):
    """Vehicle data, location and eligibility of a driver."""

    __tablename__ = "driver_profiles"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), unique=True, nullable=False)

    # Vehicle data, empty until the driver fills it in
    license_number = Column(String, nullable=False, default="")
    vehicle_type = Column(String, nullable=False, default="")
    vehicle_plate = Column(String, nullable=False, default="")

    # Location data
    is_available = Column(Boolean, nullable=False, default=False)
    current_latitude = Column(Numeric(10, 8, asdecimal=False), nullable=True)
    current_longitude = Column(Numeric(11, 8, asdecimal=False), nullable=True)

    # Copy of the latest subscription's expires_at
    subscription_expires_at = Column(DateTime(timezone=True), nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="driver_profile")

    def has_active_subscription(self, now: Optional[datetime] = None) -> bool:
        """True when subscription_expires_at is set and later than now."""
        expires_at = as_utc(self.subscription_expires_at)
        if expires_at is None:
            return False
        return expires_at > (now or utcnow())

    def has_location(self) -> bool:
        return self.current_latitude is not None and self.current_longitude is not None

    def __repr__(self):
        return f"<DriverProfile(id={self.id}, user_id={self.user_id}, available={self.is_available})>"
