"""
Driver subscription model.
"""

from sqlalchemy import Column, Integer, Numeric, DateTime, Enum, ForeignKey
from sqlalchemy.sql import func
import enum
from ridehail.core.database import Base, enum_values
from ridehail.models.order import PaymentStatus

class SubscriptionType(str, enum.Enum):
    MONTHLY = "monthly"

class DriverSubscription(Base):
    """A purchased window during which a driver may bid and be matched."""

    __tablename__ = "driver_subscriptions"

    id = Column(Integer, primary_key=True, index=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    subscription_type = Column(
        Enum(SubscriptionType, name="subscription_type", values_callable=enum_values),
        nullable=False,
    )
    amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    payment_status = Column(
        Enum(PaymentStatus, name="payment_status", values_callable=enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    starts_at = Column(DateTime(timezone=True), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<DriverSubscription(id={self.id}, driver_id={self.driver_id}, expires_at={self.expires_at})>"
