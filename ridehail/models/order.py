"""
Order model for ride requests and driver bids placed on them.
"""

from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from ridehail.core.database import Base, enum_values

class OrderStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

class PaymentStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"

class Order(Base):
    """Order model for managing ride requests."""

    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    # User relationships
    passenger_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)

    # Location data
    pickup_latitude = Column(Numeric(10, 8, asdecimal=False), nullable=False)
    pickup_longitude = Column(Numeric(11, 8, asdecimal=False), nullable=False)
    pickup_address = Column(String, nullable=False)

    destination_latitude = Column(Numeric(10, 8, asdecimal=False), nullable=False)
    destination_longitude = Column(Numeric(11, 8, asdecimal=False), nullable=False)
    destination_address = Column(String, nullable=False)

    # Pricing
    estimated_fare = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    final_fare = Column(Numeric(10, 2, asdecimal=False), nullable=True)

    status = Column(
        Enum(OrderStatus, name="order_status", values_callable=enum_values),
        nullable=False,
        default=OrderStatus.PENDING,
        index=True,
    )
    payment_status = Column(
        Enum(PaymentStatus, name="payment_status", values_callable=enum_values),
        nullable=False,
        default=PaymentStatus.PENDING,
    )
    qris_payment_id = Column(String, nullable=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    bids = relationship("DriverBid", back_populates="order")

    def __repr__(self):
        return f"<Order(id={self.id}, status={self.status}, passenger_id={self.passenger_id})>"

class DriverBid(Base):
    """A driver's price and ETA offer on a pending order."""

    __tablename__ = "driver_bids"

    id = Column(Integer, primary_key=True, index=True)
    order_id = Column(Integer, ForeignKey("orders.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("users.id"), nullable=False)
    bid_amount = Column(Numeric(10, 2, asdecimal=False), nullable=False)
    estimated_arrival_minutes = Column(Integer, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    order = relationship("Order", back_populates="bids")

    def __repr__(self):
        return f"<DriverBid(id={self.id}, order_id={self.order_id}, amount={self.bid_amount})>"
