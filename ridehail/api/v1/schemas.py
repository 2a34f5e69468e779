"""
Pydantic schemas for API request/response models.
"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field
from typing import Optional, Dict, Any
from datetime import datetime

from ridehail.core.config import settings
from ridehail.models.order import OrderStatus, PaymentStatus
from ridehail.models.subscription import SubscriptionType
from ridehail.models.user import UserRole

# User schemas
class UserCreate(BaseModel):
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=settings.MIN_PASSWORD_LENGTH, description="Plain password")
    full_name: str = Field(..., min_length=1, description="User full name")
    phone: str = Field(..., min_length=settings.MIN_PHONE_LENGTH, description="User phone number")
    role: UserRole = Field(..., description="Passenger or driver")

class UserResponse(BaseModel):
    id: int
    email: str
    full_name: str
    phone: str
    role: UserRole
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

# Driver profile schemas
class DriverProfileCreate(BaseModel):
    user_id: int
    license_number: str = Field(..., min_length=1)
    vehicle_type: str = Field(..., min_length=1)
    vehicle_plate: str = Field(..., min_length=1)

class DriverLocationUpdate(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    is_available: bool = Field(..., description="Driver availability status")

class DriverProfileResponse(BaseModel):
    id: int
    user_id: int
    license_number: str
    vehicle_type: str
    vehicle_plate: str
    is_available: bool
    current_latitude: Optional[float]
    current_longitude: Optional[float]
    subscription_expires_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

# Order schemas
class OrderCreate(BaseModel):
    passenger_id: int
    pickup_latitude: float = Field(..., ge=-90, le=90, description="Pickup latitude")
    pickup_longitude: float = Field(..., ge=-180, le=180, description="Pickup longitude")
    pickup_address: str = Field(..., min_length=1, description="Pickup address")
    destination_latitude: float = Field(..., ge=-90, le=90, description="Destination latitude")
    destination_longitude: float = Field(..., ge=-180, le=180, description="Destination longitude")
    destination_address: str = Field(..., min_length=1, description="Destination address")
    estimated_fare: float = Field(..., gt=0, description="Fare proposed by the passenger")

class OrderStatusUpdate(BaseModel):
    status: OrderStatus
    final_fare: Optional[float] = Field(None, gt=0, description="Final fare, applied on completion")

class OrderResponse(BaseModel):
    id: int
    passenger_id: int
    driver_id: Optional[int]
    pickup_latitude: float
    pickup_longitude: float
    pickup_address: str
    destination_latitude: float
    destination_longitude: float
    destination_address: str
    estimated_fare: float
    final_fare: Optional[float]
    status: OrderStatus
    payment_status: PaymentStatus
    qris_payment_id: Optional[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

# Bid schemas
class DriverBidCreate(BaseModel):
    driver_id: int
    bid_amount: float = Field(..., gt=0)
    estimated_arrival_minutes: int = Field(..., gt=0)

class BidAccept(BaseModel):
    bid_id: int
    passenger_id: int

class DriverBidResponse(BaseModel):
    id: int
    order_id: int
    driver_id: int
    bid_amount: float
    estimated_arrival_minutes: int
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

# Payment schemas
class QrisPaymentRequest(BaseModel):
    order_id: int
    passenger_id: int
    amount: float = Field(..., gt=0)

# Subscription schemas
class DriverSubscriptionCreate(BaseModel):
    driver_id: int
    subscription_type: SubscriptionType
    amount: float = Field(..., gt=0)

class DriverSubscriptionResponse(BaseModel):
    id: int
    driver_id: int
    subscription_type: SubscriptionType
    amount: float
    payment_status: PaymentStatus
    starts_at: datetime
    expires_at: datetime
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

# Error schemas
class ErrorResponse(BaseModel):
    error: str
    message: str
    details: Optional[Dict[str, Any]] = None

# Health check schema
class HealthResponse(BaseModel):
    status: str
    service: str
    timestamp: datetime
    database_connected: bool
