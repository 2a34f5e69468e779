"""
User management API endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from ridehail.core.database import get_db
from ridehail.models.user import UserRole
from ridehail.api.v1.schemas import UserCreate, UserResponse, OrderResponse
from ridehail.services import orders as order_service
from ridehail.services import users as user_service

router = APIRouter()

@router.post("/", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def register_user(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db)
):
    """Register a new passenger or driver."""
    return await user_service.register_user(
        db,
        email=user_data.email,
        password=user_data.password,
        full_name=user_data.full_name,
        phone=user_data.phone,
        role=user_data.role,
    )

@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get user by ID."""
    return await user_service.get_user(db, user_id)

@router.get("/{user_id}/orders", response_model=List[OrderResponse])
async def get_user_orders(
    user_id: int,
    role: UserRole,
    db: AsyncSession = Depends(get_db)
):
    """Order history of a passenger, or orders assigned to a driver."""
    return await order_service.get_user_orders(db, user_id, role)
