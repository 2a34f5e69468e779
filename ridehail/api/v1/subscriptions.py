"""
Driver subscription API endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.database import get_db
from ridehail.api.v1.schemas import DriverSubscriptionCreate, DriverSubscriptionResponse
from ridehail.services import subscriptions as subscription_service

router = APIRouter()

@router.post("/", response_model=DriverSubscriptionResponse, status_code=status.HTTP_201_CREATED)
async def create_driver_subscription(
    subscription_data: DriverSubscriptionCreate,
    db: AsyncSession = Depends(get_db)
):
    """Buy a subscription window for a driver."""
    return await subscription_service.create_driver_subscription(
        db,
        driver_id=subscription_data.driver_id,
        subscription_type=subscription_data.subscription_type,
        amount=subscription_data.amount,
    )
