"""
Driver management API endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from ridehail.core.config import settings
from ridehail.core.database import get_db
from ridehail.api.v1.schemas import (
    DriverProfileCreate, DriverProfileResponse, DriverLocationUpdate, OrderResponse
)
from ridehail.services import drivers as driver_service
from ridehail.services import matching as matching_service

router = APIRouter()

@router.post("/profile", response_model=DriverProfileResponse, status_code=status.HTTP_201_CREATED)
async def create_driver_profile(
    profile_data: DriverProfileCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create the vehicle profile of a driver."""
    return await driver_service.create_driver_profile(
        db,
        user_id=profile_data.user_id,
        license_number=profile_data.license_number,
        vehicle_type=profile_data.vehicle_type,
        vehicle_plate=profile_data.vehicle_plate,
    )

@router.get("/nearby", response_model=List[DriverProfileResponse])
async def get_nearby_drivers(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius_km: float = Query(settings.DEFAULT_SEARCH_RADIUS_KM, gt=0),
    db: AsyncSession = Depends(get_db)
):
    """Available subscribed drivers around a point, nearest first."""
    return await matching_service.get_nearby_drivers(db, latitude, longitude, radius_km)

@router.put("/{driver_id}/location", response_model=DriverProfileResponse)
async def update_driver_location(
    driver_id: int,
    location_update: DriverLocationUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Update driver's current location and availability."""
    return await driver_service.update_driver_location(
        db,
        driver_id=driver_id,
        latitude=location_update.latitude,
        longitude=location_update.longitude,
        is_available=location_update.is_available,
    )

@router.get("/{driver_id}/available-orders", response_model=List[OrderResponse])
async def get_available_orders(
    driver_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Pending orders the driver can bid on."""
    return await matching_service.get_available_orders(db, driver_id)
