"""
Order management API endpoints.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from ridehail.core.database import get_db
from ridehail.api.v1.schemas import (
    OrderCreate, OrderResponse, OrderStatusUpdate,
    DriverBidCreate, DriverBidResponse, BidAccept
)
from ridehail.services import bids as bid_service
from ridehail.services import orders as order_service

router = APIRouter()

@router.post("/", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    order_data: OrderCreate,
    db: AsyncSession = Depends(get_db)
):
    """Create a new ride order."""
    return await order_service.create_order(db, **order_data.model_dump())

@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
    order_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Get order details by ID."""
    return await order_service.get_order(db, order_id)

@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: int,
    status_update: OrderStatusUpdate,
    db: AsyncSession = Depends(get_db)
):
    """Move the order to its next status."""
    return await order_service.update_order_status(
        db,
        order_id=order_id,
        new_status=status_update.status,
        final_fare=status_update.final_fare,
    )

@router.get("/{order_id}/bids", response_model=List[DriverBidResponse])
async def get_order_bids(
    order_id: int,
    db: AsyncSession = Depends(get_db)
):
    """Bids on a pending order, cheapest and fastest first."""
    return await bid_service.get_order_bids(db, order_id)

@router.post("/{order_id}/bids", response_model=DriverBidResponse, status_code=status.HTTP_201_CREATED)
async def create_driver_bid(
    order_id: int,
    bid_data: DriverBidCreate,
    db: AsyncSession = Depends(get_db)
):
    """Place a driver's bid on a pending order."""
    return await bid_service.create_driver_bid(
        db,
        order_id=order_id,
        driver_id=bid_data.driver_id,
        bid_amount=bid_data.bid_amount,
        estimated_arrival_minutes=bid_data.estimated_arrival_minutes,
    )

@router.post("/{order_id}/accept-bid", response_model=OrderResponse)
async def accept_bid(
    order_id: int,
    acceptance: BidAccept,
    db: AsyncSession = Depends(get_db)
):
    """Passenger accepts one of the bids on their order."""
    return await order_service.accept_bid(
        db,
        order_id=order_id,
        bid_id=acceptance.bid_id,
        passenger_id=acceptance.passenger_id,
    )
