"""
Payment API endpoints.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ridehail.core.database import get_db
from ridehail.api.v1.schemas import QrisPaymentRequest, OrderResponse
from ridehail.services import payments as payment_service

router = APIRouter()

@router.post("/qris", response_model=OrderResponse)
async def process_qris_payment(
    payment: QrisPaymentRequest,
    db: AsyncSession = Depends(get_db)
):
    """Confirm a QRIS payment for an order."""
    return await payment_service.process_qris_payment(
        db,
        order_id=payment.order_id,
        passenger_id=payment.passenger_id,
        amount=payment.amount,
    )
