"""
Liveness probe that also checks the database is reachable.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, status

from booking_request_api.app.api.v1.dependencies import get_booking_request_service
from booking_request_api.app.services.booking_request_service import BookingRequestService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health(service: BookingRequestService = Depends(get_booking_request_service)) -> dict:
    try:
        await service.ping()
    except sqlite3.Error:
        logger.exception("Health check could not reach the database")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database unavailable.",
        )
    return {"ok": True, "database": "up"}
