"""
Public submission endpoint for API v1.

Customers post their preferred days, time windows, contact details
and address here.  The body is validated by
``validate_booking_request`` and, when clean, stored through
``BookingRequestService``.  No authentication is required.
"""

import json
import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, Request, status

from booking_request_api.app.api.v1.dependencies import get_booking_request_service, get_settings
from booking_request_api.app.core.config import Settings
from booking_request_api.app.schemas.booking_request import BookingRequestCreated
from booking_request_api.app.services.booking_request_service import BookingRequestService
from booking_request_api.app.services.validation import validate_booking_request

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/booking-request", response_model=BookingRequestCreated)
async def submit_booking_request(
    request: Request,
    settings: Settings = Depends(get_settings),
    service: BookingRequestService = Depends(get_booking_request_service),
) -> BookingRequestCreated:
    """Validate and store a booking request.

    Returns ``{"ok": true, "request_id": ...}``.  Validation problems
    are returned together as ``{"ok": false, "errors": [...]}`` with
    status 400.
    """
    raw = await request.body()
    if len(raw) > settings.max_body_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail="Request body too large.",
        )
    try:
        body = json.loads(raw) if raw else None
    except (ValueError, RecursionError):
        # RecursionError: nesting deeper than the decoder can follow
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=["Request body must be valid JSON."],
        )

    result = validate_booking_request(body, default_state=settings.default_state)
    if result.errors:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=result.errors)

    try:
        request_id = await service.create(result.to_record())
    except sqlite3.Error:
        logger.exception("Insert of booking request failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database insert failed.",
        )
    return BookingRequestCreated(request_id=request_id)
