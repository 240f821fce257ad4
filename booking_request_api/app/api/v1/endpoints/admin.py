"""
Admin endpoints for API v1.

Listing, inspecting and re-statusing booking requests.  Every route
in this module requires the shared admin key (see
``core.security.require_admin``); requests without it get a 401
before any database access happens.
"""

import logging
import sqlite3

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status

from booking_request_api.app.api.v1.dependencies import get_booking_request_service
from booking_request_api.app.core.security import require_admin
from booking_request_api.app.schemas.booking_request import (
    STATUS_REQUESTED,
    BookingRequestDetail,
    BookingRequestList,
    OkResponse,
    StatusUpdate,
)
from booking_request_api.app.services.booking_request_service import (
    MAX_LIST_LIMIT,
    BookingRequestNotFound,
    BookingRequestService,
    InvalidStatusError,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.get("/requests", response_model=BookingRequestList)
async def list_booking_requests(
    status_filter: str = Query(
        STATUS_REQUESTED,
        alias="status",
        description="Only return requests with this status (requested, scheduled or cancelled)",
    ),
    limit: int = Query(MAX_LIST_LIMIT, ge=1, le=MAX_LIST_LIMIT, description="Maximum number of requests to return"),
    service: BookingRequestService = Depends(get_booking_request_service),
) -> BookingRequestList:
    """List booking requests with the given status, newest first."""
    try:
        requests = await service.list_by_status(status_filter.strip() or STATUS_REQUESTED, limit=limit)
    except sqlite3.Error:
        logger.exception("Listing booking requests failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database read failed.",
        )
    return BookingRequestList(requests=requests)


@router.get("/requests/{request_id}", response_model=BookingRequestDetail)
async def get_booking_request(
    request_id: int = Path(..., description="ID of the booking request"),
    service: BookingRequestService = Depends(get_booking_request_service),
) -> BookingRequestDetail:
    try:
        booking_request = await service.get(request_id)
    except BookingRequestNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except sqlite3.Error:
        logger.exception("Reading booking request %s failed", request_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database read failed.",
        )
    return BookingRequestDetail(request=booking_request)


@router.patch("/requests/{request_id}", response_model=OkResponse)
async def update_booking_request_status(
    request_id: int = Path(..., description="ID of the booking request"),
    update: StatusUpdate | None = None,
    service: BookingRequestService = Depends(get_booking_request_service),
) -> OkResponse:
    """Change the status of a booking request.

    Any of ``requested``, ``scheduled`` and ``cancelled`` may be set
    regardless of the current value.  Anything else is a 400; an
    unknown id is a 404.
    """
    new_status = update.status if update else None
    try:
        await service.update_status(request_id, new_status)
    except InvalidStatusError:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid status.")
    except BookingRequestNotFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except sqlite3.Error:
        logger.exception("Updating booking request %s failed", request_id)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Database update failed.",
        )
    return OkResponse()
