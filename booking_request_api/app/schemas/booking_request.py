"""
Pydantic models for booking requests.

``BookingRequestCreate`` is the normalized record produced by the
validator and stored by the service.  ``BookingRequestRead`` is what
admins get back; the JSON columns for dates and windows are decoded
into lists.  The remaining models are the ``{"ok": ...}`` envelopes
returned by the endpoints.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

TIME_WINDOWS = ("morning", "afternoon", "evening")

STATUS_REQUESTED = "requested"
STATUS_SCHEDULED = "scheduled"
STATUS_CANCELLED = "cancelled"
BOOKING_STATUSES = (STATUS_REQUESTED, STATUS_SCHEDULED, STATUS_CANCELLED)


class BookingRequestCreate(BaseModel):
    """Normalized submission ready to be inserted."""

    preferred_dates: List[str] = Field(..., min_length=1, examples=[["2025-03-01"]])
    preferred_windows: List[str] = Field(..., min_length=1, examples=[["morning"]])

    name: str
    phone: str = Field(..., description="Digits only")
    email: Optional[str] = None

    line1: str
    line2: Optional[str] = None
    city: str
    state: str
    zip: str

    notes: Optional[str] = None


class BookingRequestRead(BookingRequestCreate):
    id: int
    created_at: datetime
    status: str = STATUS_REQUESTED


class StatusUpdate(BaseModel):
    """Body of ``PATCH /admin/requests/{id}``.

    ``status`` is checked by the service rather than here so that an
    unknown value yields a 400 with the usual error envelope.
    """

    status: Optional[str] = Field(default=None, examples=[STATUS_SCHEDULED])


class OkResponse(BaseModel):
    ok: bool = True


class BookingRequestCreated(OkResponse):
    request_id: int


class BookingRequestList(OkResponse):
    requests: List[BookingRequestRead]


class BookingRequestDetail(OkResponse):
    request: BookingRequestRead
