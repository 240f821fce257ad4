"""
FastAPI dependencies shared by the v1 endpoints.

The settings object and the database handle live on ``app.state``
(see ``main.create_app``); these helpers hand them to the routes.
"""

from fastapi import Request

from booking_request_api.app.core.config import Settings
from booking_request_api.app.services.booking_request_service import BookingRequestService


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_booking_request_service(request: Request) -> BookingRequestService:
    return BookingRequestService(request.app.state.database)
