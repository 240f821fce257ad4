"""
Top‑level router for version 1 of the API.

Aggregates the public submission route, the admin routes under
``/admin`` and the health probe.
"""

from fastapi import APIRouter

from .endpoints import admin, booking_requests, health

router = APIRouter()

router.include_router(booking_requests.router, tags=["booking requests"])
router.include_router(admin.router, prefix="/admin", tags=["admin"])
router.include_router(health.router, tags=["health"])
