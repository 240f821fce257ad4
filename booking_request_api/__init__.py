"""
Top‑level package for the Booking Request API.

This file makes ``booking_request_api`` a Python package so that
modules within ``app`` can be imported using fully qualified names
like ``booking_request_api.app.main``.

The package provides no public exports; all functionality lives in
submodules under ``app``.
"""

__all__ = []
