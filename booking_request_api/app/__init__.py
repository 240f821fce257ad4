"""
Application package initializer.

This package contains the entrypoint for the API and its submodules:
``core`` (configuration, logging, database handle and the admin key
guard), ``schemas`` (Pydantic payloads), ``services`` (validation and
persistence) and ``api`` (versioned routers).
"""

from .main import app  # noqa: F401
