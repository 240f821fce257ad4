"""
Main entrypoint for the Booking Request API.

``create_app`` builds and configures the FastAPI application: logging,
the database handle, the admin key guard, routers and error handlers.
The module-level ``app`` is built from the environment, so the service
can be started with uvicorn::

    uvicorn booking_request_api.app.main:app --reload

Routes are mounted at the root and again under ``/api`` for clients
that use the prefixed paths.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings
from .core.db import Database, init_db
from .core.logging_config import setup_logging
from .core.security import AdminKeyGuard

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render errors as ``{"ok": false, "error": ...}``.

    A list ``detail`` (validation messages) is rendered under
    ``errors`` instead.
    """
    if isinstance(exc.detail, list):
        content = {"ok": False, "errors": exc.detail}
    else:
        content = {"ok": False, "error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def request_validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = error.get("msg", "Invalid value")
        errors.append(f"{location}: {message}" if location else message)
    return JSONResponse(status_code=400, content={"ok": False, "errors": errors})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"ok": False, "error": "Internal server error."})


def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Configuration to use.  Defaults to the module-level settings
        read from the environment.

    Returns
    -------
    FastAPI
        A configured application.  The database connection is opened
        on startup and closed on shutdown.
    """
    app_settings = app_settings or settings

    setup_logging(app_settings.log_level, app_settings.log_file or None)

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version)

    database = Database(app_settings.database_url)
    app.state.settings = app_settings
    app.state.database = database
    app.state.admin_guard = AdminKeyGuard(app_settings.admin_api_key)

    app.include_router(v1_router)
    app.include_router(v1_router, prefix="/api", include_in_schema=False)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed and applies migrations.
        database.open()
        init_db(database)
        if not app.state.admin_guard.enabled:
            logger.warning("ADMIN_API_KEY is not set; admin routes will refuse every request")

    @app.on_event("shutdown")
    async def shutdown_event() -> None:
        database.close()

    return app


app = create_app()
