"""Entry point that serves the Booking Request API.

Host and port are read from the ``HOST`` and ``PORT`` environment
variables (defaults ``0.0.0.0`` and ``3001``).  All other
configuration is read by ``booking_request_api.app.core.config``.

Usage:
    python run.py
"""
import asyncio
import logging
import os

from uvicorn import Config, Server

from booking_request_api.app.main import app


async def main() -> None:
    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "3001"))
    # Logging is configured by the app (core.logging_config).
    config = Config(app=app, host=host, port=port, reload=False, log_config=None)
    server = Server(config)
    logging.getLogger(__name__).info("API running: http://%s:%s", host, port)
    await server.serve()


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, SystemExit):
        pass
