"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from
environment variables.  Defaults are provided for all fields so the
service starts without any configuration, although admin routes stay
locked until ``ADMIN_API_KEY`` is set.
"""

import os
from dataclasses import dataclass, field


def _env(name: str, default: str) -> str:
    return os.getenv(name, default)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: _env("PROJECT_NAME", "Booking Request API"))
    api_version: str = field(default_factory=lambda: _env("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: _env("LOG_LEVEL", "INFO"))
    # Optional path of a log file in addition to console output.
    log_file: str = field(default_factory=lambda: _env("LOG_FILE", ""))

    # Path of the SQLite database.  Relative paths are resolved against
    # the project root by the ``db`` module; ``:memory:`` keeps the
    # data for the lifetime of the process only.
    database_url: str = field(default_factory=lambda: _env("DATABASE_URL", "booking_requests.db"))

    # Shared secret for the admin routes.  When empty every admin
    # request is refused.
    admin_api_key: str = field(default_factory=lambda: _env("ADMIN_API_KEY", ""))

    # Region code stored when a submission omits ``address.state``.
    default_state: str = field(default_factory=lambda: _env("DEFAULT_STATE", "UT"))

    # Largest accepted request body for public submissions, in bytes.
    max_body_bytes: int = field(default_factory=lambda: int(_env("MAX_BODY_BYTES", str(200 * 1024))))


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.  Environment variables
# should be set before importing this module.
settings = Settings()
