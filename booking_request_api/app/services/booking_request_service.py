"""
Persistence for booking requests.

``BookingRequestService`` wraps the ``booking_requests`` table.  It is
built around an explicit ``Database`` handle rather than opening its
own connections, so the application (or a test) decides which
database it talks to.  Every operation is a single SQL statement;
SQLite's per-statement atomicity is the only concurrency control.

Storage failures propagate as ``sqlite3.Error``.  Domain failures are
raised as ``InvalidStatusError`` and ``BookingRequestNotFound``.
"""

import json
import logging
import sqlite3
from datetime import datetime, timezone
from typing import List

from booking_request_api.app.core.db import Database
from booking_request_api.app.schemas.booking_request import (
    BOOKING_STATUSES,
    STATUS_REQUESTED,
    BookingRequestCreate,
    BookingRequestRead,
)

logger = logging.getLogger(__name__)

MAX_LIST_LIMIT = 500

_COLUMNS = (
    "id, created_at, preferred_dates_json, preferred_windows_json, name, phone, email, "
    "line1, line2, city, state, zip, notes, status"
)


class InvalidStatusError(ValueError):
    """Raised for a status outside ``BOOKING_STATUSES``."""


class BookingRequestNotFound(LookupError):
    """Raised when no booking request has the given id."""


def _row_to_read(row: sqlite3.Row) -> BookingRequestRead:
    data = dict(row)
    data["preferred_dates"] = json.loads(data.pop("preferred_dates_json"))
    data["preferred_windows"] = json.loads(data.pop("preferred_windows_json"))
    # datetime('now') stores UTC without an offset
    data["created_at"] = datetime.fromisoformat(data["created_at"]).replace(tzinfo=timezone.utc)
    return BookingRequestRead.model_validate(data)


class BookingRequestService:
    """Service for storing and administering booking requests."""

    def __init__(self, database: Database) -> None:
        self.database = database

    async def create(self, record: BookingRequestCreate) -> int:
        """Insert a validated request and return its new id.

        ``id``, ``created_at`` and ``status`` (``requested``) come from
        the column defaults.
        """
        with self.database.cursor() as cursor:
            cursor.execute(
                """
                INSERT INTO booking_requests
                (preferred_dates_json, preferred_windows_json, name, phone, email,
                 line1, line2, city, state, zip, notes)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    json.dumps(record.preferred_dates),
                    json.dumps(record.preferred_windows),
                    record.name,
                    record.phone,
                    record.email,
                    record.line1,
                    record.line2,
                    record.city,
                    record.state,
                    record.zip,
                    record.notes,
                ),
            )
            request_id = cursor.lastrowid
        logger.info("Stored booking request %s", request_id)
        return request_id

    async def list_by_status(
        self, status: str = STATUS_REQUESTED, limit: int = MAX_LIST_LIMIT
    ) -> List[BookingRequestRead]:
        """Return requests with the given status, newest first.

        At most ``MAX_LIST_LIMIT`` rows are returned whatever ``limit``
        says.  A status nobody has yields an empty list.
        """
        limit = max(1, min(limit, MAX_LIST_LIMIT))
        with self.database.cursor() as cursor:
            rows = cursor.execute(
                f"""
                SELECT {_COLUMNS} FROM booking_requests
                WHERE status = ?
                ORDER BY datetime(created_at) DESC, id DESC
                LIMIT ?
                """,
                (status, limit),
            ).fetchall()
        return [_row_to_read(row) for row in rows]

    async def get(self, request_id: int) -> BookingRequestRead:
        with self.database.cursor() as cursor:
            row = cursor.execute(
                f"SELECT {_COLUMNS} FROM booking_requests WHERE id = ?",
                (request_id,),
            ).fetchone()
        if row is None:
            raise BookingRequestNotFound(f"Booking request {request_id} not found")
        return _row_to_read(row)

    async def update_status(self, request_id: int, status: str) -> None:
        """Set ``status`` on one request, leaving every other column alone.

        Any of the three statuses may replace any other.  The value is
        checked before the database is touched.
        """
        if status not in BOOKING_STATUSES:
            raise InvalidStatusError(f"Invalid status: {status}")
        with self.database.cursor() as cursor:
            cursor.execute(
                "UPDATE booking_requests SET status = ? WHERE id = ?",
                (status, request_id),
            )
            updated = cursor.rowcount
        if updated == 0:
            raise BookingRequestNotFound(f"Booking request {request_id} not found")
        logger.info("Booking request %s set to %s", request_id, status)

    async def ping(self) -> None:
        """Run a trivial query; raises ``sqlite3.Error`` if the store is unusable."""
        with self.database.cursor() as cursor:
            cursor.execute("SELECT 1").fetchone()
