"""
SQLite database handle and simple migration system.

The ``Database`` class wraps a single SQLite connection that lives
for the lifetime of the application: it is opened on startup, handed
to the services that need it and closed on shutdown.  Each statement
runs in its own transaction under a lock, so the shared connection can
be used from FastAPI's worker threads.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

MEMORY_DATABASE = ":memory:"

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: Initial schema
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS booking_requests (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            created_at TEXT NOT NULL DEFAULT (datetime('now')),

            preferred_dates_json TEXT NOT NULL,
            preferred_windows_json TEXT NOT NULL,

            name TEXT NOT NULL,
            phone TEXT NOT NULL,
            email TEXT,

            line1 TEXT NOT NULL,
            line2 TEXT,
            city TEXT NOT NULL,
            state TEXT NOT NULL,
            zip TEXT NOT NULL,

            notes TEXT,
            status TEXT NOT NULL DEFAULT 'requested'
                CHECK (status IN ('requested', 'scheduled', 'cancelled'))
        );
        """,
    ),
    # Migration 2: index backing the admin listing (filter by status,
    # newest first)
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_booking_requests_status_created
            ON booking_requests(status, created_at);
        """,
    ),
]


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    ``:memory:`` and absolute paths are returned unchanged.  Relative
    paths are resolved against the project root.
    """
    if database_url == MEMORY_DATABASE or os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Owner of the application's SQLite connection."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)
        self._conn: Optional[sqlite3.Connection] = None
        self._lock = threading.Lock()

    def open(self) -> None:
        """Open the connection if it is not open yet."""
        if self._conn is not None:
            return
        # Rows are returned as dict‑like objects keyed by column name.
        # The connection is shared between worker threads; access goes
        # through ``cursor()`` which holds ``_lock``.
        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        self._conn = conn
        logger.info("Opened database %s", self.path)

    def close(self) -> None:
        with self._lock:
            if self._conn is None:
                return
            self._conn.close()
            self._conn = None
        logger.info("Closed database %s", self.path)

    @contextmanager
    def cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor; commit on success, roll back on error.

        Raises ``sqlite3.ProgrammingError`` when the handle is closed.
        """
        with self._lock:
            # Checked under the lock so a concurrent close() cannot
            # slip in between the check and the use.
            conn = self._conn
            if conn is None:
                raise sqlite3.ProgrammingError("Database connection is not open")
            cur = conn.cursor()
            try:
                yield cur
                conn.commit()
            except Exception:
                conn.rollback()
                raise
            finally:
                cur.close()


def init_db(database: Database) -> None:
    """Apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any new entries of
    ``MIGRATIONS``.  New migrations are appended with an incremented
    version number.
    """
    with database.cursor() as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                # executescript commits any pending transaction first
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
                logger.info("Applied migration %s", version)
