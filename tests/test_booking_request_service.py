"""
Tests for the booking request persistence service.
"""

import asyncio
import sqlite3

import pytest

from booking_request_api.app.core.db import Database, init_db
from booking_request_api.app.schemas.booking_request import BookingRequestCreate
from booking_request_api.app.services.booking_request_service import (
    BookingRequestNotFound,
    BookingRequestService,
    InvalidStatusError,
)


@pytest.fixture
def database():
    db = Database(":memory:")
    db.open()
    init_db(db)
    yield db
    db.close()


@pytest.fixture
def service(database):
    return BookingRequestService(database)


def _record(name="Jane Doe", **overrides):
    fields = dict(
        preferred_dates=["2025-03-01", "2025-03-02"],
        preferred_windows=["morning", "evening"],
        name=name,
        phone="5551234567",
        line1="1 Main St",
        city="Provo",
        state="UT",
        zip="84601",
    )
    fields.update(overrides)
    return BookingRequestCreate(**fields)


def test_create_assigns_id_and_defaults(service):
    request_id = asyncio.run(service.create(_record(email="jane@example.com", notes="Gate code 42")))

    stored = asyncio.run(service.get(request_id))
    assert stored.id == request_id
    assert stored.status == "requested"
    assert stored.created_at is not None
    assert stored.preferred_dates == ["2025-03-01", "2025-03-02"]
    assert stored.preferred_windows == ["morning", "evening"]
    assert stored.email == "jane@example.com"
    assert stored.notes == "Gate code 42"
    assert stored.line2 is None


def test_ids_are_unique(service):
    first = asyncio.run(service.create(_record()))
    second = asyncio.run(service.create(_record()))

    assert first != second


def test_list_by_status_newest_first(service):
    ids = [asyncio.run(service.create(_record(name=f"Customer {i}"))) for i in range(3)]

    listed = asyncio.run(service.list_by_status())

    assert [r.id for r in listed] == list(reversed(ids))


def test_list_respects_limit_and_cap(service):
    for i in range(4):
        asyncio.run(service.create(_record(name=f"Customer {i}")))

    assert len(asyncio.run(service.list_by_status("requested", limit=2))) == 2
    assert len(asyncio.run(service.list_by_status("requested", limit=10_000))) == 4


def test_list_unknown_or_empty_status_returns_empty(service):
    asyncio.run(service.create(_record()))

    assert asyncio.run(service.list_by_status("scheduled")) == []
    assert asyncio.run(service.list_by_status("archived")) == []


@pytest.mark.parametrize(
    "path",
    [
        ("scheduled", "cancelled", "requested"),
        ("cancelled", "scheduled", "cancelled"),
    ],
)
def test_any_status_can_follow_any_other(service, path):
    request_id = asyncio.run(service.create(_record()))

    for status in path:
        asyncio.run(service.update_status(request_id, status))
        assert asyncio.run(service.get(request_id)).status == status


def test_update_status_only_touches_status(service):
    request_id = asyncio.run(service.create(_record()))
    before = asyncio.run(service.get(request_id))

    asyncio.run(service.update_status(request_id, "scheduled"))

    after = asyncio.run(service.get(request_id))
    assert after.model_dump(exclude={"status"}) == before.model_dump(exclude={"status"})
    assert after.status == "scheduled"


@pytest.mark.parametrize("status", ["done", "", None, "Scheduled"])
def test_invalid_status_is_rejected_without_change(service, status):
    request_id = asyncio.run(service.create(_record()))

    with pytest.raises(InvalidStatusError):
        asyncio.run(service.update_status(request_id, status))

    assert asyncio.run(service.get(request_id)).status == "requested"


def test_update_unknown_id_is_not_found(service):
    request_id = asyncio.run(service.create(_record()))

    with pytest.raises(BookingRequestNotFound):
        asyncio.run(service.update_status(request_id + 100, "scheduled"))

    assert [r.id for r in asyncio.run(service.list_by_status("requested"))] == [request_id]
    assert asyncio.run(service.list_by_status("scheduled")) == []


def test_get_unknown_id_is_not_found(service):
    with pytest.raises(BookingRequestNotFound):
        asyncio.run(service.get(1))


def test_closed_database_raises_storage_error(database, service):
    database.close()

    with pytest.raises(sqlite3.Error):
        asyncio.run(service.create(_record()))
    with pytest.raises(sqlite3.Error):
        asyncio.run(service.ping())


def test_schema_rejects_out_of_enum_status(database):
    with pytest.raises(sqlite3.IntegrityError):
        with database.cursor() as cursor:
            cursor.execute(
                "INSERT INTO booking_requests (preferred_dates_json, preferred_windows_json, name, phone, "
                "line1, city, state, zip, status) VALUES ('[]', '[]', 'a', '1', 'b', 'c', 'UT', 'd', 'done')"
            )


def test_migrations_are_idempotent(database):
    init_db(database)

    with database.cursor() as cursor:
        versions = [row["version"] for row in cursor.execute("SELECT version FROM migrations ORDER BY version")]
    assert versions == [1, 2]


def test_created_at_is_utc_aware(service):
    from datetime import timedelta

    request_id = asyncio.run(service.create(_record()))

    assert asyncio.run(service.get(request_id)).created_at.utcoffset() == timedelta(0)


def test_cursor_on_closed_database_is_a_storage_error(database):
    database.close()
    database.close()

    with pytest.raises(sqlite3.ProgrammingError):
        with database.cursor():
            pass
