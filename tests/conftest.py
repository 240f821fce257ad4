import copy

import pytest
from fastapi.testclient import TestClient

from booking_request_api.app.core.config import Settings
from booking_request_api.app.main import create_app

ADMIN_KEY = "test-admin-key"

VALID_PAYLOAD = {
    "preferences": {"dates": ["2025-03-01"], "windows": ["morning"]},
    "customer": {"name": "Jane Doe", "phone": "(555) 123-4567"},
    "address": {"line1": "1 Main St", "city": "Provo", "zip": "84601"},
}


@pytest.fixture
def settings():
    return Settings(
        database_url=":memory:",
        admin_api_key=ADMIN_KEY,
        default_state="UT",
        log_level="WARNING",
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    # Entering the context runs the startup handler (opens the
    # in-memory database and migrates it).
    with TestClient(app) as c:
        yield c


@pytest.fixture
def admin_headers():
    return {"X-Admin-Key": ADMIN_KEY}


@pytest.fixture
def payload():
    return copy.deepcopy(VALID_PAYLOAD)
