"""
Tests for submission validation and normalization.
"""

import copy

import pytest

from booking_request_api.app.services.validation import (
    normalize_phone,
    validate_booking_request,
)
from tests.conftest import VALID_PAYLOAD


def _payload(**sections):
    body = copy.deepcopy(VALID_PAYLOAD)
    for key, value in sections.items():
        body[key] = value
    return body


def test_valid_submission_is_normalized():
    result = validate_booking_request(VALID_PAYLOAD, default_state="UT")

    assert result.ok
    assert result.errors == []
    record = result.to_record()
    assert record.preferred_dates == ["2025-03-01"]
    assert record.preferred_windows == ["morning"]
    assert record.name == "Jane Doe"
    assert record.phone == "5551234567"
    assert record.email is None
    assert record.state == "UT"
    assert record.line2 is None
    assert record.notes is None


@pytest.mark.parametrize("preferences", [{}, {"dates": []}, {"dates": "2025-03-01"}, None])
def test_missing_dates_asks_for_a_day(preferences):
    body = _payload(preferences=preferences)

    result = validate_booking_request(body, default_state="UT")

    assert "Select at least 1 day." in result.errors


@pytest.mark.parametrize("value", ["2025-3-1", "03/01/2025", "2025-03-01T10:00", "", "tomorrow"])
def test_malformed_date_is_reported(value):
    body = _payload(preferences={"dates": ["2025-03-02", value], "windows": ["evening"]})

    result = validate_booking_request(body, default_state="UT")

    assert result.errors == [f"Invalid date: {value}"]


def test_date_shape_only_no_calendar_check():
    body = _payload(preferences={"dates": ["2024-02-31"], "windows": ["afternoon"]})

    assert validate_booking_request(body, default_state="UT").ok


def test_non_ascii_digits_are_not_dates():
    body = _payload(preferences={"dates": ["２０２５-０３-０１"], "windows": ["morning"]})

    assert validate_booking_request(body, default_state="UT").errors == ["Invalid date: ２０２５-０３-０１"]


def test_missing_windows_and_unknown_window():
    missing = validate_booking_request(_payload(preferences={"dates": ["2025-03-01"]}), default_state="UT")
    unknown = validate_booking_request(
        _payload(preferences={"dates": ["2025-03-01"], "windows": ["morning", "night", "Morning"]}),
        default_state="UT",
    )

    assert missing.errors == ["Select at least 1 time window."]
    assert unknown.errors == ["Invalid window: night", "Invalid window: Morning"]


def test_all_problems_are_collected():
    result = validate_booking_request({}, default_state="UT")

    assert result.errors == [
        "Select at least 1 day.",
        "Select at least 1 time window.",
        "Name is required.",
        "Phone is required.",
        "Street address is required.",
        "City is required.",
        "ZIP is required.",
    ]
    with pytest.raises(ValueError):
        result.to_record()


@pytest.mark.parametrize("body", [None, [], "text", 42])
def test_non_object_body_counts_as_empty(body):
    result = validate_booking_request(body, default_state="UT")

    assert "Select at least 1 day." in result.errors
    assert "Name is required." in result.errors


def test_blank_fields_are_required_after_trim():
    body = _payload(
        customer={"name": "   ", "phone": "call me"},
        address={"line1": " ", "city": "\t", "zip": ""},
    )

    result = validate_booking_request(body, default_state="UT")

    assert result.errors == [
        "Name is required.",
        "Phone is required.",
        "Street address is required.",
        "City is required.",
        "ZIP is required.",
    ]


def test_optional_fields_are_trimmed_and_blank_becomes_none():
    body = _payload(
        customer={"name": " Jane Doe ", "phone": "555.123.4567", "email": "  "},
        address={"line1": "1 Main St", "line2": " Apt 4 ", "city": "Provo", "state": " ID ", "zip": 84601},
        notes="   ",
    )

    cleaned = validate_booking_request(body, default_state="UT").cleaned

    assert cleaned["name"] == "Jane Doe"
    assert cleaned["email"] is None
    assert cleaned["line2"] == "Apt 4"
    assert cleaned["state"] == "ID"
    assert cleaned["zip"] == "84601"
    assert cleaned["notes"] is None


def test_numeric_fields_are_rendered_as_plain_text():
    body = _payload(
        customer={"name": "Jane Doe", "phone": 5551234567.0},
        address={"line1": "1 Main St", "city": "Provo", "zip": 84601.0},
    )

    cleaned = validate_booking_request(body, default_state="UT").cleaned

    assert cleaned["phone"] == "5551234567"
    assert cleaned["zip"] == "84601"


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf"), True])
def test_non_finite_and_boolean_values_count_as_missing(value):
    body = _payload(
        customer={"name": "Jane Doe", "phone": value},
        address={"line1": "1 Main St", "city": "Provo", "zip": value},
    )

    result = validate_booking_request(body, default_state="UT")

    assert result.errors == ["Phone is required.", "ZIP is required."]


def test_blank_state_uses_default():
    body = _payload(address={"line1": "1 Main St", "city": "Provo", "zip": "84601", "state": ""})

    assert validate_booking_request(body, default_state="NV").cleaned["state"] == "NV"


@pytest.mark.parametrize("raw", ["(555) 123-4567", "+1 555 123 4567", "5551234567", "ext. 12", 5551234567, 5551234567.0])
def test_phone_normalization_is_idempotent(raw):
    once = normalize_phone(raw)

    assert once.isdigit()
    assert normalize_phone(once) == once
