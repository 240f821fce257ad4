"""
Validation and normalization of public booking submissions.

``validate_booking_request`` takes the decoded JSON body as-is (it may
be any JSON value) and returns every problem it finds instead of
stopping at the first one, together with the trimmed and normalized
fields.  It has no side effects; the caller must reject the request
when ``errors`` is non-empty.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from booking_request_api.app.schemas.booking_request import TIME_WINDOWS, BookingRequestCreate

# Shape only: 2024-02-31 passes.
ISO_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")
NON_DIGIT_RE = re.compile(r"[^0-9]")


@dataclass
class ValidationResult:
    errors: List[str] = field(default_factory=list)
    cleaned: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_record(self) -> BookingRequestCreate:
        """Build the insertable record; only valid for an error-free result."""
        if self.errors:
            raise ValueError("Cannot build a record from an invalid submission")
        return BookingRequestCreate(**self.cleaned)


def _section(body: Any, key: str) -> Dict[str, Any]:
    value = body.get(key) if isinstance(body, dict) else None
    return value if isinstance(value, dict) else {}


def _text(value: Any) -> str:
    """Trimmed text for a submitted field; non-text values count as empty.

    Numbers are accepted and converted, so ``"zip": 84601`` works.
    Whole floats lose their ``.0``; ``NaN`` and infinities count as
    empty.
    """
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, bool):
        return ""
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            return ""
        return str(int(value)) if value.is_integer() else str(value)
    return ""


def _optional_text(value: Any) -> Optional[str]:
    return _text(value) or None


def normalize_phone(phone: Any) -> str:
    """Strip everything but ASCII digits.  Idempotent."""
    return NON_DIGIT_RE.sub("", _text(phone))


def is_valid_iso_date(value: Any) -> bool:
    return isinstance(value, str) and ISO_DATE_RE.fullmatch(value) is not None


def is_valid_window(value: Any) -> bool:
    return isinstance(value, str) and value in TIME_WINDOWS


def validate_booking_request(body: Any, default_state: str) -> ValidationResult:
    """Validate a raw submission and normalize its fields.

    Parameters
    ----------
    body : Any
        Decoded JSON request body.  Anything that is not an object at
        a given level is treated as if that level were missing.
    default_state : str
        Region code stored when ``address.state`` is absent or blank.

    Returns
    -------
    ValidationResult
        ``errors`` lists human-readable messages (empty when valid);
        ``cleaned`` holds the normalized fields named after the
        ``booking_requests`` columns.
    """
    errors: List[str] = []

    preferences = _section(body, "preferences")
    customer = _section(body, "customer")
    address = _section(body, "address")

    dates = preferences.get("dates")
    windows = preferences.get("windows")

    if not isinstance(dates, list) or len(dates) < 1:
        errors.append("Select at least 1 day.")
    if not isinstance(windows, list) or len(windows) < 1:
        errors.append("Select at least 1 time window.")

    if isinstance(dates, list):
        for d in dates:
            if not is_valid_iso_date(d):
                errors.append(f"Invalid date: {d}")

    if isinstance(windows, list):
        for w in windows:
            if not is_valid_window(w):
                errors.append(f"Invalid window: {w}")

    name = _text(customer.get("name"))
    phone = normalize_phone(customer.get("phone"))
    email = _optional_text(customer.get("email"))

    line1 = _text(address.get("line1"))
    line2 = _optional_text(address.get("line2"))
    city = _text(address.get("city"))
    state = _text(address.get("state")) or default_state
    zip_code = _text(address.get("zip"))

    notes = _optional_text(body.get("notes") if isinstance(body, dict) else None)

    if not name:
        errors.append("Name is required.")
    if not phone:
        errors.append("Phone is required.")
    if not line1:
        errors.append("Street address is required.")
    if not city:
        errors.append("City is required.")
    if not zip_code:
        errors.append("ZIP is required.")

    cleaned = {
        "preferred_dates": dates if isinstance(dates, list) else [],
        "preferred_windows": windows if isinstance(windows, list) else [],
        "name": name,
        "phone": phone,
        "email": email,
        "line1": line1,
        "line2": line2,
        "city": city,
        "state": state,
        "zip": zip_code,
        "notes": notes,
    }
    return ValidationResult(errors=errors, cleaned=cleaned)
