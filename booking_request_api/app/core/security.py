"""
Shared-secret authorization for the admin routes.

Admin callers present a static API key, either in the ``X-Admin-Key``
header or as ``Authorization: Bearer <key>``.  The key is compared
with the value configured in ``Settings.admin_api_key`` by an
``AdminKeyGuard`` instance created by ``create_app`` and stored on
``app.state``; nothing here reads the environment directly.  When no
key is configured every admin request is refused.
"""

import hmac
import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-Admin-Key"


class AdminAuthError(Exception):
    """Raised when an admin key is missing, wrong or not configured."""


class AdminKeyGuard:
    """Compare caller-supplied secrets against the configured admin key."""

    def __init__(self, api_key: Optional[str]) -> None:
        self._api_key = api_key or ""

    @property
    def enabled(self) -> bool:
        return bool(self._api_key)

    def check(self, supplied: Optional[str]) -> None:
        """Raise ``AdminAuthError`` unless ``supplied`` matches the key.

        Uses a constant-time comparison.
        """
        if not self._api_key:
            raise AdminAuthError("Admin access is not configured")
        if not supplied:
            raise AdminAuthError("Missing admin key")
        if not hmac.compare_digest(supplied.encode("utf-8"), self._api_key.encode("utf-8")):
            raise AdminAuthError("Invalid admin key")


bearer = HTTPBearer(auto_error=False)


def get_admin_guard(request: Request) -> AdminKeyGuard:
    return request.app.state.admin_guard


def require_admin(
    x_admin_key: Optional[str] = Header(default=None, alias=ADMIN_KEY_HEADER),
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer),
    guard: AdminKeyGuard = Depends(get_admin_guard),
) -> None:
    """Dependency that lets the request through only with a valid admin key.

    The ``X-Admin-Key`` header takes precedence over a bearer token.
    Failures are reported as HTTP 401.
    """
    supplied = x_admin_key or (credentials.credentials if credentials else None)
    try:
        guard.check(supplied)
    except AdminAuthError as e:
        logger.warning("Refused admin request: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized.",
            headers={"WWW-Authenticate": "Bearer"},
        )
