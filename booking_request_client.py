"""Booking Request API client.

A thin wrapper around the HTTP API served by
``booking_request_api.app.main``.  It is used by the admin command
line tool (``manage_requests.py``) and can be embedded in other
services that need to submit or manage booking requests.

The client exposes:

* :meth:`submit_request` – post a new booking request.
* :meth:`list_requests` – list requests with a given status (admin).
* :meth:`get_request` – fetch a single request by id (admin).
* :meth:`update_status` – change the status of a request (admin).
* :meth:`health` – query the liveness probe.

Admin calls need the shared admin key, sent in the ``X-Admin-Key``
header.  Initialise the client with ``admin_key='<key>'``.

Every method returns a tuple ``(data, error)``.  On success ``error``
is ``None``; on failure ``data`` is empty and ``error`` is a
dictionary with ``status_code`` and ``message``.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-Admin-Key"

Error = Dict[str, Any]


class BookingRequestClient:
    """Client for the booking request API."""

    def __init__(
        self,
        *,
        base_url: str,
        admin_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Base URL for the API, e.g. ``http://localhost:3001``.
            admin_key: Optional admin key sent with every request.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.admin_key = admin_key
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------
    # Low level HTTP helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _error_message(response: requests.Response) -> str:
        try:
            err_json = response.json()
        except ValueError:
            return response.text
        if isinstance(err_json, dict):
            if err_json.get("errors"):
                return "; ".join(str(e) for e in err_json["errors"])
            return str(err_json.get("error") or err_json.get("detail") or err_json)
        return str(err_json)

    def _request(
        self, method: str, path: str, *, params: Dict[str, Any] | None = None,
        json_body: Any | None = None
    ) -> Tuple[Optional[Any], Optional[Error]]:
        """Perform an HTTP request to the API.

        Args:
            method: HTTP method (``GET``, ``POST``, ``PATCH``).
            path: Path relative to :attr:`base_url`.
            params: Query parameters to include in the request.
            json_body: JSON body to send with the request.
        Returns:
            A tuple ``(data, error)``.
        """
        url = f"{self.base_url}{path}"
        headers: Dict[str, str] = {}
        if self.admin_key:
            headers[ADMIN_KEY_HEADER] = self.admin_key
        try:
            logger.debug("Sending %s request to %s", method, url)
            response = self.session.request(
                method=method,
                url=url,
                params=params,
                json=json_body,
                headers=headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            if response.content:
                return response.json(), None
            return None, None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = self._error_message(exc.response) if exc.response is not None else ""
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    # ------------------------------------------------------------------
    # Public operations
    # ------------------------------------------------------------------
    def submit_request(self, payload: Dict[str, Any]) -> Tuple[Optional[int], Optional[Error]]:
        """Submit a booking request.

        Args:
            payload: Body with ``preferences``, ``customer``, ``address``
                and optional ``notes``.
        Returns:
            A tuple ``(request_id, error)``.
        """
        data, error = self._request("POST", "/booking-request", json_body=payload)
        if error:
            return None, error
        return (data or {}).get("request_id"), None

    def health(self) -> Tuple[bool, Optional[Error]]:
        data, error = self._request("GET", "/health")
        if error:
            return False, error
        return bool((data or {}).get("ok")), None

    # ------------------------------------------------------------------
    # Admin operations
    # ------------------------------------------------------------------
    def list_requests(
        self, status: str = "requested", limit: Optional[int] = None
    ) -> Tuple[List[Dict[str, Any]], Optional[Error]]:
        """List booking requests with a given status, newest first.

        Returns:
            A tuple ``(requests, error)``.  ``requests`` is empty on
            failure.
        """
        params: Dict[str, Any] = {"status": status}
        if limit is not None:
            params["limit"] = limit
        data, error = self._request("GET", "/admin/requests", params=params)
        if error:
            return [], error
        return (data or {}).get("requests", []), None

    def get_request(self, request_id: Any) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        data, error = self._request("GET", f"/admin/requests/{request_id}")
        if error:
            return None, error
        return (data or {}).get("request"), None

    def update_status(self, request_id: Any, status: str) -> Tuple[bool, Optional[Error]]:
        """Change the status of a booking request.

        Returns:
            A tuple ``(success, error)``.
        """
        data, error = self._request("PATCH", f"/admin/requests/{request_id}", json_body={"status": status})
        if error:
            return False, error
        return bool((data or {}).get("ok")), None
